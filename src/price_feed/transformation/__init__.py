"""
Transformation layer: turns provider quotes into derived ticks.
"""

from price_feed.transformation.tick_deriver import (
    SpreadSimulator,
    TickDeriver,
    classify_regime,
    compute_volatility,
)

__all__ = [
    "SpreadSimulator",
    "TickDeriver",
    "classify_regime",
    "compute_volatility",
]
