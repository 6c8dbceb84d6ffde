"""
Shared enumerations for the price feed.

Regime labels are part of the contract with the trading simulator, which
reads them back from ``price_history``.
"""

import enum


# ============================================================================
# ASSET CLASSIFICATION
# ============================================================================
class AssetClass(str, enum.Enum):
    """Asset class as stored in the ``symbols.type`` column."""

    CRYPTO = "crypto"
    EQUITY = "equity"
    FOREX = "forex"
    COMMODITY = "commodity"
    INDEX = "index"


# ============================================================================
# DATA LINEAGE
# ============================================================================
class DataVenue(str, enum.Enum):
    """Upstream source a tick was derived from."""

    FINNHUB = "finnhub"
    NO_DATA = "NO_DATA"  # Response tag when nothing could be fetched


# ============================================================================
# MARKET REGIME
# ============================================================================
class MarketRegime(str, enum.Enum):
    """
    Coarse qualitative label for current market behaviour.

    NEWS_RISK belongs to the simulator's vocabulary but is never assigned
    by the quote pipeline.
    """

    TREND = "trend"
    RANGE = "range"
    HIGH_VOL = "high_vol"
    LOW_VOL = "low_vol"
    NEWS_RISK = "news_risk"
