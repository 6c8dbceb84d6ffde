"""
Spread, volatility and regime derivation.

All values are heuristics computed from one top-of-book quote:

- spread: a uniform draw between ``min_pct`` and ``max_pct`` of mid, split
  symmetrically. The draw is random on purpose; it stands in for execution
  cost without an order book. Inject a seeded ``random.Random`` to make it
  reproducible.
- volatility: daily high-low range as a percentage of mid, clamped to
  [0.1, 10]; 0.5 when the provider has no range.
- regime: ``range`` by default, ``trend`` on a daily move beyond +/-1.5%,
  then overwritten by ``high_vol`` (> 2) or ``low_vol`` (< 0.3).
"""

import random
from collections.abc import Callable
from datetime import datetime

from price_feed.common.utils.date_utils import utc_now
from price_feed.ingestion.models.quote import Quote
from price_feed.infrastructure.observability import get_processing_logger
from price_feed.shared.models.enums import MarketRegime
from price_feed.storage.schemas.time_series import VOLATILITY_MAX, VOLATILITY_MIN, Tick

logger = get_processing_logger("tick-deriver")

DEFAULT_SPREAD_MIN_PCT = 0.0002
DEFAULT_SPREAD_MAX_PCT = 0.0010

DEFAULT_VOLATILITY = 0.5
VOLATILITY_SCALE = 100.0

TREND_THRESHOLD_PCT = 1.5
HIGH_VOL_THRESHOLD = 2.0
LOW_VOL_THRESHOLD = 0.3


class SpreadSimulator:
    """Synthesizes a symmetric bid/ask around mid.

    Args:
        min_pct: Smallest spread as a fraction of mid (0.0002 = 0.02%)
        max_pct: Largest spread as a fraction of mid
        rng: Random source; anything with ``random() -> float in [0, 1)``
    """

    def __init__(
        self,
        min_pct: float = DEFAULT_SPREAD_MIN_PCT,
        max_pct: float = DEFAULT_SPREAD_MAX_PCT,
        rng: random.Random | None = None,
    ):
        if min_pct <= 0:
            raise ValueError(f"min_pct must be positive, got {min_pct}")
        if max_pct < min_pct:
            raise ValueError(f"max_pct ({max_pct}) must be >= min_pct ({min_pct})")
        self.min_pct = min_pct
        self.max_pct = max_pct
        self.rng = rng or random.Random()

    def draw_spread_pct(self) -> float:
        return self.min_pct + self.rng.random() * (self.max_pct - self.min_pct)

    def apply(self, mid: float) -> tuple[float, float]:
        """Return ``(bid, ask)`` with ``bid < mid < ask``."""
        half_spread = mid * self.draw_spread_pct() / 2
        return mid - half_spread, mid + half_spread


def compute_volatility(quote: Quote, mid: float) -> float:
    """Daily range as a percentage of mid, clamped to [0.1, 10]."""
    if quote.high > 0 and quote.low > 0:
        daily_range = (quote.high - quote.low) / mid
        return min(VOLATILITY_MAX, max(VOLATILITY_MIN, daily_range * VOLATILITY_SCALE))
    return DEFAULT_VOLATILITY


def classify_regime(percent_change: float | None, volatility: float) -> MarketRegime:
    """Coarse regime label.

    Direction does not matter for ``trend``. The volatility overrides are
    applied last and replace a trend label when both conditions hold.
    """
    regime = MarketRegime.RANGE
    if percent_change is not None and abs(percent_change) > TREND_THRESHOLD_PCT:
        regime = MarketRegime.TREND

    if volatility > HIGH_VOL_THRESHOLD:
        regime = MarketRegime.HIGH_VOL
    elif volatility < LOW_VOL_THRESHOLD:
        regime = MarketRegime.LOW_VOL

    return regime


class TickDeriver:
    """Builds a Tick from a valid Quote.

    Args:
        spread_simulator: Source of the synthetic bid/ask
        timeframe: Granularity tag stamped on every tick
        source: Provider identifier stamped on every tick
        clock: Returns the derivation time (UTC)
    """

    def __init__(
        self,
        spread_simulator: SpreadSimulator | None = None,
        timeframe: str = "1m",
        source: str = "finnhub",
        clock: Callable[[], datetime] = utc_now,
    ):
        self.spread_simulator = spread_simulator or SpreadSimulator()
        self.timeframe = timeframe
        self.source = source
        self.clock = clock

    def derive(self, symbol: str, quote: Quote) -> Tick:
        mid = quote.current_price
        bid, ask = self.spread_simulator.apply(mid)
        volatility = compute_volatility(quote, mid)
        regime = classify_regime(quote.percent_change, volatility)

        tick = Tick(
            symbol=symbol,
            bid=bid,
            ask=ask,
            mid=mid,
            volatility=volatility,
            regime=regime,
            timestamp=self.clock(),
            timeframe=self.timeframe,
            source=self.source,
        )
        logger.debug(
            "tick_derived",
            symbol=symbol,
            mid=mid,
            volatility=round(volatility, 4),
            regime=regime.value,
        )
        return tick
