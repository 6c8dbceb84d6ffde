"""Time-series data models for storage layer.

Tick: one derived market observation (synthetic bid/ask around the quoted
mid, volatility score, regime label) for a symbol at a point in time.

Stored in: price_history (append-only; the writer never upserts, so
overlapping batches for the same symbol/timestamp simply interleave).
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

from price_feed.common.utils.date_utils import to_iso_millis
from price_feed.shared.models.enums import MarketRegime

VOLATILITY_MIN = 0.1
VOLATILITY_MAX = 10.0


class Tick(BaseModel):
    """Derived tick, immutable once created."""

    symbol: str = Field(..., min_length=1, description="Internal symbol (e.g., BTCUSD)")
    bid: float = Field(..., gt=0, description="Synthetic bid below mid")
    ask: float = Field(..., gt=0, description="Synthetic ask above mid")
    mid: float = Field(..., gt=0, description="Provider current price")
    volatility: float = Field(..., ge=VOLATILITY_MIN, le=VOLATILITY_MAX)
    regime: MarketRegime
    timestamp: datetime = Field(..., description="Derivation time (UTC)")
    timeframe: str = Field(..., min_length=1, description="Granularity tag (e.g., 1m)")
    source: str = Field(..., min_length=1, description="Provider identifier")

    @model_validator(mode="after")
    def check_spread_brackets_mid(self) -> "Tick":
        if not self.bid < self.mid < self.ask:
            raise ValueError(
                f"Tick must satisfy bid < mid < ask, got "
                f"bid={self.bid} mid={self.mid} ask={self.ask}"
            )
        return self

    class Config:
        frozen = True

    @property
    def spread(self) -> float:
        return self.ask - self.bid

    def to_payload(self) -> dict[str, Any]:
        """JSON shape returned to API callers."""
        return {
            "symbol": self.symbol,
            "bid": self.bid,
            "ask": self.ask,
            "mid": self.mid,
            "volatility": self.volatility,
            "regime": self.regime.value,
            "timestamp": to_iso_millis(self.timestamp),
            "timeframe": self.timeframe,
            "source": self.source,
        }

    def to_record(self) -> dict[str, Any]:
        """Row persisted to price_history (source is not a column there)."""
        return {
            "symbol": self.symbol,
            "bid": self.bid,
            "ask": self.ask,
            "mid": self.mid,
            "volatility": self.volatility,
            "regime": self.regime.value,
            "timestamp": self.timestamp,
            "timeframe": self.timeframe,
        }
