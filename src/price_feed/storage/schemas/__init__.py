"""Storage schemas."""

from price_feed.storage.schemas.time_series import Tick

__all__ = ["Tick"]
