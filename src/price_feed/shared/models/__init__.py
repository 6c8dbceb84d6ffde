"""Shared domain models."""

from price_feed.shared.models.enums import AssetClass, DataVenue, MarketRegime

__all__ = [
    "AssetClass",
    "DataVenue",
    "MarketRegime",
]
