"""Provider-native ingestion models."""

from price_feed.ingestion.models.quote import Quote

__all__ = ["Quote"]
