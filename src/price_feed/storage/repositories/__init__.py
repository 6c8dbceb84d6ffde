"""Repositories over the PostgreSQL store."""

from price_feed.storage.repositories.price_history import PriceHistoryRepository
from price_feed.storage.repositories.symbols import SymbolRepository

__all__ = ["PriceHistoryRepository", "SymbolRepository"]
