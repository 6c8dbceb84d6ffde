"""Internal symbol -> provider symbol resolution."""

from price_feed.ingestion.symbol_resolution.resolver import SymbolResolver

__all__ = ["SymbolResolver"]
