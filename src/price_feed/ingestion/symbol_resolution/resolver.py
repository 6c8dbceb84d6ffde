"""
SymbolResolver maps internal trading-pair identifiers to provider symbols
and decides the symbol universe for a batch.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from price_feed.infrastructure.observability import get_ingestion_logger
from price_feed.ingestion.ports.data_ports import ISymbolRegistry
from price_feed.shared.models.enums import AssetClass

logger = get_ingestion_logger("symbol-resolver")

SEPARATOR = "/"


class SymbolResolver:
    """Pure lookup over an immutable mapping, plus default-universe fallback.

    Args:
        symbol_map: Internal identifier -> provider symbol
        default_symbols: Built-in universe used when the registry is empty
        registry: Active-symbol registry consulted when the caller names no symbols
        asset_class: Asset class the registry is filtered to
    """

    def __init__(
        self,
        symbol_map: Mapping[str, str],
        default_symbols: Sequence[str],
        registry: ISymbolRegistry | None = None,
        asset_class: AssetClass = AssetClass.CRYPTO,
    ):
        self.symbol_map = symbol_map
        self.default_symbols = tuple(default_symbols)
        self.registry = registry
        self.asset_class = asset_class

    @staticmethod
    def normalize(symbol: str) -> str:
        """Strip the base/quote separator: ``BTC/USD`` -> ``BTCUSD``."""
        return symbol.replace(SEPARATOR, "")

    def resolve(self, symbol: str) -> str | None:
        """Provider symbol for an internal identifier, or None when unknown.

        The normalized form is preferred over the original spelling.
        """
        normalized = self.normalize(symbol)
        return self.symbol_map.get(normalized) or self.symbol_map.get(symbol)

    async def resolve_universe(self, requested: Sequence[str] | None = None) -> list[str]:
        """Symbols to process, in order.

        Caller-supplied symbols win; otherwise the registry's active symbols
        for the configured asset class; otherwise the built-in defaults.
        """
        if requested:
            return list(requested)

        if self.registry is not None:
            try:
                active = await self.registry.find_active_symbols(self.asset_class)
            except Exception as e:
                logger.warning(
                    "symbol_registry_unavailable",
                    asset_class=self.asset_class.value,
                    error=str(e),
                )
                active = []
            if active:
                logger.info("universe_from_registry", symbols=active)
                return list(active)

        logger.info("universe_from_defaults", symbols=list(self.default_symbols))
        return list(self.default_symbols)
