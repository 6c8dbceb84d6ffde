"""
Symbol mapping for Finnhub.

Internal identifiers are accepted with or without a ``/`` separator between
base and quote asset; crypto pairs route to Binance USDT books on Finnhub.
"""

from types import MappingProxyType

FINNHUB_SYMBOL_MAP = MappingProxyType(
    {
        "BTCUSD": "BINANCE:BTCUSDT",
        "BTC/USD": "BINANCE:BTCUSDT",
        "ETHUSD": "BINANCE:ETHUSDT",
        "ETH/USD": "BINANCE:ETHUSDT",
    }
)


def build_symbol_map(extra: dict[str, str] | None = None) -> MappingProxyType:
    """
    Built-in mapping merged with configured extras (extras win).

    Args:
        extra: Additional internal -> Finnhub mappings from configuration

    Returns:
        Read-only mapping
    """
    merged = dict(FINNHUB_SYMBOL_MAP)
    if extra:
        merged.update(extra)
    return MappingProxyType(merged)
