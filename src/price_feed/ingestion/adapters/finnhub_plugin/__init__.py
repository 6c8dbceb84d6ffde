"""
Finnhub quote provider plugin.

Components:
- client: FinnhubClient, one GET per quote, no retries
- exceptions: qualified fetch failures (http_error, empty_data, transport_error)
- response_validator: decides whether a decoded body carries a quote
- mappers: internal symbol -> Finnhub symbol table
"""

from price_feed.ingestion.adapters.finnhub_plugin.client import FinnhubClient
from price_feed.ingestion.adapters.finnhub_plugin.exceptions import (
    EmptyDataError,
    FinnhubAPIError,
    HttpStatusError,
    TransportError,
)
from price_feed.ingestion.adapters.finnhub_plugin.mappers import FINNHUB_SYMBOL_MAP
from price_feed.ingestion.adapters.finnhub_plugin.response_validator import (
    FinnhubResponseValidator,
)

__all__ = [
    "FINNHUB_SYMBOL_MAP",
    "EmptyDataError",
    "FinnhubAPIError",
    "FinnhubClient",
    "FinnhubResponseValidator",
    "HttpStatusError",
    "TransportError",
]
