"""Ports for capability-based ingestion design."""

from .data_ports import IQuoteSource, ISymbolRegistry, ITickStore  # noqa: F401
from .http import HttpResponse, IHttpClient  # noqa: F401
from .validators import IResponseValidator, ValidationResult  # noqa: F401

__all__ = [
    "IHttpClient",
    "HttpResponse",
    "IResponseValidator",
    "ValidationResult",
    "IQuoteSource",
    "ISymbolRegistry",
    "ITickStore",
]
