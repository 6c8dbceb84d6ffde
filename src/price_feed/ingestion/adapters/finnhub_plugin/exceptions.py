"""
Finnhub API Exception Hierarchy

One exception type per qualified fetch failure so the workflow can record
a per-symbol error without inspecting messages.
"""


class FinnhubAPIError(Exception):
    """Base exception for all Finnhub quote fetch failures."""

    reason = "fetch_error"

    def __init__(
        self,
        message: str,
        symbol: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.symbol = symbol
        self.status_code = status_code


class HttpStatusError(FinnhubAPIError):
    """Non-success HTTP status from the quote endpoint."""

    reason = "http_error"


class EmptyDataError(FinnhubAPIError):
    """Provider answered but reported no data (zero current price)."""

    reason = "empty_data"


class TransportError(FinnhubAPIError):
    """Network failure, timeout, or undecodable body."""

    reason = "transport_error"
