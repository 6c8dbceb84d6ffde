"""HTTP communication abstractions for provider plugins.

Separates the HTTP transport layer from provider logic (validation,
error classification). Allows swapping in fakes in tests.
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class HttpResponse:
    """HTTP response data container."""

    status_code: int
    body: Any  # JSON-decoded response body, or raw text for non-200
    headers: dict[str, str]
    url: str


class IHttpClient(Protocol):
    """Abstraction for HTTP client.

    Single Responsibility: Execute HTTP requests and return responses.
    Does NOT handle:
    - Response validation
    - Error classification
    - Credentials
    """

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute GET request.

        Raises:
            aiohttp.ClientError: On network or connection errors
            asyncio.TimeoutError: When the per-call deadline expires
            ValueError: When a 200 body is not valid JSON
        """
        ...

    async def close(self) -> None:
        """Release pooled connections."""
        ...
