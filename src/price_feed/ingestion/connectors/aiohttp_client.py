"""Concrete HTTP client implementation for async requests.

Wraps aiohttp behind IHttpClient abstraction.
"""

from typing import Any

import aiohttp

from price_feed.ingestion.config.value_objects import HttpClientConfig
from price_feed.ingestion.ports.http import HttpResponse, IHttpClient


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp.

    Every request carries an explicit deadline: the per-call ``timeout``
    when given, otherwise ``config.timeout``.
    """

    def __init__(self, config: HttpClientConfig):
        self.config = config
        self._session: aiohttp.ClientSession | None = None

    def _timeout(self, timeout: float | None) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=timeout or self.config.timeout,
            connect=self.config.connect_timeout,
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout(None))
        return self._session

    async def get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute GET request.

        Args:
            url: Full URL
            params: Query parameters
            headers: HTTP headers
            timeout: Request timeout override (seconds)

        Returns:
            HttpResponse with JSON-decoded body on 200, raw text otherwise
            (undecodable bytes replaced, so a bad error body never masks the status)

        Raises:
            aiohttp.ClientError: On connection errors
            ValueError: When a 200 body is not valid JSON
            asyncio.TimeoutError: When the deadline expires
        """
        session = await self._get_session()

        async with session.get(
            url,
            params=params,
            headers=headers,
            timeout=self._timeout(timeout),
        ) as resp:
            if resp.status == 200:
                body = await resp.json(content_type=None)
            else:
                body = await resp.text(errors="replace")
            return HttpResponse(
                status_code=resp.status,
                body=body,
                headers=dict(resp.headers),
                url=str(resp.url),
            )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            self._session = None
