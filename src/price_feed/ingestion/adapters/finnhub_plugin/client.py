"""
Finnhub quote client.

One network request per call, no retries: a failed fetch is final for that
symbol in the current batch. Retry policy belongs to whoever triggers the
next batch.
"""

import asyncio

import aiohttp
from pydantic import ValidationError

from price_feed.ingestion.adapters.finnhub_plugin.exceptions import (
    EmptyDataError,
    HttpStatusError,
    TransportError,
)
from price_feed.ingestion.adapters.finnhub_plugin.response_validator import (
    EMPTY_DATA,
    FinnhubResponseValidator,
)
from price_feed.ingestion.config.value_objects import FinnhubConfig
from price_feed.ingestion.models.quote import Quote
from price_feed.ingestion.ports import IHttpClient, IResponseValidator
from price_feed.infrastructure.observability import get_ingestion_logger

logger = get_ingestion_logger("finnhub-client", provider="finnhub")

ENDPOINT = "quote"


class FinnhubClient:
    """Async client for the Finnhub quote endpoint.

    Dependencies injected (not instantiated):
    - http_client: Executes HTTP requests
    - response_validator: Classifies decoded bodies
    """

    def __init__(
        self,
        config: FinnhubConfig,
        http_client: IHttpClient,
        response_validator: IResponseValidator | None = None,
    ):
        self.config = config
        self.http_client = http_client
        self.response_validator = response_validator or FinnhubResponseValidator()

    async def fetch_quote(self, provider_symbol: str) -> Quote:
        """Fetch one point-in-time quote.

        Args:
            provider_symbol: Finnhub symbol (e.g., "BINANCE:BTCUSDT")

        Returns:
            Validated Quote with a positive current price

        Raises:
            HttpStatusError: Non-200 response
            EmptyDataError: Provider reported no data (zero current price)
            TransportError: Network error, timeout, or unparseable body
        """
        params = {"symbol": provider_symbol, "token": self.config.api_key}
        log = logger.bind(symbol=provider_symbol)
        log.debug("fetching_quote")

        try:
            response = await self.http_client.get(
                self.config.quote_url,
                params=params,
                timeout=self.config.http_config.timeout,
            )
        except asyncio.TimeoutError as e:
            log.error("quote_timeout", timeout=self.config.http_config.timeout)
            raise TransportError(
                f"Timed out fetching quote for {provider_symbol}",
                symbol=provider_symbol,
            ) from e
        except (aiohttp.ClientError, ValueError) as e:
            log.error("quote_transport_error", error=str(e))
            raise TransportError(
                f"Transport error fetching quote for {provider_symbol}: {e}",
                symbol=provider_symbol,
            ) from e

        if response.status_code != 200:
            log.error("quote_http_error", status_code=response.status_code)
            raise HttpStatusError(
                f"HTTP {response.status_code} fetching quote for {provider_symbol}",
                symbol=provider_symbol,
                status_code=response.status_code,
            )

        result = self.response_validator.validate(ENDPOINT, response.body)
        if not result.is_valid:
            if result.error_code == EMPTY_DATA:
                log.warning("quote_empty", body=response.body)
                raise EmptyDataError(
                    f"No quote data for {provider_symbol}: {result.error_message}",
                    symbol=provider_symbol,
                    status_code=response.status_code,
                )
            log.error("quote_invalid", error=result.error_message)
            raise TransportError(
                f"Invalid quote body for {provider_symbol}: {result.error_message}",
                symbol=provider_symbol,
                status_code=response.status_code,
            )

        try:
            quote = Quote.model_validate(response.body)
        except ValidationError as e:
            log.error("quote_parse_error", error=str(e))
            raise TransportError(
                f"Could not parse quote for {provider_symbol}: {e}",
                symbol=provider_symbol,
                status_code=response.status_code,
            ) from e

        log.info(
            "quote_fetched",
            price=quote.current_price,
            high=quote.high,
            low=quote.low,
        )
        return quote
