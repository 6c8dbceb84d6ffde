"""
Price feed endpoint.

POST (or GET) /price-feed runs one batch and returns ticks keyed by symbol.
The optional JSON body ``{"symbols": [...]}`` picks the universe; anything
else falls back to the registry/default universe.

Status codes:
    200: at least one tick
    503: no tick at all (source NO_DATA, shouldPauseTrading true)
    500: missing configuration, or any unexpected failure

Per-symbol ``errors`` values:
    "Failed to fetch quote": the provider call or tick derivation failed
    "Unknown symbol": no provider mapping; earlier deployments reported
        these as "Failed to fetch quote" too, so match on the key, not the text

CORS is answered here rather than by middleware: every response carries
``CORS_HEADERS`` and OPTIONS (including browser preflights) gets an empty
200.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from price_feed.config.state import ConfigurationError
from price_feed.dependency_container import PriceFeedDependencyContainer
from price_feed.infrastructure.observability import get_api_logger
from price_feed_api.dependencies import get_container

logger = get_api_logger("price-feed-route")

router = APIRouter()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


class PriceFeedRequest(BaseModel):
    """Inbound body."""

    symbols: list[str] = Field(default_factory=list)


async def parse_symbols(request: Request) -> list[str]:
    """Requested symbols, or an empty list when the body is absent or unusable."""
    raw = await request.body()
    if not raw:
        return []
    try:
        body = PriceFeedRequest.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("request_body_ignored", error_count=e.error_count())
        return []
    return body.symbols


def json_response(payload: dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=payload, status_code=status_code, headers=CORS_HEADERS)


@router.options("/price-feed")
async def price_feed_preflight() -> Response:
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route("/price-feed", methods=["GET", "POST"])
async def price_feed(
    request: Request,
    container: PriceFeedDependencyContainer = Depends(get_container),
) -> JSONResponse:
    try:
        try:
            workflow = container.create_workflow()
        except ConfigurationError as e:
            logger.error("configuration_error", error=str(e))
            return json_response(
                {"error": str(e), "shouldPauseTrading": True}, status_code=500
            )

        symbols = await parse_symbols(request)
        result = await workflow.run(symbols)
        status_code = 503 if result.should_pause_trading else 200
        return json_response(result.to_payload(), status_code=status_code)
    except Exception:
        logger.exception("price_feed_unexpected_error")
        return json_response(
            {"error": "Internal server error", "shouldPauseTrading": True},
            status_code=500,
        )
