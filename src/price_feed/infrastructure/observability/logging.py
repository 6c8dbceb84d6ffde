"""
Structured logging for the price feed.

Every entry is a flat JSON object tagged with where it came from:

    {"app": "price-feed", "layer": "ingestion", "component": "finnhub-client",
     "module": "ingestion", "symbol": "BINANCE:BTCUSDT", "event": "quote_fetched"}

Layers:
    - infrastructure: database pool, dependency container
    - ingestion: symbol resolution, quote fetching
    - pipeline: batch workflow and tick sink
    - processing: spread/volatility/regime derivation
    - storage: repositories
    - api: FastAPI routes and the CLI
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor

Layer = Literal[
    "infrastructure", "ingestion", "pipeline", "processing", "storage", "api"
]

APP_NAME = "price-feed"

SEVERITY = {
    "debug": "DEBUG",
    "info": "INFO",
    "warning": "WARNING",
    "error": "ERROR",
    "critical": "CRITICAL",
}


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["app"] = APP_NAME
    return event_dict


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Cloud-logging style ``severity`` next to structlog's ``level``."""
    level = event_dict.get("level")
    if level:
        event_dict["severity"] = SEVERITY.get(level, "INFO")
    return event_dict


def _processors(json_logs: bool, include_timestamp: bool) -> list[Processor]:
    chain: list[Processor] = []
    if include_timestamp:
        chain.append(structlog.processors.TimeStamper(fmt="iso"))
    chain += [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        chain.append(structlog.processors.JSONRenderer())
    else:
        chain.append(
            structlog.dev.ConsoleRenderer(
                colors=True, exception_formatter=structlog.dev.plain_traceback
            )
        )
    return chain


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Route structlog through stdlib logging on stdout.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL; unknown names fall back to INFO
        json_logs: JSON lines when True, colored console output otherwise
        include_timestamp: Prepend an ISO ``timestamp`` to every entry
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=_processors(json_logs, include_timestamp),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Logger with layer/component context already bound.

    Usage:
        >>> log = get_logger("ingestion", layer="ingestion", component="finnhub-client")
        >>> log.info("quote_fetched", symbol="BINANCE:BTCUSDT", price=50000.0)
    """
    context: dict[str, Any] = {}
    if layer:
        context["layer"] = layer
    if component:
        context["component"] = component
    if name:
        context["module"] = name
    context.update(initial_context)

    logger = structlog.get_logger(name)
    return logger.bind(**context) if context else logger


def _layer_logger(layer: Layer, component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    return get_logger(layer, layer=layer, component=component, **context)


# ============================================================================
# Layer-Specific Logger Factories
# ============================================================================


def get_infrastructure_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    return _layer_logger("infrastructure", component, **context)


def get_ingestion_logger(
    component: str,
    provider: str | None = None,
    **context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Usage:
        >>> log = get_ingestion_logger("finnhub-client", provider="finnhub")
        >>> log.info("fetching_quote", symbol="BINANCE:BTCUSDT")
    """
    if provider:
        context = {"provider": provider, **context}
    return _layer_logger("ingestion", component, **context)


def get_pipeline_logger(
    component: str = "price-feed-workflow", **context: Any
) -> structlog.stdlib.BoundLogger:
    return _layer_logger("pipeline", component, **context)


def get_processing_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    return _layer_logger("processing", component, **context)


def get_storage_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """
    Usage:
        >>> log = get_storage_logger("price-history-repository", table="price_history")
        >>> log.info("batch_inserted", records=2)
    """
    return _layer_logger("storage", component, **context)


def get_api_logger(component: str = "fastapi", **context: Any) -> structlog.stdlib.BoundLogger:
    return _layer_logger("api", component, **context)
