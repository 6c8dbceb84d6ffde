"""
Price Feed Workflow
===================

Runs one batch: resolve the universe, then fetch and derive each symbol
strictly in order with a fixed pause between provider calls, then hand the
accepted ticks to the sink.

The loop is sequential to stay under the provider's rate limit. Any failure
for one symbol (fetch or derivation) is recorded and the loop moves on;
only a batch with no valid tick at all asks the trading logic to pause.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from price_feed.common.utils.date_utils import to_iso_millis, utc_now
from price_feed.infrastructure.observability import get_pipeline_logger
from price_feed.ingestion.adapters.finnhub_plugin.exceptions import FinnhubAPIError
from price_feed.ingestion.ports.data_ports import IQuoteSource
from price_feed.ingestion.symbol_resolution.resolver import SymbolResolver
from price_feed.orchestration.operators.write_operators import TickSink
from price_feed.shared.models.enums import DataVenue
from price_feed.storage.schemas.time_series import Tick
from price_feed.transformation.tick_deriver import TickDeriver

logger = get_pipeline_logger()

UNKNOWN_SYMBOL = "Unknown symbol"
FETCH_FAILED = "Failed to fetch quote"
NO_DATA_ERROR = "Failed to fetch any quotes"

Pacer = Callable[[float], Awaitable[Any]]


@dataclass
class BatchResult:
    """Outcome of one batch.

    ``ticks`` is keyed by normalized internal symbol, ``errors`` by the
    symbol exactly as requested.
    """

    ticks: dict[str, Tick] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=utc_now)
    source: str = DataVenue.FINNHUB.value
    persisted: int = 0

    @property
    def should_pause_trading(self) -> bool:
        return not self.ticks

    def to_payload(self) -> dict[str, Any]:
        """Response body for the trading simulator."""
        if self.should_pause_trading:
            return {
                "ticks": {},
                "timestamp": to_iso_millis(self.timestamp),
                "source": DataVenue.NO_DATA.value,
                "error": NO_DATA_ERROR,
                "errors": dict(self.errors),
                "shouldPauseTrading": True,
            }

        payload = {
            "ticks": {symbol: tick.to_payload() for symbol, tick in self.ticks.items()},
            "timestamp": to_iso_millis(self.timestamp),
            "source": self.source,
            "shouldPauseTrading": False,
        }
        if self.errors:
            payload["errors"] = dict(self.errors)
        return payload


class PriceFeedWorkflow:
    """
    Sequential fetch -> derive -> persist over a symbol universe.

    Args:
        resolver: Universe and provider-symbol resolution
        quote_source: Provider client (one request per call, no retries)
        deriver: Quote -> Tick
        tick_sink: Best-effort persistence of accepted ticks
        request_interval: Seconds to wait between successive provider calls
        pacing: Awaitable sleep; tests pass a no-op
        clock: Batch timestamp source
    """

    def __init__(
        self,
        resolver: SymbolResolver,
        quote_source: IQuoteSource,
        deriver: TickDeriver,
        tick_sink: TickSink,
        request_interval: float = 0.1,
        pacing: Pacer = asyncio.sleep,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.resolver = resolver
        self.quote_source = quote_source
        self.deriver = deriver
        self.tick_sink = tick_sink
        self.request_interval = request_interval
        self.pacing = pacing
        self.clock = clock

    async def run(self, symbols: Sequence[str] | None = None) -> BatchResult:
        universe = await self.resolver.resolve_universe(symbols)
        logger.info("batch_started", symbols=universe, count=len(universe))

        result = BatchResult()
        pending: list[Tick] = []

        for index, symbol in enumerate(universe):
            if index > 0 and self.request_interval > 0:
                await self.pacing(self.request_interval)

            tick = await self._process_symbol(symbol, result.errors)
            if tick is not None:
                result.ticks[tick.symbol] = tick
                pending.append(tick)

        if pending:
            result.persisted = await self.tick_sink.persist(pending)

        result.timestamp = self.clock()
        logger.info(
            "batch_completed",
            valid=len(result.ticks),
            failed=len(result.errors),
            persisted=result.persisted,
            should_pause_trading=result.should_pause_trading,
        )
        return result

    async def _process_symbol(self, symbol: str, errors: dict[str, str]) -> Tick | None:
        provider_symbol = self.resolver.resolve(symbol)
        if provider_symbol is None:
            logger.error("unknown_symbol", symbol=symbol)
            errors[symbol] = UNKNOWN_SYMBOL
            return None

        try:
            quote = await self.quote_source.fetch_quote(provider_symbol)
        except FinnhubAPIError as e:
            logger.warning(
                "symbol_fetch_failed",
                symbol=symbol,
                provider_symbol=provider_symbol,
                reason=e.reason,
                error=str(e),
            )
            errors[symbol] = FETCH_FAILED
            return None
        except Exception:
            logger.exception(
                "symbol_fetch_unexpected_error",
                symbol=symbol,
                provider_symbol=provider_symbol,
            )
            errors[symbol] = FETCH_FAILED
            return None

        try:
            return self.deriver.derive(self.resolver.normalize(symbol), quote)
        except Exception:
            logger.exception(
                "tick_derivation_failed",
                symbol=symbol,
                price=quote.current_price,
            )
            errors[symbol] = FETCH_FAILED
            return None
