"""
Shared fixtures and in-memory fakes for the price feed pipeline.

Nothing here touches the network or a database: each capability port
(quote source, tick store, symbol registry, HTTP client, database adapter)
has a fake that records what it was asked.
"""

import logging
import sys
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

# Ensure src on path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from price_feed.ingestion.adapters.finnhub_plugin.exceptions import EmptyDataError  # noqa: E402
from price_feed.ingestion.adapters.finnhub_plugin.mappers import FINNHUB_SYMBOL_MAP  # noqa: E402
from price_feed.ingestion.models.quote import Quote  # noqa: E402
from price_feed.ingestion.ports.http import HttpResponse  # noqa: E402
from price_feed.ingestion.symbol_resolution.resolver import SymbolResolver  # noqa: E402
from price_feed.orchestration.operators.write_operators import TickSink  # noqa: E402
from price_feed.orchestration.workflows.price_feed_workflow import (  # noqa: E402
    PriceFeedWorkflow,
)
from price_feed.shared.models.enums import AssetClass  # noqa: E402
from price_feed.transformation.tick_deriver import SpreadSimulator, TickDeriver  # noqa: E402

logger = logging.getLogger(__name__)

FIXED_NOW = datetime(2024, 6, 10, 12, 30, 45, 123456, tzinfo=UTC)

# ============================================================================
# FAKES
# ============================================================================


class FixedRandom:
    """Random source whose draw never changes."""

    def __init__(self, value: float = 0.5):
        self.value = value

    def random(self) -> float:
        return self.value


class FakeQuoteSource:
    """Quote source keyed by provider symbol; exceptions are raised as-is."""

    def __init__(self, outcomes: dict[str, Any] | None = None):
        self.outcomes = outcomes or {}
        self.calls: list[str] = []

    async def fetch_quote(self, provider_symbol: str) -> Quote:
        self.calls.append(provider_symbol)
        outcome = self.outcomes.get(provider_symbol)
        if outcome is None:
            raise EmptyDataError("no data", symbol=provider_symbol)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeTickStore:
    """Records every bulk write; optionally fails."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.batches: list[list] = []

    async def insert_batch(self, ticks: Sequence) -> int:
        if self.error is not None:
            raise self.error
        self.batches.append(list(ticks))
        return len(ticks)


class FakeSymbolRegistry:
    def __init__(self, symbols: list[str] | None = None, error: Exception | None = None):
        self.symbols = symbols or []
        self.error = error
        self.calls: list[AssetClass] = []

    async def find_active_symbols(self, asset_class: AssetClass) -> list[str]:
        self.calls.append(asset_class)
        if self.error is not None:
            raise self.error
        return list(self.symbols)


class FakeHttpClient:
    """Answers GETs by the ``symbol`` query parameter."""

    def __init__(self, responses: dict[str, Any] | None = None):
        self.responses = responses or {}
        self.requests: list[dict[str, Any]] = []
        self.closed = False

    async def get(self, url, params=None, headers=None, timeout=None) -> HttpResponse:
        self.requests.append(
            {"url": url, "params": dict(params or {}), "timeout": timeout}
        )
        symbol = (params or {}).get("symbol")
        outcome = self.responses[symbol]
        if isinstance(outcome, Exception):
            raise outcome
        if isinstance(outcome, HttpResponse):
            return outcome
        return HttpResponse(status_code=200, body=outcome, headers={}, url=url)

    async def close(self) -> None:
        self.closed = True


class FakeDatabase:
    def __init__(self, rows: list[dict] | None = None):
        self.rows = rows or []
        self.queries: list[tuple[str, tuple]] = []
        self.executed: list[tuple[str, list]] = []

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        self.queries.append((query, args))
        return list(self.rows)

    async def execute_many(self, query: str, rows) -> None:
        self.executed.append((query, list(rows)))


class RecordingPacer:
    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


# ============================================================================
# FIXTURES
# ============================================================================


def build_quote(**overrides: Any) -> Quote:
    """Provider-shaped quote; keys use the provider's single-letter names."""
    body = {
        "c": 50000.0,
        "d": 980.0,
        "dp": 0.5,
        "h": 50400.0,
        "l": 49800.0,
        "o": 49900.0,
        "pc": 49020.0,
        "t": 1718022645,
    }
    body.update(overrides)
    return Quote.model_validate(body)


@pytest.fixture
def make_quote():
    return build_quote


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def deriver(fixed_clock):
    return TickDeriver(
        spread_simulator=SpreadSimulator(rng=FixedRandom(0.5)),
        timeframe="1m",
        source="finnhub",
        clock=fixed_clock,
    )


@pytest.fixture
def pacer():
    return RecordingPacer()


@pytest.fixture
def tick_store():
    return FakeTickStore()


@pytest.fixture
def symbol_registry():
    return FakeSymbolRegistry()


@pytest.fixture
def resolver(symbol_registry):
    return SymbolResolver(
        symbol_map=FINNHUB_SYMBOL_MAP,
        default_symbols=("BTCUSD", "ETHUSD"),
        registry=symbol_registry,
    )


@pytest.fixture
def build_workflow(resolver, deriver, tick_store, pacer, fixed_clock):
    """Factory wiring a workflow around any quote source."""

    def _build(quote_source, **overrides) -> PriceFeedWorkflow:
        kwargs = {
            "resolver": resolver,
            "quote_source": quote_source,
            "deriver": deriver,
            "tick_sink": TickSink(tick_store),
            "request_interval": 0.1,
            "pacing": pacer,
            "clock": fixed_clock,
        }
        kwargs.update(overrides)
        return PriceFeedWorkflow(**kwargs)

    return _build
