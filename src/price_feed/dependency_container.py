"""
Dependency injection container for the price feed.

Single place where concrete implementations are chosen and wired:
- HTTP client (aiohttp wrapper)
- Finnhub quote client
- Database adapter (asyncpg pool)
- Repositories (price_history, symbols)
- Symbol resolver, tick deriver, tick sink
- Batch workflow

Usage:
    container = PriceFeedDependencyContainer(settings)
    await container.startup()
    workflow = container.create_workflow()  # raises ConfigurationError
    result = await workflow.run(["BTCUSD"])
    await container.shutdown()
"""

import asyncio
import random

from price_feed.config.state import ConfigState, ConfigurationError
from price_feed.infrastructure.database.ports import DatabaseAdapter
from price_feed.infrastructure.observability import get_infrastructure_logger
from price_feed.ingestion.adapters.finnhub_plugin.client import FinnhubClient
from price_feed.ingestion.adapters.finnhub_plugin.mappers import build_symbol_map
from price_feed.ingestion.config.value_objects import FinnhubConfig, HttpClientConfig
from price_feed.ingestion.connectors.aiohttp_client import AiohttpClient
from price_feed.ingestion.symbol_resolution.resolver import SymbolResolver
from price_feed.orchestration.operators.write_operators import TickSink
from price_feed.orchestration.workflows.price_feed_workflow import PriceFeedWorkflow
from price_feed.storage.repositories.price_history import PriceHistoryRepository
from price_feed.storage.repositories.symbols import SymbolRepository
from price_feed.transformation.tick_deriver import SpreadSimulator, TickDeriver

logger = get_infrastructure_logger("dependency-container")


class PriceFeedDependencyContainer:
    """
    Builds the batch workflow from ``ConfigState``.

    The HTTP session and database pool are created once and shared by every
    workflow this container builds.
    """

    def __init__(self, settings: ConfigState, rng: random.Random | None = None):
        self.settings = settings
        self.rng = rng
        self._http_client: AiohttpClient | None = None
        self._database: DatabaseAdapter | None = None

    # ------------------------------------------------------------------
    # Configuration checks
    # ------------------------------------------------------------------

    def require_api_key(self) -> str:
        api_key = self.settings.finnhub.api_key
        if not api_key:
            raise ConfigurationError("API key not configured")
        return api_key

    def require_database_url(self) -> str:
        url = self.settings.database.url
        if not url:
            raise ConfigurationError("Database not configured")
        return url

    # ------------------------------------------------------------------
    # Shared resources
    # ------------------------------------------------------------------

    def create_http_client(self) -> AiohttpClient:
        if self._http_client is None:
            self._http_client = AiohttpClient(
                HttpClientConfig(timeout=self.settings.finnhub.request_timeout)
            )
        return self._http_client

    def create_database(self) -> DatabaseAdapter:
        if self._database is None:
            db = self.settings.database
            self._database = DatabaseAdapter(
                dsn=self.require_database_url(),
                min_size=db.min_pool_size,
                max_size=db.max_pool_size,
                command_timeout=db.command_timeout,
            )
        return self._database

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    def create_finnhub_config(self) -> FinnhubConfig:
        return FinnhubConfig(
            base_url=self.settings.finnhub.base_url,
            api_key=self.require_api_key(),
            http_config=HttpClientConfig(timeout=self.settings.finnhub.request_timeout),
        )

    def create_quote_source(self) -> FinnhubClient:
        return FinnhubClient(self.create_finnhub_config(), self.create_http_client())

    def create_resolver(self) -> SymbolResolver:
        feed = self.settings.feed
        return SymbolResolver(
            symbol_map=build_symbol_map(self.settings.finnhub.symbol_map),
            default_symbols=feed.default_symbols,
            registry=SymbolRepository(self.create_database()),
            asset_class=feed.asset_class,
        )

    def create_deriver(self) -> TickDeriver:
        feed = self.settings.feed
        return TickDeriver(
            spread_simulator=SpreadSimulator(
                min_pct=feed.spread_min_pct,
                max_pct=feed.spread_max_pct,
                rng=self.rng,
            ),
            timeframe=feed.timeframe,
            source=feed.source,
        )

    def create_tick_sink(self) -> TickSink:
        return TickSink(PriceHistoryRepository(self.create_database()))

    def create_workflow(self) -> PriceFeedWorkflow:
        """
        Wire a workflow for one batch.

        Raises:
            ConfigurationError: Missing API key or database URL; nothing is
                fetched in that case.
        """
        self.require_api_key()
        self.require_database_url()
        return PriceFeedWorkflow(
            resolver=self.create_resolver(),
            quote_source=self.create_quote_source(),
            deriver=self.create_deriver(),
            tick_sink=self.create_tick_sink(),
            request_interval=self.settings.finnhub.request_interval,
            pacing=asyncio.sleep,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def startup(self) -> None:
        """Report missing configuration early; the pool itself opens on first use."""
        if not self.settings.database.url:
            logger.warning("database_not_configured")
        if not self.settings.finnhub.api_key:
            logger.warning("finnhub_api_key_missing")

    async def shutdown(self) -> None:
        if self._http_client is not None:
            await self._http_client.close()
            self._http_client = None
        if self._database is not None:
            await self._database.disconnect()
            self._database = None
