"""
Database adapter interfaces and implementations.
Provides abstraction over database operations for dependency injection.
"""

from collections.abc import Iterable, Sequence
from typing import Any, Protocol

import asyncpg

from price_feed.infrastructure.observability import get_infrastructure_logger

logger = get_infrastructure_logger("database-adapter")


class IDatabaseAdapter(Protocol):
    """
    Protocol defining the database operations the repositories need.
    Enables testing repositories with an in-memory fake.
    """

    async def connect(self) -> None:
        """Establish database connection."""
        ...

    async def disconnect(self) -> None:
        """Close database connection."""
        ...

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Fetch all rows as list of dictionaries."""
        ...

    async def execute_many(self, query: str, rows: Iterable[Sequence[Any]]) -> None:
        """Execute one statement for every parameter row, in one round trip."""
        ...


class DatabaseAdapter:
    """
    asyncpg-backed implementation of IDatabaseAdapter.

    The pool is created lazily on ``connect()`` and shared by every
    repository built on this adapter.
    """

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30.0,
    ):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        """Establish database connection pool."""
        if self._pool is not None:
            return
        self._pool = await asyncpg.create_pool(
            dsn=self.dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            command_timeout=self.command_timeout,
        )
        logger.info("pool_created", min_size=self.min_size, max_size=self.max_size)

    async def disconnect(self) -> None:
        """Close database connection pool."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("pool_closed")

    async def _ensure_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            await self.connect()
        return self._pool

    async def fetch_all(self, query: str, *args: Any) -> list[dict[str, Any]]:
        """Fetch all rows as list of dictionaries."""
        pool = await self._ensure_pool()
        async with pool.acquire() as conn:
            results = await conn.fetch(query, *args)
            return [dict(row) for row in results]

    async def execute_many(self, query: str, rows: Iterable[Sequence[Any]]) -> None:
        """Execute a statement for each parameter row inside one transaction."""
        pool = await self._ensure_pool()
        async with pool.acquire() as conn:
            async with conn.transaction():
                await conn.executemany(query, list(rows))

