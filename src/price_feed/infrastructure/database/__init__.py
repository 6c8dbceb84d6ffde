"""Database access (asyncpg pool behind a narrow adapter protocol)."""

from price_feed.infrastructure.database.ports import DatabaseAdapter, IDatabaseAdapter

__all__ = ["DatabaseAdapter", "IDatabaseAdapter"]
