"""Price history repository: append-only tick persistence.

Table Schema (managed outside this service):
  price_history:
    - symbol: TEXT NOT NULL
    - bid, ask, mid: DOUBLE PRECISION
    - volatility: DOUBLE PRECISION
    - regime: TEXT
    - timestamp: TIMESTAMPTZ NOT NULL
    - timeframe: TEXT
"""

from collections.abc import Sequence

from price_feed.infrastructure.database.ports import IDatabaseAdapter
from price_feed.infrastructure.observability import get_storage_logger
from price_feed.storage.schemas.time_series import Tick

logger = get_storage_logger("price-history-repository", table="price_history")

INSERT_COLUMNS = (
    "symbol",
    "bid",
    "ask",
    "mid",
    "volatility",
    "regime",
    "timestamp",
    "timeframe",
)


class PriceHistoryRepository:
    """Repository for derived ticks."""

    def __init__(self, db: IDatabaseAdapter):
        self.db = db

    def _insert_query(self) -> str:
        columns = ", ".join(f'"{c}"' for c in INSERT_COLUMNS)
        placeholders = ", ".join(f"${i}" for i in range(1, len(INSERT_COLUMNS) + 1))
        return f"INSERT INTO price_history ({columns}) VALUES ({placeholders})"

    async def insert_batch(self, ticks: Sequence[Tick]) -> int:
        """Insert all ticks in one bulk statement.

        Plain INSERT (no ON CONFLICT): concurrent batches for the same
        symbol/timestamp both land.

        Returns:
            Number of rows written
        """
        if not ticks:
            return 0

        rows = []
        for tick in ticks:
            record = tick.to_record()
            rows.append(tuple(record[c] for c in INSERT_COLUMNS))

        await self.db.execute_many(self._insert_query(), rows)
        logger.info("batch_inserted", records=len(rows))
        return len(rows)
