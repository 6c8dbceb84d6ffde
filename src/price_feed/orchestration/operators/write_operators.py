"""
Write Operators - Tick Persistence
==================================

Best-effort bulk write of a batch's ticks. A storage failure is logged and
swallowed: callers learn about fetch failures, not storage failures.
"""

from collections.abc import Sequence

from price_feed.infrastructure.observability import get_pipeline_logger
from price_feed.ingestion.ports.data_ports import ITickStore
from price_feed.storage.schemas.time_series import Tick

logger = get_pipeline_logger("tick-sink")


class TickSink:
    """Hands accumulated ticks to the time-series store in one write."""

    def __init__(self, store: ITickStore):
        self.store = store

    async def persist(self, ticks: Sequence[Tick]) -> int:
        """
        Persist ticks, never raising.

        Returns:
            Rows written (0 when nothing was given or the write failed)
        """
        if not ticks:
            return 0

        try:
            written = await self.store.insert_batch(list(ticks))
        except Exception:
            logger.exception("ticks_persist_failed", records=len(ticks))
            return 0

        logger.info("ticks_persisted", records=written)
        return written
