"""Symbol repository: read-only view of the ``symbols`` registry table."""

from price_feed.infrastructure.database.ports import IDatabaseAdapter
from price_feed.infrastructure.observability import get_storage_logger
from price_feed.shared.models.enums import AssetClass

logger = get_storage_logger("symbol-repository", table="symbols")


class SymbolRepository:
    """Lists symbols flagged active for a given asset class."""

    QUERY = (
        "SELECT symbol FROM symbols "
        "WHERE is_active = TRUE AND type = $1 "
        "ORDER BY symbol"
    )

    def __init__(self, db: IDatabaseAdapter):
        self.db = db

    async def find_active_symbols(self, asset_class: AssetClass) -> list[str]:
        rows = await self.db.fetch_all(self.QUERY, asset_class.value)
        symbols = [row["symbol"] for row in rows if row.get("symbol")]
        logger.debug(
            "active_symbols_loaded", asset_class=asset_class.value, count=len(symbols)
        )
        return symbols
