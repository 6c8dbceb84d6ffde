"""Capability ports consumed by the batch workflow.

Each port is deliberately narrow so the pipeline can run against in-memory
fakes with no network or database.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from price_feed.ingestion.models.quote import Quote
from price_feed.shared.models.enums import AssetClass
from price_feed.storage.schemas.time_series import Tick


@runtime_checkable
class IQuoteSource(Protocol):
    """Fetches one point-in-time quote for one provider symbol."""

    async def fetch_quote(self, provider_symbol: str) -> Quote:
        """
        Raises:
            FinnhubAPIError: http_error, empty_data or transport_error
        """
        ...


@runtime_checkable
class ISymbolRegistry(Protocol):
    """Registry of symbols currently enabled for trading."""

    async def find_active_symbols(self, asset_class: AssetClass) -> list[str]:
        ...


@runtime_checkable
class ITickStore(Protocol):
    """Append-only time-series store for derived ticks."""

    async def insert_batch(self, ticks: Sequence[Tick]) -> int:
        """Write all ticks in one bulk operation and return the count written."""
        ...
