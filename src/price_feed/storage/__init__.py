"""Storage layer for the price feed.

- Schemas: Tick
- Repositories: PriceHistoryRepository (tick sink target),
  SymbolRepository (active-symbol registry)

Both repositories sit on the asyncpg-backed DatabaseAdapter from
``price_feed.infrastructure.database``.
"""
