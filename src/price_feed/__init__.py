"""
Synthetic price feed for the paper-trading simulator.

Pulls point-in-time quotes from the upstream provider, derives a synthetic
bid/ask spread plus a volatility score and market regime, and persists the
resulting ticks as a time series.

Modules:
- ingestion: Symbol resolution and quote fetching
- transformation: Spread, volatility and regime derivation
- orchestration: Sequential batch workflow and tick persistence
- storage: Tick schema and repositories
- shared: Common enums
- infrastructure: Config, database, logging
"""

__version__ = "0.1.0"
