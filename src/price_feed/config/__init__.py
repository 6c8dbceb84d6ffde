"""Application configuration (pydantic models + YAML/env loader)."""

from price_feed.config.state import (
    ConfigLoader,
    ConfigState,
    ConfigurationError,
    DatabaseConfig,
    FeedConfig,
    FinnhubSettings,
    LoggingConfig,
    get_config,
)

__all__ = [
    "ConfigLoader",
    "ConfigState",
    "ConfigurationError",
    "DatabaseConfig",
    "FeedConfig",
    "FinnhubSettings",
    "LoggingConfig",
    "get_config",
]
