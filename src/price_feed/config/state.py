"""
Unified configuration state for the price feed.

Single source of truth for all application configuration, combining YAML
files with environment overrides, type validation, and sensible defaults.
Secrets (provider API key, database URL) normally arrive via environment.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from price_feed.shared.models.enums import AssetClass

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Required configuration (credentials, store access) is missing or invalid."""


# =============================================================================
# PYDANTIC MODELS - Type-Safe Configuration
# =============================================================================


class FinnhubSettings(BaseModel):
    """Finnhub quote API configuration."""

    base_url: str = Field(default="https://finnhub.io/api/v1")
    api_key: str | None = Field(default=None)
    request_timeout: float = Field(default=10.0, gt=0)
    request_interval: float = Field(default=0.1, ge=0)
    # Extra internal -> provider mappings, merged over the built-in ones
    symbol_map: dict[str, str] = Field(default_factory=dict)

    class Config:
        extra = "allow"


class DatabaseConfig(BaseModel):
    """Database connection configuration (asyncpg pool)."""

    url: str | None = Field(default=None)
    min_pool_size: int = Field(default=1, ge=1, le=100)
    max_pool_size: int = Field(default=5, ge=1, le=100)
    command_timeout: float = Field(default=30.0, gt=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        if not v or v.startswith(("postgresql://", "postgres://")):
            return v
        raise ValueError("Database URL must start with postgresql://")

    class Config:
        extra = "allow"


class FeedConfig(BaseModel):
    """Symbol universe and tick derivation settings."""

    default_symbols: tuple[str, ...] = Field(default=("BTCUSD", "ETHUSD"))
    asset_class: AssetClass = Field(default=AssetClass.CRYPTO)
    timeframe: str = Field(default="1m")
    source: str = Field(default="finnhub")
    spread_min_pct: float = Field(default=0.0002, gt=0)
    spread_max_pct: float = Field(default=0.0010, gt=0)

    @model_validator(mode="after")
    def validate_spread_range(self) -> "FeedConfig":
        if self.spread_min_pct > self.spread_max_pct:
            raise ValueError(
                f"spread_min_pct ({self.spread_min_pct}) must not exceed "
                f"spread_max_pct ({self.spread_max_pct})"
            )
        return self

    class Config:
        extra = "allow"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    json_logs: bool = Field(default=True)

    class Config:
        extra = "allow"


class ConfigState(BaseModel):
    """Root configuration state - single source of truth for all app config."""

    finnhub: FinnhubSettings = Field(default_factory=FinnhubSettings)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    env: str = Field(default="dev")
    config_dir: str = Field(default="./config")

    class Config:
        extra = "allow"


# =============================================================================
# CONFIG LOADER - Clean, Validated Loading
# =============================================================================


class ConfigLoader:
    """
    Load and validate configuration.

    Merges:
      1. Model defaults
      2. price_feed.yaml from config_dir
      3. env/<env>.yaml from config_dir
      4. Environment variable overrides
    """

    def __init__(self, config_dir: str = "./config"):
        self.config_dir = Path(config_dir)
        self._yaml_cache: dict[Path, Any] = {}
        self.env = os.getenv("PRICE_FEED_ENV", "dev")

    def _load_yaml(self, path: Path) -> dict[str, Any]:
        """Load YAML file with caching."""
        if path in self._yaml_cache:
            return self._yaml_cache[path]

        if not path.exists():
            logger.debug(f"Config file not found (using defaults): {path}")
            return {}

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        self._yaml_cache[path] = data
        logger.debug(f"Loaded config: {path}")
        return data

    def _apply_env_overrides(self, config: dict[str, Any]) -> dict[str, Any]:
        """Apply environment variable overrides to config."""
        if api_key := os.getenv("FINNHUB_API_KEY"):
            config.setdefault("finnhub", {})["api_key"] = api_key

        if db_url := os.getenv("DATABASE_URL"):
            config.setdefault("database", {})["url"] = db_url

        if log_level := os.getenv("LOG_LEVEL"):
            config.setdefault("logging", {})["level"] = log_level

        return config

    def _merge_dicts(self, base: dict, override: dict) -> dict:
        """Deep merge override into base dict."""
        result = base.copy()
        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def load(self) -> ConfigState:
        """
        Load complete configuration state.

        Raises:
            ValidationError: If configuration is invalid
        """
        logger.info(f"Loading configuration from {self.config_dir} (env: {self.env})")

        config = self._load_yaml(self.config_dir / "price_feed.yaml")
        env_config = self._load_yaml(self.config_dir / "env" / f"{self.env}.yaml")
        config = self._merge_dicts(config, env_config)
        config = self._apply_env_overrides(config)

        state = ConfigState(env=self.env, config_dir=str(self.config_dir), **config)
        logger.info(
            f"Configuration loaded: default_symbols={list(state.feed.default_symbols)}, "
            f"finnhub_key={'set' if state.finnhub.api_key else 'missing'}, "
            f"database={'set' if state.database.url else 'missing'}"
        )
        return state


# =============================================================================
# GLOBAL INSTANCE
# =============================================================================


def get_config(config_dir: str | None = None) -> ConfigState:
    """
    Load and return the configuration state.

    Args:
        config_dir: Override config directory. Defaults to
            $PRICE_FEED_CONFIG_DIR, then ./config
    """
    if config_dir is None:
        config_dir = os.getenv("PRICE_FEED_CONFIG_DIR", "./config")
        if not Path(config_dir).exists():
            logger.warning(f"Config directory not found at {config_dir}, using defaults")

    loader = ConfigLoader(config_dir=config_dir)
    return loader.load()
