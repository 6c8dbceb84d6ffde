"""Configuration value objects for dependency injection.

Instead of injecting the global settings object, inject specific
configuration dataclasses into each component. Built once at the
composition root from ``ConfigState``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpClientConfig:
    """Configuration for HTTP client."""

    timeout: float = 10.0
    connect_timeout: float = 5.0


@dataclass(frozen=True)
class FinnhubConfig:
    """Configuration for the Finnhub quote client."""

    base_url: str
    api_key: str
    http_config: HttpClientConfig = None

    def __post_init__(self):
        """Set defaults for nested configs."""
        if self.http_config is None:
            object.__setattr__(self, "http_config", HttpClientConfig())

    @property
    def quote_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/quote"
