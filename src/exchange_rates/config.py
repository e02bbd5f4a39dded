"""
Configuration settings for the exchange-rate source connector
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from dotenv import load_dotenv
load_dotenv()

# Connector-wide default topic, used when the host does not supply one
TOPIC_CONFIG_DEFAULT: str = os.getenv("EXCHANGE_RATES_TOPIC", "exchange-rates")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


@dataclass(frozen=True)
class CoinGeckoConfig:
    """Configuration class for CoinGecko API settings"""

    # API Configuration
    BASE_URL: str = "https://api.coingecko.com"
    MARKETS_PATH: str = "/api/v3/coins/markets"
    USER_AGENT: str = "ExchangeRatesConnector/1.0"

    # Per-request deadline in seconds
    REQUEST_TIMEOUT: float = 30.0

    # Page retry policy; 0 extra attempts means a single request per page
    PAGE_RETRY_ATTEMPTS: int = 0
    RETRY_BASE_DELAY: float = 1.0
    RETRY_MAX_DELAY: float = 30.0
    RETRY_BACKOFF_FACTOR: float = 2.0
    RETRY_JITTER: bool = True

    @property
    def markets_url(self) -> str:
        return f"{self.BASE_URL.rstrip('/')}{self.MARKETS_PATH}"

    @property
    def headers(self) -> dict:
        return {"User-Agent": self.USER_AGENT, "Accept": "application/json"}

    @classmethod
    def from_env(cls) -> "CoinGeckoConfig":
        """Create configuration from environment variables"""
        return cls(
            BASE_URL=os.getenv("COINGECKO_BASE_URL", cls.BASE_URL),
            REQUEST_TIMEOUT=float(os.getenv("COINGECKO_REQUEST_TIMEOUT", str(cls.REQUEST_TIMEOUT))),
            PAGE_RETRY_ATTEMPTS=int(os.getenv("COINGECKO_PAGE_RETRY_ATTEMPTS", str(cls.PAGE_RETRY_ATTEMPTS))),
            RETRY_BASE_DELAY=float(os.getenv("COINGECKO_RETRY_BASE_DELAY", str(cls.RETRY_BASE_DELAY))),
            RETRY_MAX_DELAY=float(os.getenv("COINGECKO_RETRY_MAX_DELAY", str(cls.RETRY_MAX_DELAY))),
            RETRY_JITTER=_env_bool("COINGECKO_RETRY_JITTER", "true"),
        )


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Option '{name}' must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    # 250.0 is accepted, 2.5 is not truncated
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError as e:
            raise ValueError(f"Option '{name}' must be an integer, got {value!r}") from e
    raise ValueError(f"Option '{name}' must be an integer, got {value!r}")


@dataclass(frozen=True)
class ConnectorConfig:
    """Host-supplied connector options, immutable for the connector's lifetime"""

    topic: str = TOPIC_CONFIG_DEFAULT
    currency: str = "usd"
    per_page: int = 250

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "ConnectorConfig":
        """
        Build a ConnectorConfig from the host's option map

        Missing or null options fall back to defaults. A non-integer
        `per_page` raises ValueError.
        """
        options = options or {}

        topic = options.get("topic")
        currency = options.get("currency")
        per_page = options.get("per_page")

        return cls(
            topic=str(topic) if topic is not None else TOPIC_CONFIG_DEFAULT,
            currency=str(currency) if currency is not None else cls.currency,
            per_page=_as_int("per_page", per_page) if per_page is not None else cls.per_page,
        )


# Global configuration instance
config = CoinGeckoConfig.from_env()
