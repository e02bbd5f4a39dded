"""
CoinGecko markets provider
"""

from .client import CoinGeckoAPIError, CoinGeckoClient
from .decoder import RateDecodeError, decode_rates, parse_rates
from .models import PageFailed, PageFetched, PollResult, PollStats, RawPage, ValidatedRate
from .validator import RateValidator, ValidationOutcome
from .mapper import map_rate, symbol_key
from .pagination import PaginationController, PaginationState, page_retry_config
from .provider import CoinGeckoExchangeProvider, poll

__all__ = [
    "CoinGeckoAPIError",
    "CoinGeckoClient",
    "RateDecodeError",
    "decode_rates",
    "parse_rates",
    "PageFailed",
    "PageFetched",
    "PollResult",
    "PollStats",
    "RawPage",
    "ValidatedRate",
    "RateValidator",
    "ValidationOutcome",
    "map_rate",
    "symbol_key",
    "PaginationController",
    "PaginationState",
    "page_retry_config",
    "CoinGeckoExchangeProvider",
    "poll",
]
