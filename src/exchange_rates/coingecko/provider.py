"""
CoinGecko exchange-rate provider

`poll()` is the whole fetch-and-emit cycle: it walks the markets listing
from page 1, validates and maps every entry, and returns the records tagged
with the CoinGecko source identity. All mutable state lives inside the call,
so repeated polls over unchanged upstream data yield identical output.
"""

from typing import Any, List, Mapping, Optional

from src.utils.core.logger import get_logger
from src.utils.core.retry import RetryConfig
from src.exchange_rates.config import CoinGeckoConfig, ConnectorConfig
from src.exchange_rates.emitter import COINGECKO_SOURCE, EmittedRecord, MappedRate, emit_records
from src.exchange_rates.provider import ExchangeProvider, register_provider
from src.exchange_rates.coingecko.client import CoinGeckoClient
from src.exchange_rates.coingecko.mapper import map_rate
from src.exchange_rates.coingecko.models import PageFetched, PollResult, PollStats
from src.exchange_rates.coingecko.pagination import PaginationController, page_retry_config
from src.exchange_rates.coingecko.validator import RateValidator

logger = get_logger(__name__, utility="exchange_rates")


def poll(
    connector_config: ConnectorConfig,
    client: CoinGeckoClient,
    validator: Optional[RateValidator] = None,
    retry_config: Optional[RetryConfig] = None,
) -> PollResult:
    """
    Run one poll cycle against the markets listing

    Args:
        connector_config: Topic, quote currency and page size
        client: HTTP client used for every page request
        validator: Entry validator (defaults to RateValidator)
        retry_config: Policy for failed pages (defaults to the client's config)

    Returns:
        PollResult with the ordered records and the poll's statistics.
        Upstream failures never raise; they end pagination and mark the
        result incomplete.
    """
    validator = validator or RateValidator()
    if retry_config is None:
        api = client.config
        retry_config = page_retry_config(
            extra_attempts=api.PAGE_RETRY_ATTEMPTS,
            base_delay=api.RETRY_BASE_DELAY,
            max_delay=api.RETRY_MAX_DELAY,
            backoff_factor=api.RETRY_BACKOFF_FACTOR,
            jitter=api.RETRY_JITTER,
        )

    stats = PollStats()

    def fetch_page(page: int):
        return client.fetch_markets_page(connector_config.currency, connector_config.per_page, page)

    def process_page(result: PageFetched) -> List[MappedRate]:
        outcome = validator.validate(result.rows)
        stats.entries_received += len(result.rows)
        stats.entries_dropped += outcome.dropped
        if outcome.dropped:
            logger.debug(f"Page {result.page}: dropped {outcome.dropped} invalid entries")
        return [map_rate(rate) for rate in outcome.valid]

    controller = PaginationController(
        fetch_page=fetch_page,
        process_page=process_page,
        per_page=connector_config.per_page,
        retry_config=retry_config,
    )
    mapped = controller.run(stats)

    records = emit_records(mapped, connector_config.topic, COINGECKO_SOURCE)
    stats.records_emitted = len(records)

    summary = (
        f"Poll finished: {stats.records_emitted} records from {stats.pages_requested} requests, "
        f"{stats.entries_dropped} entries dropped"
    )
    if stats.complete:
        logger.info(summary)
    else:
        logger.warning(f"{summary}; incomplete ({stats.failure_reason})")

    return PollResult(records=records, stats=stats)


@register_provider("coingecko")
class CoinGeckoExchangeProvider(ExchangeProvider):
    """Exchange provider backed by the CoinGecko markets listing"""

    def __init__(
        self,
        options: Optional[Mapping[str, Any]] = None,
        client: Optional[CoinGeckoClient] = None,
        api_config: Optional[CoinGeckoConfig] = None,
    ) -> None:
        """
        Args:
            options: Host-supplied options (`topic`, `currency`, `per_page`)
            client: HTTP client to use; when omitted the provider creates and owns one
            api_config: API settings for a provider-owned client
        """
        self.config: ConnectorConfig = ConnectorConfig.from_options(options)
        self._owns_client: bool = client is None
        self.client: CoinGeckoClient = client or CoinGeckoClient(api_config)
        logger.info(
            f"CoinGecko provider configured: topic={self.config.topic}, "
            f"currency={self.config.currency}, per_page={self.config.per_page}"
        )

    def poll(self) -> PollResult:
        return poll(self.config, self.client)

    def fetch(self) -> List[EmittedRecord]:
        return self.poll().records

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "CoinGeckoExchangeProvider":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
