"""
Pagination over the markets listing

Pages are fetched strictly in order; whether page N+1 is requested depends
on how many records page N produced.
"""

from enum import Enum
from typing import Callable, Generic, List, Optional, TypeVar

from src.utils.core.logger import get_logger
from src.utils.core.retry import RetryConfig, retry
from src.exchange_rates.coingecko.models import PageFailed, PageFetched, PageResult, PollStats

logger = get_logger(__name__, utility="exchange_rates")

T = TypeVar("T")


class PaginationState(str, Enum):
    FETCHING = "fetching"
    DONE = "done"


def is_retryable_page(result: PageResult) -> bool:
    return isinstance(result, PageFailed) and result.retryable


def page_retry_config(
    extra_attempts: int = 0,
    base_delay: float = 1.0,
    max_delay: float = 30.0,
    backoff_factor: float = 2.0,
    jitter: bool = True,
) -> RetryConfig:
    """Retry policy for failed pages; `extra_attempts=0` means one request per page"""
    return RetryConfig(
        max_attempts=1 + max(0, extra_attempts),
        base_delay=base_delay,
        max_delay=max_delay,
        backoff_factor=backoff_factor,
        jitter=jitter,
        retryable_exceptions=(),
        retry_on_result=is_retryable_page,
    )


class PaginationController(Generic[T]):
    """
    Drives fetch -> process cycles from page 1 until the last page

    The provider's convention for the last page is one that yields fewer
    processed records than the page size. A failed page also ends pagination,
    and a page size of zero or less allows exactly one fetch.
    """

    def __init__(
        self,
        fetch_page: Callable[[int], PageResult],
        process_page: Callable[[PageFetched], List[T]],
        per_page: int,
        retry_config: Optional[RetryConfig] = None,
    ) -> None:
        self.fetch_page = fetch_page
        self.process_page = process_page
        self.per_page = per_page
        self.retry_config = retry_config or page_retry_config()

    def run(self, stats: Optional[PollStats] = None) -> List[T]:
        """Fetch every page and return the processed records in page order"""
        stats = stats if stats is not None else PollStats()
        accumulated: List[T] = []

        def _attempt(page: int) -> PageResult:
            stats.pages_requested += 1
            return self.fetch_page(page)

        fetch_with_retry = retry(config=self.retry_config)(_attempt)

        page = 1
        state = PaginationState.FETCHING
        while state is PaginationState.FETCHING:
            result = fetch_with_retry(page)

            if isinstance(result, PageFailed):
                stats.record_failure(result)
                logger.error(
                    f"Page {page} failed ({result.reason}); stopping pagination "
                    f"with {len(accumulated)} records"
                )
                state = PaginationState.DONE
                continue

            records = self.process_page(result)
            accumulated.extend(records)
            logger.debug(
                f"Page {page}: {len(records)} records. Total: {len(accumulated)}"
            )

            if self.per_page <= 0 or len(records) < self.per_page:
                state = PaginationState.DONE
            else:
                page += 1

        logger.debug(f"Pagination complete. Total pages: {page}, total records: {len(accumulated)}")
        return accumulated
