"""
Retry helpers with exponential backoff.

Used to wrap a single unit of work (an HTTP page fetch) with a configurable
number of attempts. Failures may be signalled either by raising a retryable
exception or by returning a result that `retry_on_result` flags.
"""

import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Type, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryError(Exception):
    """Exception raised when all retry attempts are exhausted."""

    def __init__(self, message: str, last_exception: Exception, attempts: int):
        super().__init__(message)
        self.last_exception = last_exception
        self.attempts = attempts


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""

    max_attempts: int = 3
    base_delay: float = 1.0  # Base delay in seconds
    max_delay: float = 60.0  # Maximum delay in seconds
    backoff_factor: float = 2.0  # Exponential backoff multiplier
    jitter: bool = True  # Add random jitter to prevent thundering herd
    retryable_exceptions: tuple[Type[Exception], ...] = (
        ConnectionError,
        TimeoutError,
        OSError,
    )
    non_retryable_exceptions: tuple[Type[Exception], ...] = ()
    retry_on_result: Optional[Callable[[Any], bool]] = (
        None  # Function to check if result should trigger retry
    )


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """Calculate delay for exponential backoff with optional jitter."""
    delay = min(config.base_delay * (config.backoff_factor**attempt), config.max_delay)

    if config.jitter:
        # +/-25% of delay
        jitter_range = delay * 0.25
        delay += random.uniform(-jitter_range, jitter_range)

    return max(0, delay)


def is_retryable_exception(exception: Exception, config: RetryConfig) -> bool:
    """Check if an exception should trigger a retry."""
    if isinstance(exception, config.non_retryable_exceptions):
        return False

    if isinstance(exception, config.retryable_exceptions):
        return True

    # Exceptions carrying an error_category (like CoinGeckoAPIError)
    if hasattr(exception, "error_category") and exception.error_category == "retryable":
        return True

    return False


def _execute_with_retry(func: Callable[..., T], config: RetryConfig, *args, **kwargs) -> T:
    """Execute function with retry logic.

    When `retry_on_result` flags every attempt, the last result is returned
    rather than raising, so callers that report failures as values keep them.
    """
    last_exception: Optional[Exception] = None
    attempts = max(1, config.max_attempts)

    for attempt in range(attempts):
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            last_exception = e

            if not is_retryable_exception(e, config):
                logger.debug(f"Non-retryable exception: {type(e).__name__}: {e}")
                raise

            if attempt < attempts - 1:
                delay = calculate_delay(attempt, config)
                logger.warning(
                    f"Attempt {attempt + 1}/{attempts} failed "
                    f"({type(e).__name__}). Retrying in {delay:.2f}s: {e}"
                )
                time.sleep(delay)
            else:
                logger.error(
                    f"All {attempts} attempts failed. "
                    f"Last error: {type(e).__name__}: {e}"
                )
            continue

        if config.retry_on_result is None or not config.retry_on_result(result):
            return result

        if attempt < attempts - 1:
            delay = calculate_delay(attempt, config)
            logger.warning(
                f"Attempt {attempt + 1}/{attempts} returned a retryable result. "
                f"Retrying in {delay:.2f}s: {result}"
            )
            time.sleep(delay)
        else:
            logger.error(f"All {attempts} attempts returned a retryable result: {result}")
            return result

    raise RetryError(
        f"Operation failed after {attempts} attempts",
        last_exception,
        attempts,
    )


def retry(config: Optional[RetryConfig] = None) -> Callable:
    """
    Decorator for synchronous functions with retry logic.

    Args:
        config: Retry configuration. Uses defaults if None.

    Returns:
        Decorated function with retry logic.

    Example:
        @retry(config=RetryConfig(max_attempts=5, base_delay=2.0))
        def api_call():
            return make_request()
    """
    if config is None:
        config = RetryConfig()

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        def wrapper(*args, **kwargs) -> T:
            return _execute_with_retry(func, config, *args, **kwargs)

        return wrapper

    return decorator
