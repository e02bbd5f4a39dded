# Core utilities package
# Contains foundational infrastructure utilities for the application

__all__ = [
    "get_logger",
    "shutdown_logging",
    "RetryConfig",
    "RetryError",
    "retry",
]

from .logger import get_logger, shutdown_logging
from .retry import RetryConfig, RetryError, retry
