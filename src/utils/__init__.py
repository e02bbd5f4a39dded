# Shared utilities

from .core.logger import get_logger, shutdown_logging
from .core.retry import RetryConfig, retry
