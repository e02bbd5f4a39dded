"""Fixtures package for tests.

Re-export commonly used fixture factories and helpers for convenient imports
from `tests._fixtures` package.
"""

from .remote_api_responses import (
    FakeResponse,
    FakeSession,
    canned_api_factory,
    market_entry,
    market_page,
    SAMPLE_MARKETS,
)

__all__ = [
    "FakeResponse",
    "FakeSession",
    "canned_api_factory",
    "market_entry",
    "market_page",
    "SAMPLE_MARKETS",
]
