"""
Data models for the CoinGecko markets listing and per-poll bookkeeping
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, field_validator

from src.exchange_rates.emitter import EmittedRecord


class RawRateEntry(TypedDict, total=False):
    """One entry of the /coins/markets response; every field may be absent or null"""
    id: str
    symbol: str
    name: str
    image: str
    current_price: float
    market_cap: float
    market_cap_rank: int
    fully_diluted_valuation: float
    total_volume: float
    high_24h: float
    low_24h: float
    price_change_24h: float
    price_change_percentage_24h: float
    market_cap_change_24h: float
    market_cap_change_percentage_24h: float
    circulating_supply: float
    total_supply: float
    max_supply: float
    last_updated: str
    # Present upstream but never read
    roi: Dict[str, Any]
    ath: float
    ath_change_percentage: float
    ath_date: str


class ValidatedRate(BaseModel):
    """
    A raw entry known to carry a usable symbol and well-typed numeric fields

    Unknown upstream fields are ignored.
    """

    symbol: str
    id: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    current_price: Optional[float] = None
    market_cap: Optional[float] = None
    market_cap_rank: Optional[int] = None
    fully_diluted_valuation: Optional[float] = None
    total_volume: Optional[float] = None
    high_24h: Optional[float] = None
    low_24h: Optional[float] = None
    price_change_24h: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    market_cap_change_24h: Optional[float] = None
    market_cap_change_percentage_24h: Optional[float] = None
    circulating_supply: Optional[float] = None
    total_supply: Optional[float] = None
    max_supply: Optional[float] = None
    last_updated: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v):
        """Symbol must be non-empty after trimming"""
        if not v or not v.strip():
            raise ValueError("Symbol cannot be empty")
        return v


@dataclass(frozen=True)
class RawPage:
    """Raw HTTP response for one page request"""
    url: str
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class PageFetched:
    """A page that was retrieved and decoded"""
    page: int
    rows: List[RawRateEntry]


@dataclass(frozen=True)
class PageFailed:
    """A page that could not be retrieved or decoded"""
    page: int
    reason: str
    status_code: Optional[int] = None
    retryable: bool = False


PageResult = Union[PageFetched, PageFailed]


@dataclass
class PollStats:
    """Counters for a single poll invocation"""
    pages_requested: int = 0
    pages_failed: int = 0
    entries_received: int = 0
    entries_dropped: int = 0
    records_emitted: int = 0
    complete: bool = True
    failure_reason: Optional[str] = None

    def record_failure(self, failure: PageFailed) -> None:
        self.pages_failed += 1
        self.complete = False
        self.failure_reason = f"page {failure.page}: {failure.reason}"


@dataclass
class PollResult:
    """Records emitted by one poll, with the poll's statistics"""
    records: List[EmittedRecord] = field(default_factory=list)
    stats: PollStats = field(default_factory=PollStats)
