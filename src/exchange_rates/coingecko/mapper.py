"""
Mapping of validated rates onto the wire schema
"""

from datetime import datetime, timezone
from typing import Optional, Tuple

from src.exchange_rates.coingecko.models import ValidatedRate
from src.exchange_rates.schema import ExchangeRateRecord, SymbolKeyRecord


def symbol_key(symbol: str) -> str:
    """Canonical record key for a symbol"""
    return symbol.strip().upper()


def _epoch_millis(value: Optional[datetime]) -> Optional[int]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def map_rate(rate: ValidatedRate) -> Tuple[SymbolKeyRecord, ExchangeRateRecord]:
    """Convert one validated rate into its (key, value) records"""
    key = symbol_key(rate.symbol)

    value = ExchangeRateRecord(
        symbol=key,
        id=rate.id,
        name=rate.name,
        image=rate.image,
        current_price=rate.current_price,
        market_cap=rate.market_cap,
        market_cap_rank=rate.market_cap_rank,
        fully_diluted_valuation=rate.fully_diluted_valuation,
        total_volume=rate.total_volume,
        high_24h=rate.high_24h,
        low_24h=rate.low_24h,
        price_change_24h=rate.price_change_24h,
        price_change_percentage_24h=rate.price_change_percentage_24h,
        market_cap_change_24h=rate.market_cap_change_24h,
        market_cap_change_percentage_24h=rate.market_cap_change_percentage_24h,
        circulating_supply=rate.circulating_supply,
        total_supply=rate.total_supply,
        max_supply=rate.max_supply,
        last_updated=_epoch_millis(rate.last_updated),
    )

    return SymbolKeyRecord(symbol=key), value
