"""
Wire schema for exchange-rate records

Key and value records are pydantic models; KEY_SCHEMA and VALUE_SCHEMA are
the matching Avro-style record schemas handed to the host runtime together
with each record.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

SCHEMA_NAMESPACE = "exchange_rates.avro"


class SymbolKeyRecord(BaseModel):
    """Record key: canonical (trimmed, uppercased) asset symbol"""

    symbol: str = Field(..., min_length=1, description="Canonical asset symbol")

    model_config = ConfigDict(frozen=True, extra="forbid")


class ExchangeRateRecord(BaseModel):
    """
    Record value: market data for one asset in the quoted currency

    The field set is fixed; fields the upstream API did not send are None.
    """

    symbol: str = Field(..., min_length=1)
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
    last_updated: Optional[int] = Field(None, description="Epoch milliseconds")

    model_config = ConfigDict(frozen=True, extra="forbid")


# (field name, avro type); nullable fields default to null
_VALUE_FIELDS: Tuple[Tuple[str, Union[str, Dict[str, Any]]], ...] = (
    ("symbol", "string"),
    ("id", "string"),
    ("name", "string"),
    ("image", "string"),
    ("current_price", "double"),
    ("market_cap", "double"),
    ("market_cap_rank", "long"),
    ("fully_diluted_valuation", "double"),
    ("total_volume", "double"),
    ("high_24h", "double"),
    ("low_24h", "double"),
    ("price_change_24h", "double"),
    ("price_change_percentage_24h", "double"),
    ("market_cap_change_24h", "double"),
    ("market_cap_change_percentage_24h", "double"),
    ("circulating_supply", "double"),
    ("total_supply", "double"),
    ("max_supply", "double"),
    ("last_updated", {"type": "long", "logicalType": "timestamp-millis"}),
)

_REQUIRED_VALUE_FIELDS = frozenset({"symbol"})


def _avro_field(name: str, avro_type: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    if name in _REQUIRED_VALUE_FIELDS:
        return {"name": name, "type": avro_type}
    return {"name": name, "type": ["null", avro_type], "default": None}


KEY_SCHEMA: Dict[str, Any] = {
    "type": "record",
    "name": "SymbolKeyRecord",
    "namespace": SCHEMA_NAMESPACE,
    "fields": [{"name": "symbol", "type": "string"}],
}

VALUE_SCHEMA: Dict[str, Any] = {
    "type": "record",
    "name": "TokenExchangeRateRecord",
    "namespace": SCHEMA_NAMESPACE,
    "fields": [_avro_field(name, avro_type) for name, avro_type in _VALUE_FIELDS],
}


def schema_field_names(schema: Dict[str, Any]) -> List[str]:
    """Return the ordered field names of a record schema"""
    return [f["name"] for f in schema["fields"]]
