"""
Record emission: wraps mapped key/value pairs with the source identity
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from src.exchange_rates.schema import (
    KEY_SCHEMA,
    VALUE_SCHEMA,
    ExchangeRateRecord,
    SymbolKeyRecord,
)

MappedRate = Tuple[SymbolKeyRecord, ExchangeRateRecord]


@dataclass(frozen=True)
class SourceIdentity:
    """Logical origin of emitted records: a fixed partition and an always-empty offset"""

    partition: Dict[str, str]
    offset: Dict[str, Any] = field(default_factory=dict)


COINGECKO_SOURCE = SourceIdentity(partition={"id": "coingecko"})


@dataclass(frozen=True)
class EmittedRecord:
    """A record ready for hand-off to the host runtime"""

    source_partition: Dict[str, str]
    source_offset: Dict[str, Any]
    topic: str
    key_schema: Dict[str, Any]
    key: Dict[str, Any]
    value_schema: Dict[str, Any]
    value: Dict[str, Any]


def emit_records(
    mapped: Iterable[MappedRate],
    topic: str,
    identity: SourceIdentity = COINGECKO_SOURCE,
) -> List[EmittedRecord]:
    """Wrap each mapped (key, value) pair with the source identity, preserving order"""
    return [
        EmittedRecord(
            source_partition=dict(identity.partition),
            source_offset=dict(identity.offset),
            topic=topic,
            key_schema=KEY_SCHEMA,
            key=key.model_dump(),
            value_schema=VALUE_SCHEMA,
            value=value.model_dump(),
        )
        for key, value in mapped
    ]
