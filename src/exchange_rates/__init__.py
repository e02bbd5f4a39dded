"""
Exchange-rate source connector

Polls market-data APIs, validates and maps each asset's rates onto a fixed
wire schema, and returns key/value records for a message-broker topic.
"""

from .config import CoinGeckoConfig, ConnectorConfig, TOPIC_CONFIG_DEFAULT
from .schema import KEY_SCHEMA, VALUE_SCHEMA, ExchangeRateRecord, SymbolKeyRecord
from .emitter import COINGECKO_SOURCE, EmittedRecord, SourceIdentity, emit_records
from .provider import PROVIDERS, ExchangeProvider, get_provider, register_provider
from .coingecko import CoinGeckoExchangeProvider, poll

__version__ = "1.0.0"

__all__ = [
    "CoinGeckoConfig",
    "ConnectorConfig",
    "TOPIC_CONFIG_DEFAULT",
    "KEY_SCHEMA",
    "VALUE_SCHEMA",
    "ExchangeRateRecord",
    "SymbolKeyRecord",
    "COINGECKO_SOURCE",
    "EmittedRecord",
    "SourceIdentity",
    "emit_records",
    "PROVIDERS",
    "ExchangeProvider",
    "get_provider",
    "register_provider",
    "CoinGeckoExchangeProvider",
    "poll",
]
