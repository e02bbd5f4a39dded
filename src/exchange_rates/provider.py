"""
Exchange-rate provider interface and registry
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from src.exchange_rates.emitter import EmittedRecord


class ExchangeProvider(ABC):
    """A source of exchange-rate records, polled by the host runtime"""

    name: str = ""

    @abstractmethod
    def fetch(self) -> List[EmittedRecord]:
        """Return every record for one poll cycle, in emission order"""

    def close(self) -> None:
        """Release resources held by the provider"""


PROVIDERS: Dict[str, Type[ExchangeProvider]] = {}


def register_provider(name: str) -> Callable[[Type[ExchangeProvider]], Type[ExchangeProvider]]:
    """Class decorator registering a provider under `name`"""

    def decorator(cls: Type[ExchangeProvider]) -> Type[ExchangeProvider]:
        if name in PROVIDERS and PROVIDERS[name] is not cls:
            raise ValueError(f"Provider '{name}' is already registered")
        cls.name = name
        PROVIDERS[name] = cls
        return cls

    return decorator


def get_provider(name: str, options: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> ExchangeProvider:
    """Instantiate the provider registered under `name`"""
    try:
        provider_cls = PROVIDERS[name.lower()]
    except KeyError:
        available = ", ".join(sorted(PROVIDERS)) or "none"
        raise ValueError(f"Unknown exchange provider '{name}' (available: {available})") from None
    return provider_cls(options, **kwargs)
