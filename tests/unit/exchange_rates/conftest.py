import datetime

import pytest
from polyfactory.factories.pydantic_factory import ModelFactory

from src.exchange_rates.config import CoinGeckoConfig
from src.exchange_rates.coingecko.client import CoinGeckoClient
from src.exchange_rates.coingecko.models import ValidatedRate


class ValidatedRateFactory(ModelFactory):
    __model__ = ValidatedRate

    # sensible defaults for tests; override in calls
    symbol = "btc"
    id = "bitcoin"
    name = "Bitcoin"
    current_price = 67187.0
    market_cap_rank = 1
    last_updated = datetime.datetime(2024, 5, 1, 12, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def rate_factory():
    """
    Return the ValidatedRateFactory class for creating test ValidatedRate instances.

    Use e.g. `rate_factory.build(symbol="eth")` or `rate_factory.batch(n)`.
    """
    return ValidatedRateFactory


@pytest.fixture
def api_config():
    """CoinGecko settings pointing at the public host with no retries or jitter."""
    return CoinGeckoConfig(REQUEST_TIMEOUT=5.0, PAGE_RETRY_ATTEMPTS=0, RETRY_JITTER=False)


@pytest.fixture
def make_client(api_config, fake_session_factory):
    """Return a callable building a CoinGeckoClient over a FakeSession replaying `responses`."""

    def _make(responses, config=None):
        session = fake_session_factory(responses)
        return CoinGeckoClient(config or api_config, session=session), session

    return _make
