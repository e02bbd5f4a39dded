import pytest

from src.exchange_rates import config as config_mod
from src.exchange_rates.config import CoinGeckoConfig, ConnectorConfig, TOPIC_CONFIG_DEFAULT


def test_from_options_defaults():
    cfg = ConnectorConfig.from_options({})

    assert cfg == ConnectorConfig(topic=TOPIC_CONFIG_DEFAULT, currency="usd", per_page=250)
    assert ConnectorConfig.from_options(None) == cfg


def test_from_options_values_and_string_page_size():
    cfg = ConnectorConfig.from_options({"topic": "fx", "currency": "eur", "per_page": "100"})

    assert cfg.topic == "fx"
    assert cfg.currency == "eur"
    assert cfg.per_page == 100


def test_from_options_null_values_fall_back():
    cfg = ConnectorConfig.from_options({"topic": None, "currency": None, "per_page": None})

    assert cfg == ConnectorConfig.from_options({})


@pytest.mark.parametrize("bad", ["ten", "2.5", 2.5, 2.5j, True, [250], float("nan")])
def test_from_options_rejects_non_integer_page_size(bad):
    with pytest.raises(ValueError):
        ConnectorConfig.from_options({"per_page": bad})


def test_from_options_accepts_whole_float_page_size():
    assert ConnectorConfig.from_options({"per_page": 250.0}).per_page == 250
    assert isinstance(ConnectorConfig.from_options({"per_page": 250.0}).per_page, int)


def test_connector_config_is_immutable():
    cfg = ConnectorConfig()

    with pytest.raises(Exception):
        cfg.per_page = 5


def test_coingecko_config_from_env(monkeypatch):
    monkeypatch.setenv("COINGECKO_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("COINGECKO_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("COINGECKO_PAGE_RETRY_ATTEMPTS", "3")
    monkeypatch.setenv("COINGECKO_RETRY_JITTER", "no")

    cfg = CoinGeckoConfig.from_env()

    assert cfg.markets_url == "http://localhost:8080/api/v3/coins/markets"
    assert cfg.REQUEST_TIMEOUT == 2.5
    assert cfg.PAGE_RETRY_ATTEMPTS == 3
    assert cfg.RETRY_JITTER is False


def test_module_config_defaults_to_single_attempt():
    assert isinstance(config_mod.config, CoinGeckoConfig)
    assert CoinGeckoConfig().PAGE_RETRY_ATTEMPTS == 0
