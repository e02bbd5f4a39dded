import logging
from pathlib import Path

import pytest

from src.utils.core import logger as logger_mod


@pytest.fixture
def captured():
    """Attach an in-memory loguru sink and yield the captured records."""
    logger_mod.get_logger(__name__)
    records = []
    sink_id = logger_mod._loguru_logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger_mod._loguru_logger.remove(sink_id)


def test_get_logger_creates_file(tmp_path: Path, monkeypatch) -> None:
    """Ensure the central logger writes a log file sink for a bound utility logger."""
    monkeypatch.setenv("EXCHANGE_RATES_LOG_DIR", str(tmp_path))

    try:
        lg = logger_mod.get_logger(__name__, utility="testutil")
        assert hasattr(lg, "info")

        lg.info("unit test log entry")
        logger_mod._loguru_logger.complete()

        util_dir = tmp_path / "testutil"
        files = list(util_dir.glob("testutil_*.log"))
        assert files, f"no log files were created in {util_dir}"
        assert "unit test log entry" in files[0].read_text(encoding="utf-8")
    finally:
        logger_mod.shutdown_logging()


def test_no_file_sink_without_log_dir(monkeypatch) -> None:
    monkeypatch.delenv("EXCHANGE_RATES_LOG_DIR", raising=False)
    logger_mod.shutdown_logging()

    logger_mod.get_logger("src.exchange_rates.anything")

    assert logger_mod._file_sink_ids == {}
    assert logger_mod._sinks_initialized


def test_utility_is_inferred_from_module_name(captured) -> None:
    logger_mod.get_logger("src.exchange_rates.coingecko.client").warning("a")
    logger_mod.get_logger("somewhere.else").warning("b")

    assert [r["extra"]["utility"] for r in captured] == ["exchange_rates", "general"]


def test_stdlib_logging_is_intercepted_ascii_safe(captured) -> None:
    logger_mod.get_logger(__name__)

    logging.getLogger("urllib3.test").warning("café unreachable")

    messages = [r["message"] for r in captured]
    assert "caf? unreachable" in messages


def test_shutdown_logging_is_idempotent() -> None:
    logger_mod.shutdown_logging()
    logger_mod.shutdown_logging()

    assert logger_mod._console_sink_id is None
    assert not logger_mod._sinks_initialized
