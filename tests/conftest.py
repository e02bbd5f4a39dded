import time
import pytest
import sys
from pathlib import Path

# Load shared fixtures from tests._fixtures so pytest discovers them
pytest_plugins = [
    "tests._fixtures.plugin",
]

# Ensure the repository root is importable so `src.` imports resolve
root = Path(__file__).resolve().parent.parent
root_path = str(root)
if root_path not in sys.path:
    sys.path.insert(0, root_path)


@pytest.fixture(autouse=True)
def no_sleep(mocker):
    """Prevent actual sleeping in tests to speed up retry/backoff paths."""
    mocker.patch.object(time, "sleep", lambda s: None)


@pytest.fixture(autouse=True)
def patch_network(mocker):
    """Autouse fixture: prevent any test from performing real network calls"""
    from tests._fixtures.remote_api_responses import canned_api_factory

    mocker.patch(
        "requests.Session.get",
        return_value=canned_api_factory("empty"),
    )
    yield
