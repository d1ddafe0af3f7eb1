"""Pytest conftest: path setup and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so `import scrimdesk` works without install
PROJECT_DIR = Path(__file__).resolve().parent.parent
if str(PROJECT_DIR) not in sys.path:
    sys.path.insert(0, str(PROJECT_DIR))

# Add tests/ to sys.path so `from helpers import ...` works
TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import FakeHttp, FakeSheetsApi  # noqa: E402


@pytest.fixture
def sheets_api(monkeypatch):
    """Google Sheets API stand-in wired into requests.get."""
    from scrimdesk import sheets

    api = FakeSheetsApi()
    monkeypatch.setattr(sheets.requests, "get", api)
    return api


@pytest.fixture
def http_post(monkeypatch):
    """Scripted requests.post; queue responses with http_post.respond(...)."""
    import requests

    fake = FakeHttp()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def client(monkeypatch):
    """Flask test client with empty caches and known credentials."""
    from scrimdesk import app as app_module
    from scrimdesk import config

    monkeypatch.setattr(config, "GOOGLE_SHEETS_API_KEY", "sheets-key")
    monkeypatch.setattr(config, "GRID_API_KEY", "grid-key")
    monkeypatch.setattr(config, "RELAY_URL", "https://relay.test/functions/v1/grid-api")
    monkeypatch.setattr(config, "RELAY_TOKEN", "relay-token")
    monkeypatch.setattr(config, "SCRIM_SHEET_ID", "")
    app_module.scrims_cache.clear()

    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c

    app_module.scrims_cache.clear()
