from __future__ import annotations

import pathlib
import sys
from typing import Any, Dict, Optional

import pytest
from starlette.testclient import TestClient

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rate_import.config import API_KEY_CONFIG_PATH, TIMEOUT_CONFIG_PATH  # noqa: E402

FIXER_URL = "https://api.apilayer.com/fixer/latest"


class StubConfig:
    """In-memory ConfigReader; records every lookup."""

    def __init__(self, values: Optional[Dict[str, Any]] = None) -> None:
        self.values = dict(values or {})
        self.lookups: list[tuple[str, str]] = []

    def get_value(self, path: str, scope: str = "store") -> Any:
        self.lookups.append((path, scope))
        return self.values.get(path)


@pytest.fixture()
def config() -> StubConfig:
    return StubConfig({API_KEY_CONFIG_PATH: "test-key", TIMEOUT_CONFIG_PATH: 7})


@pytest.fixture()
def app_settings(monkeypatch):
    from rate_import.settings import get_settings

    cfg = get_settings()
    monkeypatch.setattr(cfg, "FIXERIO_API_KEY", "test-key")
    monkeypatch.setattr(cfg, "CURRENCY_BASE", "USD")
    monkeypatch.setattr(cfg, "CURRENCY_ALLOW", "EUR,USD")
    return cfg


@pytest.fixture()
def app():
    from rate_import.main import app as fastapi_app

    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    return TestClient(app)
