"""Scoped configuration access for rate providers.

Providers read their options through ``ConfigReader.get_value(path, scope)``
so a host platform can plug in its own store-scoped settings. The default
reader serves the same paths from environment-backed ``Settings``.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Protocol

from .settings import Settings, get_settings

SCOPE_STORE = "store"

API_KEY_CONFIG_PATH = "currency/fixerio/api_key"
TIMEOUT_CONFIG_PATH = "currency/fixerio/timeout"
URL_CONFIG_PATH = "currency/fixerio/url"
BASE_CURRENCY_CONFIG_PATH = "currency/options/base"
ALLOWED_CURRENCY_CONFIG_PATH = "currency/options/allow"


class ConfigReader(Protocol):
    def get_value(self, path: str, scope: str = SCOPE_STORE) -> Any: ...


class SettingsConfigReader:
    """Serve ``currency/*`` config paths from ``Settings``; unknown paths give None."""

    _PATHS: Dict[str, Callable[[Settings], Any]] = {
        API_KEY_CONFIG_PATH: lambda s: s.FIXERIO_API_KEY,
        TIMEOUT_CONFIG_PATH: lambda s: s.FIXERIO_TIMEOUT_SEC,
        URL_CONFIG_PATH: lambda s: s.FIXERIO_URL_TEMPLATE,
        BASE_CURRENCY_CONFIG_PATH: lambda s: s.CURRENCY_BASE,
        ALLOWED_CURRENCY_CONFIG_PATH: lambda s: s.CURRENCY_ALLOW,
    }

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def get_value(self, path: str, scope: str = SCOPE_STORE) -> Any:
        # scope resolution belongs to the host; a single settings object here
        getter = self._PATHS.get(path)
        if getter is None:
            return None
        return getter(self._settings)


__all__ = [
    "ALLOWED_CURRENCY_CONFIG_PATH",
    "API_KEY_CONFIG_PATH",
    "BASE_CURRENCY_CONFIG_PATH",
    "ConfigReader",
    "SCOPE_STORE",
    "SettingsConfigReader",
    "TIMEOUT_CONFIG_PATH",
    "URL_CONFIG_PATH",
]
