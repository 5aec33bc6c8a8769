from __future__ import annotations

import pytest

from rate_import.config import (
    ALLOWED_CURRENCY_CONFIG_PATH,
    API_KEY_CONFIG_PATH,
    BASE_CURRENCY_CONFIG_PATH,
    TIMEOUT_CONFIG_PATH,
    URL_CONFIG_PATH,
    SettingsConfigReader,
)
from rate_import.providers.fixerio import CURRENCY_CONVERTER_URL, DEFAULT_TIMEOUT_SEC, FixerIoRateProvider
from rate_import.settings import Settings
from rate_import.utils.currency import is_currency_code, parse_currency_list
from rate_import.utils.urls import service_host

from .conftest import StubConfig


def test_settings_reader_maps_currency_paths():
    reader = SettingsConfigReader(Settings(
        FIXERIO_API_KEY="abc",
        FIXERIO_TIMEOUT_SEC=12.5,
        CURRENCY_BASE="EUR",
        CURRENCY_ALLOW="EUR,GBP",
    ))
    assert reader.get_value(API_KEY_CONFIG_PATH) == "abc"
    assert reader.get_value(TIMEOUT_CONFIG_PATH, "website") == 12.5
    assert reader.get_value(URL_CONFIG_PATH) == CURRENCY_CONVERTER_URL
    assert reader.get_value(BASE_CURRENCY_CONFIG_PATH) == "EUR"
    assert reader.get_value(ALLOWED_CURRENCY_CONFIG_PATH) == "EUR,GBP"
    assert reader.get_value("currency/unknown/path") is None


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("FIXERIO_API_KEY", "from-env")
    monkeypatch.setenv("fixerio_timeout_sec", "3")
    cfg = Settings()
    assert cfg.FIXERIO_API_KEY == "from-env"
    assert cfg.FIXERIO_TIMEOUT_SEC == 3.0


@pytest.mark.parametrize("raw", [None, "", "abc", 0, -5])
def test_timeout_falls_back_to_default(raw):
    provider = FixerIoRateProvider(StubConfig({TIMEOUT_CONFIG_PATH: raw}))
    assert provider._timeout() == DEFAULT_TIMEOUT_SEC


def test_provider_reads_store_scope(config):
    provider = FixerIoRateProvider(config)
    assert provider._access_key() == "test-key"
    assert config.lookups == [(API_KEY_CONFIG_PATH, "store")]


def test_build_url_substitutes_placeholders(config):
    provider = FixerIoRateProvider(config)
    url = provider.build_url("secret", "USD", ["EUR", "JPY"])
    assert url == "https://api.apilayer.com/fixer/latest?symbols=EUR,JPY&base=USD"


def test_parse_currency_list():
    assert parse_currency_list("usd, eur,,USD ,jpy") == ["USD", "EUR", "JPY"]
    assert parse_currency_list(["gbp", "GBP", " chf "]) == ["GBP", "CHF"]
    assert parse_currency_list(None) == []
    assert parse_currency_list("") == []


def test_is_currency_code():
    assert is_currency_code("USD")
    assert is_currency_code(" eur ")
    assert not is_currency_code("EURO")
    assert not is_currency_code("U5D")
    assert not is_currency_code("")


def test_service_host():
    assert service_host("https://api.apilayer.com/fixer/latest?symbols=EUR&base=USD") == "https://api.apilayer.com"
    assert service_host("http://fixer.test:8080/latest?access_key=x") == "http://fixer.test"
