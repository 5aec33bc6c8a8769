"""Application settings for rate_import."""
from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    APP_NAME: str = "rate_import"
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Fixer (apilayer) provider
    # NOTE: key must be provided in env or .env, an empty key skips the network call
    FIXERIO_API_KEY: str = ""
    FIXERIO_TIMEOUT_SEC: float = 100.0
    FIXERIO_URL_TEMPLATE: str = (
        "https://api.apilayer.com/fixer/latest?symbols={currency_to}&base={currency_from}"
    )

    # Default currency sets (CSV), used when the caller does not pass any
    CURRENCY_BASE: str = "USD"
    CURRENCY_ALLOW: str = "EUR,USD"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
