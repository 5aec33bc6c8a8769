"""
Fixer (apilayer) rate provider.

One GET per base currency, all targets requested at once through ``symbols``.
Every failure is recovered locally: the affected rates become ``None`` and a
message is recorded for the host to show.
"""
from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx

from ..config import (
    SCOPE_STORE,
    API_KEY_CONFIG_PATH,
    TIMEOUT_CONFIG_PATH,
    URL_CONFIG_PATH,
    ConfigReader,
    SettingsConfigReader,
)
from ..utils.currency import parse_currency_list
from ..utils.urls import service_host
from .base import CurrencyRateProvider, RateFetchResult

logger = logging.getLogger(__name__)

CURRENCY_CONVERTER_URL = (
    "https://api.apilayer.com/fixer/latest?symbols={currency_to}&base={currency_from}"
)
DEFAULT_TIMEOUT_SEC = 100.0
RATE_PRECISION = 12
MAX_ATTEMPTS = 2  # first call plus one immediate retry

MSG_NO_API_KEY = "No API Key was specified or an invalid API Key was specified."
MSG_INACTIVE_ACCOUNT = "The account this API request is coming from is inactive."
MSG_BASE_NOT_ALLOWED = 'The "{base}" is not allowed as base currency for your subscription plan.'
MSG_INVALID_BASE = "An invalid base currency has been entered."
MSG_GENERIC = "Currency rates can't be retrieved."
MSG_NO_RATE = "We can't retrieve a rate from {host} for {currency}."

ERROR_MESSAGES: Dict[int, str] = {
    101: MSG_NO_API_KEY,
    102: MSG_INACTIVE_ACCOUNT,
    105: MSG_BASE_NOT_ALLOWED,
    201: MSG_INVALID_BASE,
}

HttpClientFactory = Callable[[], httpx.AsyncClient]


def number_format(value: Any) -> Decimal:
    """Rate as Decimal with RATE_PRECISION fractional digits. Raises on non-numeric or non-finite input."""
    rate = Decimal(str(value))
    if not rate.is_finite():
        raise InvalidOperation(f"non-finite rate {value!r}")
    quantum = Decimal(1).scaleb(-RATE_PRECISION)
    with localcontext() as ctx:
        # room for every integer digit plus the fractional ones
        ctx.prec = max(ctx.prec, rate.adjusted() + RATE_PRECISION + 1)
        return rate.quantize(quantum, rounding=ROUND_HALF_UP)


def empty_rates(currencies_to: Iterable[str]) -> Dict[str, Optional[Decimal]]:
    return dict.fromkeys(currencies_to)


def error_message(response: Dict[str, Any], base_currency: str) -> str:
    """Map a rejected response to its user-facing message."""
    error = response.get("error")
    code = error.get("code") if isinstance(error, dict) else None
    if isinstance(code, bool):
        code = None
    try:
        template = ERROR_MESSAGES.get(int(code), MSG_GENERIC)
    except (TypeError, ValueError, OverflowError):
        template = MSG_GENERIC
    return template.format(base=base_currency)


class FixerIoRateProvider(CurrencyRateProvider):
    """Fetch rates from the Fixer API, one request per base currency."""

    def __init__(
        self,
        config: Optional[ConfigReader] = None,
        http_client_factory: Optional[HttpClientFactory] = None,
    ) -> None:
        super().__init__()
        self._config = config or SettingsConfigReader()
        self._client_factory = http_client_factory or httpx.AsyncClient

    # ------------------------------------------------------------------ config

    def _access_key(self) -> str:
        value = self._config.get_value(API_KEY_CONFIG_PATH, SCOPE_STORE)
        return str(value).strip() if value else ""

    def _timeout(self) -> float:
        value = self._config.get_value(TIMEOUT_CONFIG_PATH, SCOPE_STORE)
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            return DEFAULT_TIMEOUT_SEC
        return timeout if timeout > 0 else DEFAULT_TIMEOUT_SEC

    def _url_template(self) -> str:
        return self._config.get_value(URL_CONFIG_PATH, SCOPE_STORE) or CURRENCY_CONVERTER_URL

    def build_url(self, access_key: str, currency_from: str, currencies_to: List[str]) -> str:
        url = self._url_template()
        for placeholder, value in (
            ("{access_key}", access_key),
            ("{currency_from}", currency_from),
            ("{currency_to}", ",".join(currencies_to)),
        ):
            url = url.replace(placeholder, value)
        return url

    # ------------------------------------------------------------------- fetch

    async def fetch(
        self, base_currencies: Iterable[str], target_currencies: Iterable[str]
    ) -> RateFetchResult:
        result = RateFetchResult()
        currencies_to = parse_currency_list(target_currencies)
        for currency_from in parse_currency_list(base_currencies):
            rates = await self._convert_batch(currency_from, currencies_to, result.messages)
            result.rates[currency_from] = dict(sorted(rates.items()))
        return result

    async def _convert_batch(
        self, currency_from: str, currencies_to: List[str], messages: List[str]
    ) -> Dict[str, Optional[Decimal]]:
        access_key = self._access_key()
        if not access_key:
            logger.warning("Fixer API key missing, skipping %s", currency_from)
            messages.append(MSG_NO_API_KEY)
            return empty_rates(currencies_to)

        url = self.build_url(access_key, currency_from, currencies_to)
        response = await self._get_service_response(url, access_key)

        if not self._validate_response(response, currency_from, messages):
            return empty_rates(currencies_to)

        received = response.get("rates")
        if not isinstance(received, dict):
            received = {}

        rates: Dict[str, Optional[Decimal]] = {}
        for currency_to in currencies_to:
            if currency_from == currency_to:
                rates[currency_to] = number_format(1)
                continue
            rate = self._parse_rate(received.get(currency_to))
            if rate is None:
                logger.info("No %s rate for %s in Fixer response", currency_to, currency_from)
                messages.append(MSG_NO_RATE.format(host=service_host(url), currency=currency_to))
            rates[currency_to] = rate
        return rates

    @staticmethod
    def _parse_rate(raw: Any) -> Optional[Decimal]:
        # zero and blanks count as missing
        if not raw or isinstance(raw, bool):
            return None
        try:
            return number_format(raw)
        except (InvalidOperation, ValueError):
            return None

    async def _get_service_response(self, url: str, access_key: str) -> Dict[str, Any]:
        """GET the URL, retrying once; an empty dict when both attempts fail."""
        headers = {"Content-Type": "text/plain", "apikey": access_key}
        timeout = self._timeout()
        host = service_host(url)
        for attempt in range(MAX_ATTEMPTS):
            try:
                async with self._client_factory() as client:
                    r = await client.get(url, headers=headers, timeout=timeout)
                    data = r.json()
                if not isinstance(data, dict):
                    raise ValueError(f"unexpected payload type {type(data).__name__}")
                return data
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Fixer request to %s failed (attempt %d/%d): %s",
                    host, attempt + 1, MAX_ATTEMPTS, exc,
                )
        return {}

    def _validate_response(
        self, response: Dict[str, Any], base_currency: str, messages: List[str]
    ) -> bool:
        if response.get("success"):
            return True
        message = error_message(response, base_currency)
        logger.warning("Fixer rejected %s: %s", base_currency, message)
        messages.append(message)
        return False


__all__ = [
    "CURRENCY_CONVERTER_URL",
    "ERROR_MESSAGES",
    "FixerIoRateProvider",
    "MSG_GENERIC",
    "MSG_NO_API_KEY",
    "MSG_NO_RATE",
    "number_format",
]
