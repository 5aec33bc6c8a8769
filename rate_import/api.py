"""FastAPI router exposing the rate import."""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from .config import (
    ALLOWED_CURRENCY_CONFIG_PATH,
    BASE_CURRENCY_CONFIG_PATH,
    ConfigReader,
    SettingsConfigReader,
)
from .models import ErrEnvelope, ErrorBody, ErrorCode, OkEnvelope, RatesResponse
from .providers import CurrencyRateProvider, FixerIoRateProvider
from .settings import get_settings
from .utils.currency import is_currency_code, parse_currency_list

logger = logging.getLogger(__name__)

router = APIRouter()


def config_dep() -> ConfigReader:
    return SettingsConfigReader(get_settings())


def provider_dep(config: ConfigReader = Depends(config_dep)) -> CurrencyRateProvider:
    return FixerIoRateProvider(config)


def bad_input(message: str, **details) -> JSONResponse:
    payload = ErrEnvelope(
        error=ErrorBody(code=ErrorCode.BAD_INPUT, message=message, details=details or None)
    )
    return JSONResponse(status_code=400, content=jsonable_encoder(payload))


def _invalid_codes(codes: List[str]) -> List[str]:
    return [c for c in codes if not is_currency_code(c)]


@router.get("/rates")
async def rates(
    base: Optional[str] = Query(None, description="Base currencies CSV, e.g. USD,EUR"),
    symbols: Optional[str] = Query(None, description="Target currencies CSV, e.g. EUR,JPY"),
    provider: CurrencyRateProvider = Depends(provider_dep),
    config: ConfigReader = Depends(config_dep),
):
    if base is None:
        base = config.get_value(BASE_CURRENCY_CONFIG_PATH)
    if symbols is None:
        symbols = config.get_value(ALLOWED_CURRENCY_CONFIG_PATH)
    bases = parse_currency_list(base)
    targets = parse_currency_list(symbols)

    if not bases:
        return bad_input("base currency required")
    if not targets:
        return bad_input("target currencies required")
    invalid = _invalid_codes(bases + targets)
    if invalid:
        return bad_input("invalid currency code", codes=invalid)

    result = await provider.fetch(bases, targets)
    if result.partial:
        logger.info("Rate import finished with %d message(s)", len(result.messages))

    body = RatesResponse.from_table(result.rates, result.messages)
    envelope = OkEnvelope(data=body.model_dump(), partial=result.partial or None)
    return JSONResponse(content=jsonable_encoder(envelope))
