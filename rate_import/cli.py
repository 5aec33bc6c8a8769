#!/usr/bin/env python3
"""
One-shot currency rate import.

Fetches rates once and prints the rate table with any messages as JSON,
for use from a scheduled job.

Usage:
    python -m rate_import.cli [--base USD,EUR] [--symbols EUR,JPY] [--api-key KEY]

Environment variables:
    FIXERIO_API_KEY: Fixer (apilayer) access key
    FIXERIO_TIMEOUT_SEC: request timeout in seconds (default: 100)
    CURRENCY_BASE / CURRENCY_ALLOW: default base and target currencies (CSV)
    LOG_LEVEL: Logging level (default: INFO)
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .config import ALLOWED_CURRENCY_CONFIG_PATH, BASE_CURRENCY_CONFIG_PATH, SettingsConfigReader
from .models import RatesResponse
from .providers import FixerIoRateProvider
from .settings import get_settings
from .utils.currency import parse_currency_list

logger = logging.getLogger("rate_import.cli")


def build_parser() -> argparse.ArgumentParser:
    config = SettingsConfigReader(get_settings())
    parser = argparse.ArgumentParser(description="Fetch currency rates from Fixer")
    parser.add_argument(
        "--base",
        default=config.get_value(BASE_CURRENCY_CONFIG_PATH),
        help="Base currencies, comma separated",
    )
    parser.add_argument(
        "--symbols",
        default=config.get_value(ALLOWED_CURRENCY_CONFIG_PATH),
        help="Target currencies, comma separated",
    )
    parser.add_argument(
        "--api-key",
        default=None,
        help="Override FIXERIO_API_KEY",
    )
    return parser


async def run(base: List[str], symbols: List[str], api_key: Optional[str] = None) -> RatesResponse:
    cfg = get_settings()
    if api_key:
        cfg = cfg.model_copy(update={"FIXERIO_API_KEY": api_key})
    provider = FixerIoRateProvider(SettingsConfigReader(cfg))
    result = await provider.fetch(base, symbols)
    for message in result.messages:
        logger.warning(message)
    return RatesResponse.from_table(result.rates, result.messages)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    args = build_parser().parse_args(argv)
    base = parse_currency_list(args.base)
    symbols = parse_currency_list(args.symbols)
    if not base or not symbols:
        logger.error("Both base and target currencies are required")
        return 2

    response = asyncio.run(run(base, symbols, api_key=args.api_key))
    print(json.dumps(response.model_dump(), indent=2))
    return 1 if response.messages else 0


if __name__ == "__main__":
    sys.exit(main())
