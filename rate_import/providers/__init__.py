from .base import CurrencyRateProvider, RateFetchResult, RateTable
from .fixerio import FixerIoRateProvider

__all__ = ["CurrencyRateProvider", "FixerIoRateProvider", "RateFetchResult", "RateTable"]
