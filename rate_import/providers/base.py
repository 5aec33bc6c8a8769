"""Currency rate provider capability."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

RateTable = Dict[str, Dict[str, Optional[Decimal]]]


@dataclass(slots=True)
class RateFetchResult:
    """Rate table and diagnostic messages of a single fetch."""

    rates: RateTable = field(default_factory=dict)
    messages: List[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.messages)


class CurrencyRateProvider(ABC):
    """Something that can turn base/target currency sets into a rate table.

    ``fetch`` never raises: failures show up as ``None`` rates plus messages.
    """

    def __init__(self) -> None:
        self._messages: List[str] = []

    @abstractmethod
    async def fetch(
        self, base_currencies: Iterable[str], target_currencies: Iterable[str]
    ) -> RateFetchResult:
        raise NotImplementedError

    async def fetch_rates(
        self, base_currencies: Iterable[str], target_currencies: Iterable[str]
    ) -> RateTable:
        """Return the rate table; messages of this run stay readable via ``messages``."""
        result = await self.fetch(base_currencies, target_currencies)
        self._messages = list(result.messages)
        return result.rates

    @property
    def messages(self) -> List[str]:
        return list(self._messages)

    def get_messages(self) -> List[str]:
        return self.messages
