"""Pydantic models for the rate_import HTTP surface."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorCode(str, Enum):
    BAD_INPUT = "BAD_INPUT"


class ErrorBody(BaseModel):
    code: ErrorCode
    message: str
    source: str = "rate_import"
    retriable: bool = False
    details: Optional[Dict[str, Any]] = None


class OkEnvelope(BaseModel):
    ok: bool = True
    data: Dict[str, Any]
    ts: datetime = Field(default_factory=_utcnow)
    partial: Optional[bool] = None


class ErrEnvelope(BaseModel):
    ok: bool = False
    error: ErrorBody
    ts: datetime = Field(default_factory=_utcnow)


class RatesResponse(BaseModel):
    # rates as strings to keep the 12 digit precision through JSON
    rates: Dict[str, Dict[str, Optional[str]]]
    messages: List[str] = Field(default_factory=list)

    @classmethod
    def from_table(
        cls, table: Dict[str, Dict[str, Optional[Decimal]]], messages: List[str]
    ) -> "RatesResponse":
        rates = {
            base: {target: (None if rate is None else str(rate)) for target, rate in row.items()}
            for base, row in table.items()
        }
        return cls(rates=rates, messages=list(messages))
