"""Shared response building blocks."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import BaseModel, Field, PlainSerializer


def _money_to_json(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


# Decimal in Python, a two-decimal JSON number on the wire.
Money = Annotated[Decimal, PlainSerializer(_money_to_json, return_type=float, when_used="json")]


class MoneyMeta(BaseModel):
    """Metadata describing how monetary amounts are represented."""

    currency: str = Field(description="ISO currency code (e.g., INR)")
    minor_unit: int = Field(description="Number of decimal places for the currency")


class PaginationMeta(BaseModel):
    page: int = Field(description="Current page (1-indexed)")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Total matching items")
    total_pages: int = Field(description="Total number of pages")


class PeriodMeta(BaseModel):
    """Calendar month a summary covers; absent when covering all time."""

    month: int
    year: int
