"""Pydantic schemas for expense CRUD endpoints."""

import datetime as dt
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from expency.core.constants import DEFAULT_PAYMENT_MODE, Category, PaymentMode
from expency.schemas.common import Money, MoneyMeta, PaginationMeta


def _strip(value: str | None) -> str | None:
    return value.strip() if isinstance(value, str) else value


class ExpenseCreate(BaseModel):
    """Request model for recording an expense. Amount is in rupees."""

    description: str = Field(..., min_length=3, max_length=200)
    amount: Decimal = Field(..., ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    category: Category
    date: dt.date = Field(default_factory=dt.date.today, description="Expense date")
    payment_mode: PaymentMode = DEFAULT_PAYMENT_MODE
    notes: str | None = Field(None, max_length=500)

    _strip_text = field_validator("description", "notes", mode="before")(_strip)


class ExpenseUpdate(BaseModel):
    """Partial update; only supplied fields change."""

    description: str | None = Field(None, min_length=3, max_length=200)
    amount: Decimal | None = Field(None, ge=Decimal("0.01"), max_digits=12, decimal_places=2)
    category: Category | None = None
    date: dt.date | None = None
    payment_mode: PaymentMode | None = None
    notes: str | None = Field(None, max_length=500)

    _strip_text = field_validator("description", "notes", mode="before")(_strip)


class ExpenseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    description: str
    amount: Money = Field(description="Amount in rupees")
    category: str
    date: dt.date = Field(validation_alias="expense_date")
    payment_mode: str
    notes: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


class ExpenseListResult(BaseModel):
    expenses: list[ExpenseResponse]
    pagination: PaginationMeta
    money: MoneyMeta


class MessageResponse(BaseModel):
    message: str
