"""Expense model representing a single recorded spend."""
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import BigInteger, Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from expency.config import settings
from expency.core.constants import DEFAULT_PAYMENT_MODE
from expency.models.base import Entity, SoftDeletable


def to_minor_units(amount: Decimal) -> int:
    """Convert a rupee amount to paise."""
    return int(amount.scaleb(settings.currency_minor_unit).to_integral_value())


def from_minor_units(amount_minor: int) -> Decimal:
    """Convert paise to a rupee amount."""
    return Decimal(amount_minor).scaleb(-settings.currency_minor_unit)


class Expense(SoftDeletable, Entity):
    """Expense owned by a user. Amounts are stored in minor units (paise).

    Deleting an expense only stamps ``deleted_at`` (see ``SoftDeletable``).
    """

    __tablename__ = "expenses"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description: Mapped[str] = mapped_column(String(200), nullable=False)
    amount_minor: Mapped[int] = mapped_column(BigInteger, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    expense_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    payment_mode: Mapped[str] = mapped_column(
        String(20), nullable=False, default=DEFAULT_PAYMENT_MODE.value
    )
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        Index("ix_expenses_user_id_expense_date", "user_id", "expense_date"),
    )

    user: Mapped["User"] = relationship("User", back_populates="expenses", lazy="raise")

    @property
    def amount(self) -> Decimal:
        return from_minor_units(self.amount_minor)

    @amount.setter
    def amount(self, value: Decimal) -> None:
        self.amount_minor = to_minor_units(value)

    def __repr__(self) -> str:
        return f"<Expense(id={self.id}, category={self.category}, amount={self.amount})>"
