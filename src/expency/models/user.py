"""User account that owns expenses."""
from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from expency.models.base import Entity


class User(Entity):
    """A registered student. Emails are stored lower-cased."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    # Accounts are switched off, never deleted.
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Expenses are always queried through ExpenseRepository with an owner filter;
    # touching this collection directly is a bug. ON DELETE CASCADE covers removal.
    expenses: Mapped[list["Expense"]] = relationship(
        "Expense", back_populates="user", lazy="raise", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, is_active={self.is_active})>"
