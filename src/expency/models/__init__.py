"""Database models."""
from expency.models.user import User
from expency.models.expense import Expense

__all__ = ["User", "Expense"]
