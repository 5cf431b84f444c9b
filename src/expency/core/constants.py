"""Shared expense vocabulary.

Categories and payment modes are used by the database schema, the request
schemas and the budgeting rule table. Changing a category here means updating
the rule table in ``expency.engine.rules`` as well.
"""

from enum import Enum


class Category(str, Enum):
    """Expense categories."""

    FOOD = "Food & Snacks"
    TRANSPORT = "Transport"
    STUDY = "Study Materials"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    RECHARGE = "Recharge & Internet"
    RENT = "Hostel/Rent"
    MEDICAL = "Medical"
    GROOMING = "Grooming"
    OTHERS = "Others"


class PaymentMode(str, Enum):
    """How an expense was paid."""

    CASH = "Cash"
    UPI = "UPI"
    CARD = "Card"
    NET_BANKING = "Net Banking"


EXPENSE_CATEGORIES: tuple[str, ...] = tuple(c.value for c in Category)

DEFAULT_PAYMENT_MODE = PaymentMode.UPI
