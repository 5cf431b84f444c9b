"""Value objects for expense aggregation and budgeting suggestions.

All types are frozen dataclasses. The engine only ever builds new instances;
the records handed in by the persistence layer are never modified.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum


class SuggestionKind(str, Enum):
    WARNING = "warning"
    TIP = "tip"
    ALERT = "alert"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Sort weights only; larger sorts first.
PRIORITY_WEIGHTS: dict[Priority, int] = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


@dataclass(frozen=True)
class ExpenseRecord:
    """A single expense as seen by the engine."""

    category: str
    amount: Decimal
    date: date


@dataclass(frozen=True)
class DateWindow:
    """Inclusive date range."""

    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class CategoryTotal:
    """Per-category rollup of expense records."""

    category: str
    total: Decimal
    count: int

    @property
    def average(self) -> Decimal:
        # count is always >= 1 for emitted totals
        return self.total / self.count


@dataclass(frozen=True)
class Aggregation:
    category_totals: list[CategoryTotal] = field(default_factory=list)
    grand_total: Decimal = Decimal("0")

    @property
    def record_count(self) -> int:
        return sum(ct.count for ct in self.category_totals)


@dataclass(frozen=True)
class Tip:
    """Fixed advisory text attached to a budget rule."""

    message: str
    priority: Priority


@dataclass(frozen=True)
class BudgetRule:
    """Monthly ceiling for one category.

    A ``max_amount`` of zero means the category is treated as a fixed cost
    and never checked against a ceiling.
    """

    category: str
    max_amount: Decimal
    expected_percentage: int
    tip: Tip | None = None

    @property
    def has_ceiling(self) -> bool:
        return self.max_amount > 0


@dataclass(frozen=True)
class Suggestion:
    category: str
    kind: SuggestionKind
    message: str
    priority: Priority
    potential_savings: Decimal | None = None


@dataclass(frozen=True)
class SuggestionReport:
    suggestions: list[Suggestion]
    total_expenses: Decimal
    recommended_budget: Decimal
