"""Response schemas for statistics and budgeting suggestions.

These mirror the engine's value objects one-to-one; nothing here recomputes
totals.
"""

from pydantic import BaseModel, Field

from expency.engine import share_of_total
from expency.engine.models import Aggregation, Priority, SuggestionKind, SuggestionReport
from expency.schemas.common import Money, MoneyMeta, PeriodMeta


class CategoryTotalResponse(BaseModel):
    category: str
    total: Money
    count: int
    average: Money
    percentage: Money = Field(description="Share of the grand total (0-100)")


class StatisticsResponse(BaseModel):
    """Per-category totals for a period, highest spend first."""

    category_totals: list[CategoryTotalResponse]
    grand_total: Money
    record_count: int
    period: PeriodMeta | None = None
    money: MoneyMeta

    @classmethod
    def from_aggregation(
        cls, aggregation: Aggregation, period: PeriodMeta | None, money: MoneyMeta
    ) -> "StatisticsResponse":
        return cls(
            category_totals=[
                CategoryTotalResponse(
                    category=ct.category,
                    total=ct.total,
                    count=ct.count,
                    average=ct.average,
                    percentage=share_of_total(ct.total, aggregation.grand_total),
                )
                for ct in aggregation.category_totals
            ],
            grand_total=aggregation.grand_total,
            record_count=aggregation.record_count,
            period=period,
            money=money,
        )


class SuggestionResponse(BaseModel):
    category: str
    kind: SuggestionKind
    message: str
    priority: Priority
    potential_savings: Money | None = None


class SuggestionsResponse(BaseModel):
    suggestions: list[SuggestionResponse]
    total_expenses: Money
    recommended_budget: Money
    period: PeriodMeta | None = None

    @classmethod
    def from_report(
        cls, report: SuggestionReport, period: PeriodMeta | None
    ) -> "SuggestionsResponse":
        return cls(
            suggestions=[
                SuggestionResponse(
                    category=s.category,
                    kind=s.kind,
                    message=s.message,
                    priority=s.priority,
                    potential_savings=s.potential_savings,
                )
                for s in report.suggestions
            ],
            total_expenses=report.total_expenses,
            recommended_budget=report.recommended_budget,
            period=period,
        )
