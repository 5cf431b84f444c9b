"""Rule-based budgeting suggestions.

Turns per-category totals into a ranked list of advisory messages:

1. Ceiling warnings for every category spending above its ceiling
2. Static tips for the categories that carry one
3. An overall alert when total spend is far above the recommended budget
4. Stable sort by priority (high, medium, low)

Passes 1 and 2 run independently over the same rule table, so a single
over-budget category can produce both a warning and a tip.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from expency.engine.models import (
    PRIORITY_WEIGHTS,
    CategoryTotal,
    Priority,
    Suggestion,
    SuggestionKind,
    SuggestionReport,
)
from expency.engine.rules import (
    BUDGET_RULES,
    HIGH_PRIORITY_FACTOR,
    OVERALL_ALERT_THRESHOLD,
    OVERALL_CATEGORY,
    RECOMMENDED_BUDGET,
    get_rule,
)


def format_rupees(amount: Decimal) -> str:
    """Whole-rupee display, rounding half away from zero."""
    return f"₹{amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP)}"


def _ceiling_warnings(category_totals: Sequence[CategoryTotal]) -> list[Suggestion]:
    warnings = []
    for ct in category_totals:
        rule = get_rule(ct.category)
        if rule is None or not rule.has_ceiling:
            continue
        if ct.total <= rule.max_amount:
            continue

        priority = (
            Priority.HIGH
            if ct.total > rule.max_amount * HIGH_PRIORITY_FACTOR
            else Priority.MEDIUM
        )
        warnings.append(
            Suggestion(
                category=ct.category,
                kind=SuggestionKind.WARNING,
                message=(
                    f"You spent {format_rupees(ct.total)} on {ct.category}. "
                    f"Try to limit it to {format_rupees(rule.max_amount)} per month."
                ),
                priority=priority,
                potential_savings=ct.total - rule.max_amount,
            )
        )
    return warnings


def _static_tips(category_totals: Sequence[CategoryTotal]) -> list[Suggestion]:
    spent: dict[str, Decimal] = {}
    for ct in category_totals:
        spent.setdefault(ct.category, ct.total)

    tips = []
    for rule in BUDGET_RULES:
        if rule.tip is None:
            continue
        if spent.get(rule.category, Decimal("0")) > rule.max_amount:
            tips.append(
                Suggestion(
                    category=rule.category,
                    kind=SuggestionKind.TIP,
                    message=rule.tip.message,
                    priority=rule.tip.priority,
                )
            )
    return tips


def _overall_alert(grand_total: Decimal) -> list[Suggestion]:
    if grand_total <= OVERALL_ALERT_THRESHOLD:
        return []
    return [
        Suggestion(
            category=OVERALL_CATEGORY,
            kind=SuggestionKind.ALERT,
            message=(
                f"Your total spending is {format_rupees(grand_total)}. "
                "For a college student, aim for ₹7000-8000/month (excluding rent)."
            ),
            priority=Priority.HIGH,
        )
    ]


def rank(suggestions: Sequence[Suggestion]) -> list[Suggestion]:
    """Order by priority weight, highest first, keeping generation order on ties."""
    return sorted(suggestions, key=lambda s: PRIORITY_WEIGHTS[s.priority], reverse=True)


def suggest(
    category_totals: Sequence[CategoryTotal], grand_total: Decimal
) -> SuggestionReport:
    """Build ranked budgeting suggestions.

    Args:
        category_totals: Output of the aggregator for the queried window
        grand_total: Sum of all expenses in the same window

    Returns:
        SuggestionReport with ranked suggestions and the recommended budget
    """
    suggestions = (
        _ceiling_warnings(category_totals)
        + _static_tips(category_totals)
        + _overall_alert(grand_total)
    )
    return SuggestionReport(
        suggestions=rank(suggestions),
        total_expenses=grand_total,
        recommended_budget=RECOMMENDED_BUDGET,
    )
