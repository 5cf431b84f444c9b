"""Static monthly budget rules.

Ceilings are in rupees and tuned for a college student living away from
home. The same table drives both the ceiling warnings and the static tips.
"""

from decimal import Decimal

from expency.core.constants import Category
from expency.engine.models import BudgetRule, Priority, Tip

RECOMMENDED_BUDGET = Decimal("8000")
OVERALL_ALERT_THRESHOLD = Decimal("10000")
HIGH_PRIORITY_FACTOR = Decimal("1.5")
OVERALL_CATEGORY = "Overall"

# Ordering matters: tips are emitted in table order.
BUDGET_RULES: tuple[BudgetRule, ...] = (
    BudgetRule(
        category=Category.FOOD.value,
        max_amount=Decimal("4000"),
        expected_percentage=30,
        tip=Tip(
            message=(
                "Consider getting a monthly mess subscription or cook simple meals "
                "to save ₹1000-2000/month."
            ),
            priority=Priority.HIGH,
        ),
    ),
    BudgetRule(
        category=Category.TRANSPORT.value,
        max_amount=Decimal("1500"),
        expected_percentage=15,
        tip=Tip(
            message=(
                "Try using college bus, shared auto, or bicycle to save on transport. "
                "Potential savings: ₹500-800/month."
            ),
            priority=Priority.MEDIUM,
        ),
    ),
    BudgetRule(category=Category.STUDY.value, max_amount=Decimal("1000"), expected_percentage=10),
    BudgetRule(
        category=Category.ENTERTAINMENT.value,
        max_amount=Decimal("1000"),
        expected_percentage=10,
        tip=Tip(
            message=(
                "Use student discounts on OTT platforms, attend free college events, "
                "and split subscription costs with friends."
            ),
            priority=Priority.LOW,
        ),
    ),
    BudgetRule(category=Category.SHOPPING.value, max_amount=Decimal("1500"), expected_percentage=10),
    BudgetRule(
        category=Category.RECHARGE.value,
        max_amount=Decimal("800"),
        expected_percentage=8,
        tip=Tip(
            message=(
                "Switch to student plans from Jio/Airtel (₹200-300/month) "
                "and use college WiFi when possible."
            ),
            priority=Priority.MEDIUM,
        ),
    ),
    # Rent is a fixed cost: no ceiling.
    BudgetRule(category=Category.RENT.value, max_amount=Decimal("0"), expected_percentage=0),
    BudgetRule(category=Category.MEDICAL.value, max_amount=Decimal("500"), expected_percentage=5),
    BudgetRule(category=Category.GROOMING.value, max_amount=Decimal("700"), expected_percentage=7),
    BudgetRule(category=Category.OTHERS.value, max_amount=Decimal("500"), expected_percentage=5),
)

RULES_BY_CATEGORY: dict[str, BudgetRule] = {rule.category: rule for rule in BUDGET_RULES}


def get_rule(category: str) -> BudgetRule | None:
    """Look up the rule for a category; unknown categories have none."""
    return RULES_BY_CATEGORY.get(category)


# General advice printed at the end of the monthly PDF report.
GENERAL_SAVINGS_TIPS: tuple[str, ...] = (
    "Try to limit Food & Snacks to ₹3000-4000/month by using mess or cooking",
    "Use college bus or shared transport to keep Transport under ₹1500/month",
    "Take advantage of student discounts on subscriptions and entertainment",
    "Use college WiFi and student mobile plans (₹200-300/month)",
    "Buy second-hand textbooks or use library resources",
    "Cook in groups with hostel mates to split costs",
    "Set a daily spending limit (₹250-300) and stick to it",
    "Avoid impulse purchases, wait 24 hours before buying non-essentials",
)
