"""Group expense records into per-category totals."""

import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable

from expency.engine.models import Aggregation, CategoryTotal, DateWindow, ExpenseRecord

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def month_window(year: int, month: int) -> DateWindow:
    """Return the window covering the first to the last day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return DateWindow(start_date=date(year, month, 1), end_date=date(year, month, last_day))


def _usable_amount(record: ExpenseRecord) -> Decimal | None:
    """Return the record amount as a Decimal, or None if the record must be skipped.

    Integers are exact and converted; floats, bools and anything non-numeric
    are rejected along with negative and non-finite values.
    """
    if not record.category:
        return None
    amount = record.amount
    if isinstance(amount, int) and not isinstance(amount, bool):
        amount = Decimal(amount)
    if not isinstance(amount, Decimal):
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def aggregate(
    records: Iterable[ExpenseRecord], window: DateWindow | None = None
) -> Aggregation:
    """Roll expense records up by category.

    Records outside ``window`` (inclusive on both ends) are ignored. Records
    with no category or a negative/non-finite amount are skipped so they can
    never drive a total negative or NaN.

    Args:
        records: Expense records, already scoped to one owner
        window: Optional inclusive date range

    Returns:
        Aggregation with totals sorted by amount (highest first)
    """
    sums: dict[str, Decimal] = {}
    counts: dict[str, int] = {}
    skipped = 0

    for record in records:
        if window is not None and not window.contains(record.date):
            continue
        amount = _usable_amount(record)
        if amount is None:
            skipped += 1
            continue
        # dicts keep first-seen order, which makes tie order deterministic
        sums[record.category] = sums.get(record.category, _ZERO) + amount
        counts[record.category] = counts.get(record.category, 0) + 1

    if skipped:
        logger.warning("Skipped malformed expense records", extra={"skipped": skipped})

    totals = [
        CategoryTotal(category=category, total=total, count=counts[category])
        for category, total in sums.items()
    ]
    totals.sort(key=lambda ct: ct.total, reverse=True)

    grand_total = sum((ct.total for ct in totals), _ZERO)
    return Aggregation(category_totals=totals, grand_total=grand_total)


def share_of_total(amount: Decimal, grand_total: Decimal) -> Decimal:
    """Percentage of ``grand_total`` taken by ``amount`` (0 when nothing was spent)."""
    if grand_total <= 0:
        return _ZERO
    return amount * _HUNDRED / grand_total
