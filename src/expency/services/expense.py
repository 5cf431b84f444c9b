"""Expense service.

Coordinates the expense repository with the aggregation/suggestion engine:
1. Resolve the requested period into a date window
2. Load the caller's expenses for that window
3. Hand engine records to ``aggregate`` / ``suggest``

Statistics, suggestions and the PDF report all go through ``_aggregate`` so
every surface shows the same totals.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from expency.config import settings
from expency.core.exceptions import ExpenseNotFoundError, InvalidPeriodError
from expency.engine import aggregate, month_window, suggest
from expency.engine.models import Aggregation, DateWindow, ExpenseRecord, SuggestionReport
from expency.models.expense import Expense
from expency.models.user import User
from expency.repositories.expense import ExpenseRepository
from expency.schemas.common import MoneyMeta, PaginationMeta, PeriodMeta
from expency.schemas.expense import (
    ExpenseCreate,
    ExpenseListResult,
    ExpenseResponse,
    ExpenseUpdate,
)
from expency.schemas.insights import StatisticsResponse, SuggestionsResponse

logger = logging.getLogger(__name__)

# Request field name -> model attribute, where they differ.
_FIELD_MAP = {"date": "expense_date"}


def resolve_period(
    month: int | None, year: int | None
) -> tuple[DateWindow | None, PeriodMeta | None]:
    """Turn optional month/year query values into a date window.

    Both or neither must be given.

    Raises:
        InvalidPeriodError: If only one of month/year is supplied
    """
    if month is None and year is None:
        return None, None
    if month is None or year is None:
        raise InvalidPeriodError(details={"month": month, "year": year})
    return month_window(year, month), PeriodMeta(month=month, year=year)


def to_record(expense: Expense) -> ExpenseRecord:
    return ExpenseRecord(
        category=expense.category,
        amount=expense.amount,
        date=expense.expense_date,
    )


def money_meta() -> MoneyMeta:
    return MoneyMeta(currency=settings.currency, minor_unit=settings.currency_minor_unit)


class ExpenseService:
    """Service layer for expense operations. Constructed per request."""

    def __init__(self, db: AsyncSession):
        """Initialize expense service with database session.

        Args:
            db: Database session
        """
        self.db = db
        self.expense_repo = ExpenseRepository(db)

    async def create_expense(self, user: User, data: ExpenseCreate) -> Expense:
        expense = Expense(
            user_id=user.id,
            description=data.description,
            amount=data.amount,
            category=data.category.value,
            expense_date=data.date,
            payment_mode=data.payment_mode.value,
            notes=data.notes,
        )
        created = await self.expense_repo.add(expense)
        logger.info(
            "Expense created",
            extra={"user_id": str(user.id), "expense_id": str(created.id)},
        )
        return created

    async def get_expense(self, user: User, expense_id: UUID) -> Expense:
        """Get one of the user's expenses.

        Raises:
            ExpenseNotFoundError: If missing, deleted or owned by someone else
        """
        expense = await self.expense_repo.get_for_user(user.id, expense_id)
        if expense is None:
            raise ExpenseNotFoundError(details={"expense_id": str(expense_id)})
        return expense

    async def update_expense(
        self, user: User, expense_id: UUID, data: ExpenseUpdate
    ) -> Expense:
        """Apply a partial update to one of the user's expenses.

        Raises:
            ExpenseNotFoundError: If the expense is not visible to the user
        """
        expense = await self.get_expense(user, expense_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            if field in ("category", "payment_mode"):
                value = value.value
            setattr(expense, _FIELD_MAP.get(field, field), value)

        await self.expense_repo.save(expense)
        logger.info(
            "Expense updated",
            extra={
                "user_id": str(user.id),
                "expense_id": str(expense.id),
                "fields": sorted(changes),
            },
        )
        return expense

    async def delete_expense(self, user: User, expense_id: UUID) -> None:
        """Soft delete one of the user's expenses.

        Raises:
            ExpenseNotFoundError: If the expense is not visible to the user
        """
        expense = await self.get_expense(user, expense_id)
        await self.expense_repo.soft_delete(expense)
        logger.info(
            "Expense deleted",
            extra={"user_id": str(user.id), "expense_id": str(expense_id)},
        )

    async def list_expenses(
        self,
        user: User,
        month: int | None = None,
        year: int | None = None,
        category: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> ExpenseListResult:
        window, _ = resolve_period(month, year)
        expenses, total = await self.expense_repo.list_for_user(
            user.id,
            window=window,
            category=category,
            skip=(page - 1) * limit,
            limit=limit,
        )
        total_pages = (total + limit - 1) // limit if total > 0 else 0
        return ExpenseListResult(
            expenses=[ExpenseResponse.model_validate(e) for e in expenses],
            pagination=PaginationMeta(
                page=page, limit=limit, total=total, total_pages=total_pages
            ),
            money=money_meta(),
        )

    async def load_window(
        self, user: User, window: DateWindow | None
    ) -> tuple[list[Expense], Aggregation]:
        """Load the user's expenses for a window and aggregate them."""
        expenses = await self.expense_repo.get_in_window(user.id, window)
        aggregation = aggregate((to_record(e) for e in expenses), window)
        return expenses, aggregation

    async def get_statistics(
        self, user: User, month: int | None = None, year: int | None = None
    ) -> StatisticsResponse:
        window, period = resolve_period(month, year)
        _, aggregation = await self.load_window(user, window)
        return StatisticsResponse.from_aggregation(aggregation, period, money_meta())

    async def get_suggestion_report(
        self, user: User, window: DateWindow | None
    ) -> tuple[Aggregation, SuggestionReport]:
        _, aggregation = await self.load_window(user, window)
        report = suggest(aggregation.category_totals, aggregation.grand_total)
        return aggregation, report

    async def get_suggestions(
        self, user: User, month: int | None = None, year: int | None = None
    ) -> SuggestionsResponse:
        window, period = resolve_period(month, year)
        _, report = await self.get_suggestion_report(user, window)
        return SuggestionsResponse.from_report(report, period)
