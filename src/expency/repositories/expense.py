"""Expense repository with user-scoped filtering queries."""
from uuid import UUID

from sqlalchemy import Select, func, select

from expency.engine.models import DateWindow
from expency.models.expense import Expense
from expency.repositories.base import Repository


class ExpenseRepository(Repository[Expense]):
    """Expense queries. Every read is scoped to one owner and to live rows."""

    model = Expense

    def _scoped(self, user_id: UUID) -> Select:
        return select(Expense).where(
            Expense.user_id == user_id, Expense.live()
        )

    async def get_for_user(self, user_id: UUID, expense_id: UUID) -> Expense | None:
        """Get an expense only if it belongs to the user and is not deleted."""
        result = await self.db.execute(
            self._scoped(user_id).where(Expense.id == expense_id)
        )
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: UUID,
        window: DateWindow | None = None,
        category: str | None = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Expense], int]:
        """
        List expenses newest first with optional window/category filters.
        Returns (page of expenses, total matching count).
        """
        query = self._scoped(user_id)
        if window is not None:
            query = query.where(
                Expense.expense_date >= window.start_date,
                Expense.expense_date <= window.end_date,
            )
        if category:
            query = query.where(Expense.category == category)

        count_query = select(func.count()).select_from(query.subquery())
        total = (await self.db.execute(count_query)).scalar() or 0

        query = (
            query.order_by(Expense.expense_date.desc(), Expense.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def get_in_window(
        self, user_id: UUID, window: DateWindow | None = None
    ) -> list[Expense]:
        """Get every expense of a user, optionally within a date window."""
        query = self._scoped(user_id)
        if window is not None:
            query = query.where(
                Expense.expense_date >= window.start_date,
                Expense.expense_date <= window.end_date,
            )
        result = await self.db.execute(
            query.order_by(Expense.expense_date.desc(), Expense.created_at.desc())
        )
        return list(result.scalars().all())

    async def soft_delete(self, expense: Expense) -> None:
        expense.mark_deleted()
        await self.db.commit()
