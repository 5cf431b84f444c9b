"""Unit tests for the monthly PDF report."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from expency.core.exceptions import InvalidPeriodError, ReportGenerationError
from expency.engine import aggregate, suggest
from expency.models.expense import Expense
from expency.models.user import User
from expency.services.expense import to_record
from expency.services.report import (
    ReportService,
    pdf_text,
    render_monthly_report,
    report_filename,
)


@pytest.fixture
def test_user():
    return User(id=uuid4(), email="test@example.com", password_hash="hashed", name="Test")


@pytest.fixture
def expenses(test_user):
    return [
        Expense(
            id=uuid4(),
            user_id=test_user.id,
            description=description,
            amount=Decimal(amount),
            category=category,
            expense_date=date(2025, 3, day),
            payment_mode="UPI",
        )
        for description, amount, category, day in [
            ("Mess fee & snacks <weekly>", "4500", "Food & Snacks", 3),
            ("Auto to station", "180", "Transport", 7),
            ("Semester books", "1200", "Study Materials", 12),
        ]
    ]


class TestRenderMonthlyReport:
    def test_produces_pdf(self, expenses):
        aggregation = aggregate(to_record(e) for e in expenses)
        report = suggest(aggregation.category_totals, aggregation.grand_total)

        content = render_monthly_report(3, 2025, expenses, aggregation, report)

        assert content.startswith(b"%PDF")
        assert len(content) > 1000

    def test_empty_month(self):
        aggregation = aggregate([])
        report = suggest([], aggregation.grand_total)

        content = render_monthly_report(2, 2025, [], aggregation, report)

        assert content.startswith(b"%PDF")


class TestHelpers:
    def test_report_filename(self):
        assert report_filename(3, 2025) == "expense-report-3-2025.pdf"

    def test_pdf_text_replaces_rupee_and_escapes(self):
        assert pdf_text("₹500 <b> & more") == "Rs. 500 &lt;b&gt; &amp; more"


class TestReportService:
    """Test suite for ReportService."""

    @pytest.mark.asyncio
    async def test_monthly_report(self, test_user, expenses):
        service = ReportService(AsyncMock())
        service.expense_service.expense_repo.get_in_window = AsyncMock(return_value=expenses)

        rendered = await service.monthly_report(test_user, month=3, year=2025)

        assert rendered.filename == "expense-report-3-2025.pdf"
        assert rendered.content.startswith(b"%PDF")
        window = service.expense_service.expense_repo.get_in_window.call_args.args[1]
        assert window.start_date == date(2025, 3, 1)
        assert window.end_date == date(2025, 3, 31)

    @pytest.mark.asyncio
    async def test_defaults_to_current_month(self, test_user):
        service = ReportService(AsyncMock())
        service.expense_service.expense_repo.get_in_window = AsyncMock(return_value=[])

        rendered = await service.monthly_report(test_user)

        today = date.today()
        assert rendered.filename == f"expense-report-{today.month}-{today.year}.pdf"

    @pytest.mark.asyncio
    async def test_partial_period_rejected(self, test_user):
        service = ReportService(AsyncMock())

        with pytest.raises(InvalidPeriodError):
            await service.monthly_report(test_user, month=3)

    @pytest.mark.asyncio
    async def test_render_failure_wrapped(self, test_user):
        service = ReportService(AsyncMock())
        service.expense_service.expense_repo.get_in_window = AsyncMock(return_value=[])

        with patch(
            "expency.services.report.render_monthly_report",
            side_effect=RuntimeError("layout error"),
        ):
            with pytest.raises(ReportGenerationError):
                await service.monthly_report(test_user, month=3, year=2025)
