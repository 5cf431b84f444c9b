"""Monthly PDF expense report.

Rendering is a pure function of already-aggregated data: totals, shares and
suggestions come from the engine and are only laid out here.
"""

import calendar
import io
import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from sqlalchemy.ext.asyncio import AsyncSession
from xml.sax.saxutils import escape

from expency.core.exceptions import ReportGenerationError
from expency.engine import share_of_total, suggest
from expency.engine.models import Aggregation, SuggestionReport
from expency.engine.rules import GENERAL_SAVINGS_TIPS
from expency.models.expense import Expense
from expency.models.user import User
from expency.services.expense import ExpenseService, resolve_period

logger = logging.getLogger(__name__)

HEADER_COLOR = colors.HexColor("#2E7D32")


@dataclass(frozen=True)
class RenderedReport:
    filename: str
    content: bytes


def report_filename(month: int, year: int) -> str:
    return f"expense-report-{month}-{year}.pdf"


def pdf_text(text: str) -> str:
    """Make text safe for the base-14 PDF fonts and reportlab markup."""
    # Helvetica has no rupee glyph.
    return escape(text.replace("₹", "Rs. "))


def _money(amount: Decimal) -> str:
    return f"Rs. {amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"


def _percent(amount: Decimal) -> str:
    return f"{amount.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%"


def _table(rows: list[list[str]], col_widths: list[float]) -> Table:
    table = Table(rows, colWidths=col_widths, repeatRows=1)
    table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_COLOR),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('ALIGN', (-1, 0), (-1, -1), 'RIGHT'),
        ('GRID', (0, 0), (-1, -1), 0.25, colors.grey),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
    ]))
    return table


def render_monthly_report(
    month: int,
    year: int,
    expenses: Sequence[Expense],
    aggregation: Aggregation,
    suggestions: SuggestionReport,
) -> bytes:
    """Lay out the monthly report and return the PDF bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=50,
        rightMargin=50,
        topMargin=50,
        bottomMargin=50,
        title=f"Expense Report {calendar.month_name[month]} {year}",
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Heading1'],
        fontSize=24,
        alignment=TA_CENTER,
        fontName='Helvetica-Bold',
        spaceAfter=6,
    )
    centered = ParagraphStyle('Centered', parent=styles['Normal'], alignment=TA_CENTER)
    heading = styles['Heading2']
    body = styles['Normal']

    elements = [
        Paragraph("Expense Report", title_style),
        Paragraph(f"Month: {calendar.month_name[month]} {year}", centered),
        Spacer(1, 0.3 * inch),
    ]

    # Summary
    elements.append(Paragraph("Summary", heading))
    elements.append(Paragraph(f"Total Expenses: {_money(aggregation.grand_total)}", body))
    elements.append(Paragraph(f"Total Transactions: {len(expenses)}", body))
    elements.append(Spacer(1, 0.2 * inch))

    # Category breakdown
    elements.append(Paragraph("Category-wise Spending", heading))
    if aggregation.category_totals:
        rows = [["Category", "Transactions", "Share", "Total"]]
        for ct in aggregation.category_totals:
            rows.append([
                ct.category,
                str(ct.count),
                _percent(share_of_total(ct.total, aggregation.grand_total)),
                _money(ct.total),
            ])
        elements.append(_table(rows, [2.6 * inch, 1.1 * inch, 0.9 * inch, 1.4 * inch]))
    else:
        elements.append(Paragraph("No expenses recorded this month.", body))
    elements.append(Spacer(1, 0.2 * inch))

    # Detailed transactions
    elements.append(Paragraph("Detailed Transactions", heading))
    if expenses:
        rows = [["Date", "Category", "Description", "Amount"]]
        for expense in expenses:
            rows.append([
                expense.expense_date.strftime("%d/%m/%Y"),
                expense.category,
                Paragraph(pdf_text(expense.description), body),
                _money(expense.amount),
            ])
        elements.append(_table(rows, [0.9 * inch, 1.5 * inch, 2.6 * inch, 1.0 * inch]))
    else:
        elements.append(Paragraph("No transactions.", body))

    # Suggestions
    elements.append(PageBreak())
    elements.append(Paragraph("Savings Suggestions", heading))
    if suggestions.suggestions:
        for s in suggestions.suggestions:
            elements.append(Paragraph(
                f"<b>[{s.priority.value.upper()}] {pdf_text(s.category)}:</b> {pdf_text(s.message)}",
                body,
            ))
            elements.append(Spacer(1, 4))
    else:
        elements.append(Paragraph("Your spending is within the recommended limits.", body))
    elements.append(Spacer(1, 0.2 * inch))

    elements.append(Paragraph("Savings Tips for College Students", heading))
    for tip in GENERAL_SAVINGS_TIPS:
        elements.append(Paragraph(f"&bull; {pdf_text(tip)}", body))
        elements.append(Spacer(1, 3))
    elements.append(Spacer(1, 0.3 * inch))
    elements.append(Paragraph(
        "<b>Recommended Monthly Budget: Rs. 7000-8000 (excluding rent)</b>", centered
    ))

    doc.build(elements)
    return buffer.getvalue()


class ReportService:
    """Builds the downloadable monthly report for a user."""

    def __init__(self, db: AsyncSession):
        self.expense_service = ExpenseService(db)

    async def monthly_report(
        self, user: User, month: int | None = None, year: int | None = None
    ) -> RenderedReport:
        """Render the report for a month (defaults to the current month).

        Raises:
            InvalidPeriodError: If only one of month/year is supplied
            ReportGenerationError: If the PDF cannot be rendered
        """
        if month is None and year is None:
            today = date.today()
            month, year = today.month, today.year
        window, _ = resolve_period(month, year)

        expenses, aggregation = await self.expense_service.load_window(user, window)
        report = suggest(aggregation.category_totals, aggregation.grand_total)

        try:
            content = render_monthly_report(month, year, expenses, aggregation, report)
        except Exception as exc:
            logger.error(
                "Report rendering failed",
                extra={"user_id": str(user.id), "error_type": type(exc).__name__},
            )
            raise ReportGenerationError(details={"month": month, "year": year}) from exc

        logger.info(
            "Report generated",
            extra={"user_id": str(user.id), "month": month, "year": year, "bytes": len(content)},
        )
        return RenderedReport(filename=report_filename(month, year), content=content)
