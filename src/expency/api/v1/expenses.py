"""Expense endpoints: CRUD, statistics, suggestions and the PDF report."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from expency.api.deps import get_current_user, get_expense_service, get_report_service
from expency.config import settings
from expency.core.constants import Category
from expency.models.user import User
from expency.schemas.expense import (
    ExpenseCreate,
    ExpenseListResult,
    ExpenseResponse,
    ExpenseUpdate,
    MessageResponse,
)
from expency.schemas.insights import StatisticsResponse, SuggestionsResponse
from expency.services.expense import ExpenseService
from expency.services.report import ReportService

router = APIRouter(prefix="/expenses", tags=["expenses"])

MonthQuery = Annotated[int | None, Query(ge=1, le=12, description="Month (1-12)")]
YearQuery = Annotated[int | None, Query(ge=2000, le=2100, description="Year (2000-2100)")]


@router.get(
    "",
    response_model=ExpenseListResult,
    summary="List expenses",
    description="""
    List the authenticated user's expenses, newest first.

    ## Filters
    - **month**, **year**: Limit to one calendar month (give both or neither)
    - **category**: Limit to one category
    """,
)
async def list_expenses(
    month: MonthQuery = None,
    year: YearQuery = None,
    category: Annotated[Category | None, Query(description="Filter by category")] = None,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    limit: Annotated[
        int, Query(ge=1, le=settings.max_page_size, description="Items per page")
    ] = settings.default_page_size,
    current_user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseListResult:
    return await service.list_expenses(
        current_user,
        month=month,
        year=year,
        category=category.value if category else None,
        page=page,
        limit=limit,
    )


@router.get(
    "/stats",
    response_model=StatisticsResponse,
    summary="Spending statistics by category",
    description="""
    Per-category total, count, average and share of the grand total.
    Results are sorted by total amount (highest first).
    """,
)
async def get_statistics(
    month: MonthQuery = None,
    year: YearQuery = None,
    current_user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> StatisticsResponse:
    return await service.get_statistics(current_user, month=month, year=year)


@router.get(
    "/suggestions",
    response_model=SuggestionsResponse,
    summary="Budgeting suggestions",
    description="""
    Rule-based suggestions ranked by priority (high, medium, low):
    ceiling warnings, category tips and an overall spending alert.
    """,
)
async def get_suggestions(
    month: MonthQuery = None,
    year: YearQuery = None,
    current_user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> SuggestionsResponse:
    return await service.get_suggestions(current_user, month=month, year=year)


@router.get(
    "/report/pdf",
    summary="Download monthly PDF report",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_report(
    month: MonthQuery = None,
    year: YearQuery = None,
    current_user: User = Depends(get_current_user),
    report_service: ReportService = Depends(get_report_service),
) -> Response:
    report = await report_service.monthly_report(current_user, month=month, year=year)
    return Response(
        content=report.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={report.filename}"},
    )


@router.post(
    "",
    response_model=ExpenseResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record an expense",
)
async def create_expense(
    data: ExpenseCreate,
    current_user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseResponse:
    expense = await service.create_expense(current_user, data)
    return ExpenseResponse.model_validate(expense)


@router.get(
    "/{expense_id}",
    response_model=ExpenseResponse,
    summary="Get an expense",
    responses={404: {"description": "Expense not found"}},
)
async def get_expense(
    expense_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseResponse:
    expense = await service.get_expense(current_user, expense_id)
    return ExpenseResponse.model_validate(expense)


@router.put(
    "/{expense_id}",
    response_model=ExpenseResponse,
    summary="Update an expense",
    responses={404: {"description": "Expense not found"}},
)
async def update_expense(
    expense_id: UUID,
    data: ExpenseUpdate,
    current_user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> ExpenseResponse:
    expense = await service.update_expense(current_user, expense_id, data)
    return ExpenseResponse.model_validate(expense)


@router.delete(
    "/{expense_id}",
    response_model=MessageResponse,
    summary="Delete an expense",
    responses={404: {"description": "Expense not found"}},
)
async def delete_expense(
    expense_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ExpenseService = Depends(get_expense_service),
) -> MessageResponse:
    await service.delete_expense(current_user, expense_id)
    return MessageResponse(message="Expense deleted")
