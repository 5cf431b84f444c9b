"""Unit tests for error handling middleware, logging and PII filtering."""

import json
import logging
from unittest.mock import Mock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from expency.api.middleware.error_handler import (
    handle_expense_tracker_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from expency.api.middleware.logging import (
    HANDLER_NAME,
    JSONLogFormatter,
    configure_logging,
    filter_pii,
)
from expency.core.errors import ERROR_CATALOG, error_body, get_error
from expency.core.exceptions import (
    AccountInactiveError,
    EmailTakenError,
    ExpenseNotFoundError,
    ExpenseTrackerError,
    InvalidCredentialsError,
    InvalidPeriodError,
    InvalidTokenError,
    ReportGenerationError,
)


def make_request(path: str = "/test", method: str = "GET") -> Mock:
    request = Mock(spec=Request)
    request.url.path = path
    request.method = method
    return request


class TestExpenseTrackerErrorHandler:
    """Test custom exception handling."""

    @pytest.mark.asyncio
    async def test_not_found(self):
        request = make_request("/api/v1/expenses/abc")

        response = await handle_expense_tracker_error(
            request, ExpenseNotFoundError(details={"expense_id": "abc"})
        )

        assert isinstance(response, JSONResponse)
        assert response.status_code == 404
        content = json.loads(response.body.decode())
        assert content["error_code"] == "EXP_001"
        assert content["retry_allowed"] is False

    @pytest.mark.asyncio
    async def test_error_includes_all_fields(self):
        """Test error response includes all required fields."""
        response = await handle_expense_tracker_error(make_request(), InvalidPeriodError())

        content = json.loads(response.body.decode())
        assert response.status_code == 400
        assert set(content) == {
            "error_code",
            "message",
            "user_message",
            "suggestion",
            "retry_allowed",
        }

    @pytest.mark.asyncio
    async def test_details_not_exposed(self):
        exc = ExpenseTrackerError("RPT_001", details={"secret": "value"}, http_status=500)

        response = await handle_expense_tracker_error(make_request(), exc)

        assert "secret" not in response.body.decode()

    def test_exception_defaults(self):
        assert ReportGenerationError().http_status == 500
        assert ReportGenerationError().error_code == "RPT_001"
        assert ExpenseTrackerError("SYS_001").details == {}

    @pytest.mark.asyncio
    async def test_invalid_token_challenges_bearer(self):
        response = await handle_expense_tracker_error(make_request(), InvalidTokenError())

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert json.loads(response.body.decode())["error_code"] == "AUTH_003"

    @pytest.mark.parametrize(
        "exc_class, code, status",
        [
            (EmailTakenError, "AUTH_001", 400),
            (InvalidCredentialsError, "AUTH_002", 401),
            (InvalidTokenError, "AUTH_003", 401),
            (AccountInactiveError, "AUTH_004", 403),
        ],
    )
    def test_auth_errors(self, exc_class, code, status):
        exc = exc_class()

        assert (exc.error_code, exc.http_status) == (code, status)
        assert code in ERROR_CATALOG


class TestValidationErrorHandler:
    """Test validation error handling."""

    @pytest.mark.asyncio
    async def test_handle_validation_error(self):
        exc = RequestValidationError(
            errors=[
                {"loc": ("query", "month"), "msg": "value must be <= 12", "type": "value_error"},
                {"loc": ("body", "amount"), "msg": "must be positive", "type": "value_error"},
            ]
        )

        response = await handle_validation_error(make_request("/api/v1/expenses"), exc)

        assert response.status_code == 400
        content = json.loads(response.body.decode())
        assert content["error_code"] == "VAL_001"
        assert "query.month" in content["message"]
        assert "body.amount" in content["message"]


class TestIntegrityErrorHandler:
    """Test database integrity error handling."""

    @pytest.mark.asyncio
    async def test_handle_duplicate_key_error(self):
        exc = IntegrityError("statement", "params", "UNIQUE constraint failed")

        response = await handle_integrity_error(make_request(method="POST"), exc)

        assert response.status_code == 409
        assert json.loads(response.body.decode())["error_code"] == "DB_002"

    @pytest.mark.asyncio
    async def test_handle_generic_db_error(self):
        exc = IntegrityError("statement", "params", "FOREIGN KEY constraint failed")

        response = await handle_integrity_error(make_request(method="POST"), exc)

        assert response.status_code == 500
        assert json.loads(response.body.decode())["error_code"] == "DB_001"


class TestGenericErrorHandler:
    @pytest.mark.asyncio
    async def test_internal_details_hidden(self):
        exc = RuntimeError("connection string postgres://user:pw@host")

        response = await handle_generic_error(make_request(), exc)

        assert response.status_code == 500
        body = response.body.decode()
        assert "SYS_001" in body
        assert "postgres" not in body


class TestErrorCatalog:
    def test_unknown_code_falls_back(self):
        assert get_error("NOPE_999")["code"] == "UNKNOWN"

    def test_error_body_message_override(self):
        body = error_body("VAL_001", message="amount: too small")

        assert body["message"] == "amount: too small"
        assert body["user_message"] == ERROR_CATALOG["VAL_001"]["user_message"]

    def test_catalog_entries_are_complete(self):
        for code, entry in ERROR_CATALOG.items():
            assert entry["code"] == code
            assert {"message", "user_message", "suggestion", "retry_allowed"} <= set(entry)


class TestPIIFiltering:
    """Test PII masking in log text."""

    def test_card_number(self):
        assert filter_pii("paid with 4532015112830366") == "paid with [CARD]"
        assert "[CARD]" in filter_pii("card 4532-0151-1283-0366")

    def test_email(self):
        assert filter_pii("login for student@college.edu failed") == "login for [EMAIL] failed"

    def test_phone_numbers(self):
        assert "[PHONE]" in filter_pii("call +1-555-123-4567")
        assert filter_pii("recharge 9876543210") == "recharge [PHONE]"

    def test_plain_text_untouched(self):
        text = "Spent 450 on Food & Snacks"

        assert filter_pii(text) == text

    def test_empty(self):
        assert filter_pii("") == ""


class TestJSONLogFormatter:
    def test_formats_extra_fields_and_masks_message(self):
        record = logging.LogRecord(
            name="expency.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="User student@college.edu logged in",
            args=(),
            exc_info=None,
        )
        record.user_id = "123"
        record.status_code = 200

        data = json.loads(JSONLogFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "expency.test"
        assert data["message"] == "User [EMAIL] logged in"
        assert data["user_id"] == "123"
        assert data["status_code"] == 200
        assert "request_id" not in data

    @pytest.mark.parametrize(
        "name, value",
        [
            ("fields", ["amount", "category"]),
            ("bytes", 20480),
            ("details", {"expense_id": "abc"}),
        ],
    )
    def test_service_extra_fields_are_kept(self, name, value):
        record = logging.LogRecord(
            name="expency.services",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Expense updated",
            args=(),
            exc_info=None,
        )
        setattr(record, name, value)

        data = json.loads(JSONLogFormatter().format(record))

        assert data[name] == value


class TestConfigureLogging:
    def test_reconfiguring_replaces_handler(self):
        root_logger = logging.getLogger()

        configure_logging("INFO", "text")
        configure_logging("DEBUG", "json")

        handlers = [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JSONLogFormatter)
        assert root_logger.level == logging.DEBUG

        configure_logging("INFO", "text")
