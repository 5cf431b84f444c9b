"""Custom exception classes.

Each exception maps to an error code defined in errors.py and carries the
HTTP status the API should answer with.
"""

from typing import Any


class ExpenseTrackerError(Exception):
    """Base exception for all application errors.

    Attributes:
        error_code: Code from the error catalog (e.g., "EXP_001")
        details: Additional context about the error (for logging)
        http_status: HTTP status code to return (default: 500)
        headers: Extra response headers (e.g., WWW-Authenticate)
    """

    def __init__(
        self,
        error_code: str,
        details: dict[str, Any] | None = None,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ):
        self.error_code = error_code
        self.details = details or {}
        self.http_status = http_status
        self.headers = headers
        super().__init__(error_code)


class ExpenseNotFoundError(ExpenseTrackerError):
    """Raised when an expense does not exist or belongs to another user."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("EXP_001", details=details, http_status=404)


class InvalidPeriodError(ExpenseTrackerError):
    """Raised when only one of month/year is supplied."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("VAL_002", details=details, http_status=400)


class ReportGenerationError(ExpenseTrackerError):
    """Raised when the PDF report cannot be rendered."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("RPT_001", details=details, http_status=500)


class EmailTakenError(ExpenseTrackerError):
    """Raised on signup with an email that already has an account."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("AUTH_001", details=details, http_status=400)


class InvalidCredentialsError(ExpenseTrackerError):
    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("AUTH_002", details=details, http_status=401)


class InvalidTokenError(ExpenseTrackerError):
    """Raised for bearer or refresh tokens that cannot identify a live user."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__(
            "AUTH_003",
            details=details,
            http_status=401,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AccountInactiveError(ExpenseTrackerError):
    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__("AUTH_004", details=details, http_status=403)
