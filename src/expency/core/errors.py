"""Error codes and user-friendly messages.

Each error has:
- code: Unique identifier
- message: Technical description (for logs)
- user_message: User-friendly explanation
- suggestion: Actionable guidance for the user
- retry_allowed: Whether the error is retryable
"""

ERROR_CATALOG: dict[str, dict] = {
    "AUTH_001": {
        "code": "AUTH_001",
        "message": "Email already registered",
        "user_message": "User already exists with this email.",
        "suggestion": "Log in instead, or sign up with a different email.",
        "retry_allowed": False,
    },
    "AUTH_002": {
        "code": "AUTH_002",
        "message": "Invalid email or password",
        "user_message": "Invalid email or password.",
        "suggestion": "Check your email and password and try again.",
        "retry_allowed": True,
    },
    "AUTH_003": {
        "code": "AUTH_003",
        "message": "Token missing, invalid, expired or of the wrong type",
        "user_message": "Your session has expired.",
        "suggestion": "Please log in again.",
        "retry_allowed": False,
    },
    "AUTH_004": {
        "code": "AUTH_004",
        "message": "User account is deactivated",
        "user_message": "This account has been deactivated.",
        "suggestion": "Contact support to reactivate your account.",
        "retry_allowed": False,
    },
    "EXP_001": {
        "code": "EXP_001",
        "message": "Expense not found",
        "user_message": "We couldn't find this expense.",
        "suggestion": "Please refresh your expense list and try again.",
        "retry_allowed": False,
    },
    "VAL_001": {
        "code": "VAL_001",
        "message": "Request data failed validation",
        "user_message": "Invalid input data",
        "suggestion": "Please check your input and try again",
        "retry_allowed": True,
    },
    "VAL_002": {
        "code": "VAL_002",
        "message": "Incomplete period: month and year must be given together",
        "user_message": "Please choose both a month and a year.",
        "suggestion": "Pass both month and year, or neither to see all expenses.",
        "retry_allowed": True,
    },
    "RPT_001": {
        "code": "RPT_001",
        "message": "PDF report rendering failed",
        "user_message": "We couldn't generate your report.",
        "suggestion": "Please try again in a few moments.",
        "retry_allowed": True,
    },
    "DB_001": {
        "code": "DB_001",
        "message": "Database operation failed",
        "user_message": "A database error occurred",
        "suggestion": "Please try again later",
        "retry_allowed": True,
    },
    "DB_002": {
        "code": "DB_002",
        "message": "Resource already exists",
        "user_message": "This record already exists",
        "suggestion": "Please check if the record was already created",
        "retry_allowed": False,
    },
    "SYS_001": {
        "code": "SYS_001",
        "message": "Internal server error",
        "user_message": "An unexpected error occurred",
        "suggestion": "Please try again later or contact support",
        "retry_allowed": True,
    },
}


def get_error(error_code: str) -> dict:
    """Get error definition by code.

    Unknown codes map to a generic definition instead of raising.

    Args:
        error_code: Error code from the catalog

    Returns:
        Dict with error details
    """
    if error_code not in ERROR_CATALOG:
        return {
            "code": "UNKNOWN",
            "message": f"Unknown error code: {error_code}",
            "user_message": "An unexpected error occurred.",
            "suggestion": "Please try again. Contact support if the problem persists.",
            "retry_allowed": True,
        }
    return ERROR_CATALOG[error_code]


def error_body(error_code: str, message: str | None = None) -> dict:
    """Build the JSON body returned for an error code."""
    error = get_error(error_code)
    return {
        "error_code": error_code,
        "message": message or error["message"],
        "user_message": error["user_message"],
        "suggestion": error["suggestion"],
        "retry_allowed": error["retry_allowed"],
    }
