"""Global error handling.

All exceptions are converted to one JSON shape:
``{error_code, message, user_message, suggestion, retry_allowed}``.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from expency.config import settings
from expency.core.errors import error_body
from expency.core.exceptions import ExpenseTrackerError

logger = logging.getLogger(__name__)


async def handle_expense_tracker_error(
    request: Request, exc: ExpenseTrackerError
) -> JSONResponse:
    """Handle application exceptions using the error catalog."""
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    level = logging.WARNING if exc.http_status < 500 else logging.ERROR
    logger.log(level, f"Request failed with {exc.error_code}", extra=extra)

    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(exc.error_code),
        headers=exc.headers,
    )


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle Pydantic validation errors with field-level messages."""
    errors = exc.errors()
    error_messages = []

    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        error_messages.append(f"{field}: {msg}")

    logger.warning(
        f"Validation error on {request.url.path}",
        extra={"path": request.url.path, "method": request.method},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("VAL_001", message=" | ".join(error_messages)),
    )


async def handle_integrity_error(
    request: Request, exc: IntegrityError
) -> JSONResponse:
    """Handle database integrity errors."""
    # Do not log str(exc): it can include SQL + bound parameters.
    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        logger.exception(f"Database integrity error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Database integrity error on {request.url.path}", extra=extra)

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=error_body("DB_002"))

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body("DB_001")
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without exposing internals."""
    extra = {
        "error_type": type(exc).__name__,
        "path": request.url.path,
        "method": request.method,
    }
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_body("SYS_001")
    )
