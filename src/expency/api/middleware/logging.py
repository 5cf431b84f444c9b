"""Request logging middleware and log formatting.

This module provides structured logging for all API requests with:
- Unique request IDs for tracing
- Request duration tracking
- PII filtering so emails, card and phone numbers never reach the logs
"""

import json
import logging
import re
import sys
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
HANDLER_NAME = "expency"

# PII patterns to filter from logs
PII_PATTERNS = [
    # Card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r'\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b'), '[CARD]'),
    # Email addresses
    (re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'), '[EMAIL]'),
    # Phone numbers (international format)
    (re.compile(r'\+\d{1,3}[-.\s]?\(?\d{2,4}\)?[-.\s]?\d{3,4}[-.\s]?\d{4,5}'), '[PHONE]'),
    # Indian mobile numbers
    (re.compile(r'\b[6-9]\d{9}\b'), '[PHONE]'),
]

# Extra record attributes copied into JSON log lines.
EXTRA_FIELDS = (
    "request_id",
    "user_id",
    "expense_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "error_code",
    "error_type",
    "client_ip",
    "skipped",
    "month",
    "year",
    "fields",
    "bytes",
    "details",
)


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests with PII filtering."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()
        path = filter_pii(str(request.url.path))

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "client_ip": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = int((time.time() - start_time) * 1000)
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": path,
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                },
            )
            raise

        duration_ms = int((time.time() - start_time) * 1000)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        return response


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for name in EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str)


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """
    Configure the root logger with a single stdout handler.

    Args:
        level: Log level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        fmt: 'json' for structured lines, anything else for plain text
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if fmt == "json":
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    # Replace rather than stack handlers when the app is created twice (tests).
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
    handler.set_name(HANDLER_NAME)
    root_logger.addHandler(handler)
