from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError

from expency.api.middleware.error_handler import (
    handle_expense_tracker_error,
    handle_generic_error,
    handle_integrity_error,
    handle_validation_error,
)
from expency.api.middleware.logging import RequestLoggingMiddleware, configure_logging
from expency.api.v1 import router as v1_router
from expency.api.v1.health import router as health_router
from expency.config import settings
from expency.core.exceptions import ExpenseTrackerError
from expency.db.session import async_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await async_engine.dispose()


def create_app() -> FastAPI:
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=f"{settings.project_name} API",
        description="Personal expense tracking with budgeting suggestions",
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(ExpenseTrackerError, handle_expense_tracker_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()
