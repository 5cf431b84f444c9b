"""API version 1 routes."""

from fastapi import APIRouter

from expency.api.v1 import auth, expenses

router = APIRouter(prefix="/api/v1")

router.include_router(auth.router)
router.include_router(expenses.router)
