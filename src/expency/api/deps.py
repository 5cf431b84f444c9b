"""FastAPI dependency injection for authentication, database and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from expency.core.exceptions import AccountInactiveError, InvalidTokenError
from expency.core.security import ACCESS_TOKEN_TYPE, get_user_id_from_token
from expency.db.session import get_db
from expency.models.user import User
from expency.repositories.user import UserRepository
from expency.services.auth import AuthService
from expency.services.expense import ExpenseService
from expency.services.report import ReportService

# Missing credentials are reported through the error catalog, not FastAPI.
security = HTTPBearer(auto_error=False)


async def get_user_repository(
    db: AsyncSession = Depends(get_db),
) -> UserRepository:
    return UserRepository(db)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
) -> AuthService:
    return AuthService(user_repo)


async def get_expense_service(db: AsyncSession = Depends(get_db)) -> ExpenseService:
    return ExpenseService(db)


async def get_report_service(db: AsyncSession = Depends(get_db)) -> ReportService:
    return ReportService(db)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """Resolve the bearer access token to an active user.

    Raises:
        InvalidTokenError: Bad, expired or refresh-type token, or unknown user
        AccountInactiveError: If the account is switched off
    """
    if credentials is None:
        raise InvalidTokenError(details={"reason": "missing bearer token"})
    try:
        user_id = get_user_id_from_token(
            credentials.credentials, expected_type=ACCESS_TOKEN_TYPE
        )
    except (JWTError, ValueError):
        raise InvalidTokenError()

    user = await user_repo.get(user_id)
    if user is None:
        raise InvalidTokenError(details={"user_id": str(user_id)})
    if not user.is_active:
        raise AccountInactiveError(details={"user_id": str(user.id)})
    return user
