"""Account signup, login and token refresh."""

import logging
from uuid import UUID

from jose import JWTError

from expency.config import settings
from expency.core.exceptions import (
    AccountInactiveError,
    EmailTakenError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from expency.core.security import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)
from expency.models.user import User
from expency.repositories.user import UserRepository
from expency.schemas.auth import AuthSession, SignupRequest, TokenPair, UserProfile

logger = logging.getLogger(__name__)


def issue_tokens(user_id: UUID) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user_id),
        refresh_token=create_refresh_token(user_id),
        expires_in=settings.jwt_access_expire_minutes * 60,
    )


def start_session(user: User) -> AuthSession:
    tokens = issue_tokens(user.id)
    return AuthSession(user=UserProfile.model_validate(user), **tokens.model_dump())


class AuthService:
    """Constructed per request around the caller's user repository."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def signup(self, data: SignupRequest) -> AuthSession:
        """Create an account and log it in.

        Raises:
            EmailTakenError: If the email already has an account
        """
        if await self.user_repo.email_taken(data.email):
            raise EmailTakenError()

        user = await self.user_repo.add(
            User(
                name=data.name,
                email=data.email,
                password_hash=hash_password(data.password),
            )
        )
        logger.info("User signed up", extra={"user_id": str(user.id)})
        return start_session(user)

    async def login(self, email: str, password: str) -> AuthSession:
        """
        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            AccountInactiveError: If the account is switched off
        """
        user = await self.user_repo.get_by_email(email)
        # Same error for both cases; callers cannot tell which emails exist.
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()
        if not user.is_active:
            raise AccountInactiveError(details={"user_id": str(user.id)})

        logger.info("User logged in", extra={"user_id": str(user.id)})
        return start_session(user)

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Swap a refresh token for a new pair. Access tokens are refused.

        Raises:
            InvalidTokenError: Bad, expired or wrong-type token, or unknown user
            AccountInactiveError: If the account is switched off
        """
        try:
            user_id = get_user_id_from_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        except (JWTError, ValueError):
            raise InvalidTokenError()

        user = await self.user_repo.get(user_id)
        if user is None:
            raise InvalidTokenError(details={"user_id": str(user_id)})
        if not user.is_active:
            raise AccountInactiveError(details={"user_id": str(user.id)})
        return issue_tokens(user.id)
