"""Account endpoints: signup, login, token refresh and the caller's profile."""

from fastapi import APIRouter, Depends, status

from expency.api.deps import get_auth_service, get_current_user
from expency.models.user import User
from expency.schemas.auth import (
    AuthSession,
    LoginRequest,
    RefreshRequest,
    SignupRequest,
    TokenPair,
    UserProfile,
)
from expency.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=AuthSession,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    description="""
    Register with a name, email and password. The response already carries
    an access/refresh token pair, so no separate login is needed.

    Errors: `AUTH_001` (400) if the email is taken, `VAL_001` (400) for bad input.
    """,
)
async def signup(
    data: SignupRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthSession:
    return await auth_service.signup(data)


@router.post(
    "/login",
    response_model=AuthSession,
    summary="Log in",
    responses={
        401: {"description": "Invalid email or password (AUTH_002)"},
        403: {"description": "Account deactivated (AUTH_004)"},
    },
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthSession:
    return await auth_service.login(data.email, data.password)


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh tokens",
    responses={401: {"description": "Invalid refresh token (AUTH_003)"}},
)
async def refresh(
    data: RefreshRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenPair:
    return await auth_service.refresh(data.refresh_token)


@router.get("/me", response_model=UserProfile, summary="Current user")
async def me(current_user: User = Depends(get_current_user)) -> UserProfile:
    return UserProfile.model_validate(current_user)
