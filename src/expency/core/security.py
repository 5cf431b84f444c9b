"""Security utilities for password hashing and JWT token management."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext

from expency.config import settings

# Password hashing with Argon2
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def hash_password(password: str) -> str:
    """
    Hash a password using Argon2.

    Args:
        password: Plain text password

    Returns:
        Hashed password string
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: Password to verify
        hashed_password: Stored password hash

    Returns:
        True if password matches, False otherwise
    """
    return pwd_context.verify(plain_password, hashed_password)


def _encode(user_id: UUID, token_type: str, expires_delta: timedelta) -> str:
    to_encode = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + expires_delta,
        "type": token_type,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: UUID, expires_delta: timedelta | None = None) -> str:
    """
    Create a JWT access token.

    Args:
        user_id: User ID to encode in token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_expire_minutes)
    return _encode(user_id, ACCESS_TOKEN_TYPE, expires_delta)


def create_refresh_token(user_id: UUID) -> str:
    """Create a JWT refresh token."""
    return _encode(
        user_id, REFRESH_TOKEN_TYPE, timedelta(days=settings.jwt_refresh_expire_days)
    )


def decode_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a JWT token.

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])


def get_user_id_from_token(token: str, expected_type: str | None = None) -> UUID:
    """
    Extract user ID from a JWT token.

    Args:
        token: JWT token string
        expected_type: When given, reject tokens of another type

    Returns:
        User ID as UUID

    Raises:
        JWTError: If token is invalid, expired or of the wrong type
        ValueError: If user ID is not a valid UUID
    """
    payload = decode_token(token)
    if expected_type is not None and payload.get("type") != expected_type:
        raise JWTError(f"Expected a {expected_type} token")
    user_id_str = payload.get("sub")
    if user_id_str is None:
        raise JWTError("Token missing 'sub' claim")
    return UUID(user_id_str)
