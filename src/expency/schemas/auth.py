"""Signup, login and token schemas.

Signup and login both answer with an ``AuthSession``: the user's public
profile plus a token pair, so a client is logged in straight after signing
up.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _normalise_email(value: str) -> str:
    return value.strip().lower()


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128, description="At least 8 characters")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return _normalise_email(value)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return _normalise_email(value)


class RefreshRequest(BaseModel):
    refresh_token: str


class UserProfile(BaseModel):
    """Public view of an account; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Access token lifetime in seconds")


class AuthSession(TokenPair):
    user: UserProfile
