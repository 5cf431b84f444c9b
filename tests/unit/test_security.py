"""Unit tests for security utilities (password hashing and JWT tokens)."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import JWTError, jwt

from expency.config import settings
from expency.core.security import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    decode_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)


class TestPasswordHashing:
    """Test password hashing functions."""

    def test_hash_password(self):
        """Test that password is hashed (not stored in plain text)."""
        password = "MySecurePassword123!"
        hashed = hash_password(password)

        assert hashed != password
        # Argon2 hashes start with $argon2
        assert hashed.startswith("$argon2")

    def test_verify_password(self):
        hashed = hash_password("MySecurePassword123!")

        assert verify_password("MySecurePassword123!", hashed) is True
        assert verify_password("WrongPassword456!", hashed) is False

    def test_hash_same_password_different_hashes(self):
        """Test that hashing same password twice produces different hashes (salt)."""
        password = "MySecurePassword123!"

        assert hash_password(password) != hash_password(password)


class TestJWTTokens:
    """Test JWT token creation and validation."""

    def test_create_access_token(self):
        user_id = uuid4()
        payload = decode_token(create_access_token(user_id))

        assert payload["sub"] == str(user_id)
        assert payload["type"] == ACCESS_TOKEN_TYPE
        assert "exp" in payload

    def test_create_refresh_token(self):
        user_id = uuid4()
        payload = decode_token(create_refresh_token(user_id))

        assert payload["sub"] == str(user_id)
        assert payload["type"] == REFRESH_TOKEN_TYPE

    def test_expired_token_rejected(self):
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-1))

        with pytest.raises(JWTError):
            decode_token(token)

    def test_tampered_token_rejected(self):
        token = create_access_token(uuid4())

        with pytest.raises(JWTError):
            decode_token(token[:-2] + ("AA" if token[-2:] != "AA" else "BB"))

    def test_wrong_secret_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid4()), "type": ACCESS_TOKEN_TYPE},
            "some-other-secret",
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(JWTError):
            decode_token(token)


class TestUserIdFromToken:
    def test_roundtrip(self):
        user_id = uuid4()

        assert get_user_id_from_token(create_access_token(user_id)) == user_id

    def test_expected_type_mismatch(self):
        """A refresh token cannot be used where an access token is required."""
        token = create_refresh_token(uuid4())

        with pytest.raises(JWTError):
            get_user_id_from_token(token, expected_type=ACCESS_TOKEN_TYPE)

    def test_missing_subject(self):
        token = jwt.encode(
            {"type": ACCESS_TOKEN_TYPE}, settings.jwt_secret, algorithm=settings.jwt_algorithm
        )

        with pytest.raises(JWTError):
            get_user_id_from_token(token)

    def test_invalid_uuid(self):
        token = jwt.encode(
            {"sub": "not-a-uuid", "type": ACCESS_TOKEN_TYPE},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(ValueError):
            get_user_id_from_token(token)
