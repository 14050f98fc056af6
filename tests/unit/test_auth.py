"""Unit tests for JWT decoding and authentication utilities."""

import time
from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from jose import jwt
from jwt.algorithms import ECAlgorithm

from src.api.middleware.auth import AuthError, AuthErrorCode, decode_jwt, get_signing_key
from src.schemas.auth import TokenPayload


def _pem(private_key: ec.EllipticCurvePrivateKey) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


SIGNING_KEY = ec.generate_private_key(ec.SECP256R1())
OTHER_KEY = ec.generate_private_key(ec.SECP256R1())
PUBLIC_JWK = ECAlgorithm.to_jwk(SIGNING_KEY.public_key())


def create_test_token(
    sub: str = "550e8400-e29b-41d4-a716-446655440000",
    email: str | None = "test@example.com",
    role: str | None = "authenticated",
    exp_offset: int = 3600,
    key: ec.EllipticCurvePrivateKey = SIGNING_KEY,
    **claims: Any,
) -> str:
    """Create an ES256 test JWT token.

    Args:
        sub: Subject (user ID).
        email: User email.
        role: Top-level role claim.
        exp_offset: Seconds from now for expiration (negative for expired).
        key: Private key to sign with.
        **claims: Extra claims such as app_metadata.

    Returns:
        str: Encoded JWT token.
    """
    now = int(time.time())
    payload = {
        "sub": sub,
        "email": email,
        "role": role,
        "exp": now + exp_offset,
        "iat": now,
        "aud": "authenticated",
        "iss": "https://test.supabase.co/auth/v1",
        **claims,
    }
    return jwt.encode(payload, _pem(key), algorithm="ES256")


@pytest.fixture(autouse=True)
def signing_settings() -> Generator[MagicMock, None, None]:
    """Point the signing key loader at the test key."""
    get_signing_key.cache_clear()
    with patch("src.api.middleware.auth.get_settings") as mock_settings:
        mock_settings.return_value.supabase_signing_key_jwk = PUBLIC_JWK
        yield mock_settings
    get_signing_key.cache_clear()


class TestDecodeJWT:
    """Tests for decode_jwt function."""

    def test_decode_jwt_with_valid_token(self) -> None:
        payload = decode_jwt(create_test_token())

        assert payload.sub == "550e8400-e29b-41d4-a716-446655440000"
        assert payload.email == "test@example.com"
        assert payload.role == "authenticated"

    def test_decode_jwt_reads_metadata(self) -> None:
        token = create_test_token(
            app_metadata={"role": "admin"},
            user_metadata={"full_name": "Mario Rossi"},
        )

        payload = decode_jwt(token)

        assert payload.app_metadata == {"role": "admin"}
        assert payload.user_metadata["full_name"] == "Mario Rossi"

    def test_decode_jwt_with_expired_token(self) -> None:
        with pytest.raises(AuthError) as exc_info:
            decode_jwt(create_test_token(exp_offset=-3600))

        assert exc_info.value.code == AuthErrorCode.TOKEN_EXPIRED
        assert "expired" in exc_info.value.message.lower()

    def test_decode_jwt_with_invalid_signature(self) -> None:
        with pytest.raises(AuthError) as exc_info:
            decode_jwt(create_test_token(key=OTHER_KEY))

        assert exc_info.value.code == AuthErrorCode.INVALID_SIGNATURE

    def test_decode_jwt_with_malformed_token(self) -> None:
        with pytest.raises(AuthError) as exc_info:
            decode_jwt("not-a-jwt")

        assert exc_info.value.code == AuthErrorCode.INVALID_TOKEN

    def test_decode_jwt_without_issued_at(self) -> None:
        token = jwt.encode(
            {"sub": "550e8400-e29b-41d4-a716-446655440000", "exp": int(time.time()) + 3600},
            _pem(SIGNING_KEY),
            algorithm="ES256",
        )

        with pytest.raises(AuthError) as exc_info:
            decode_jwt(token)

        assert exc_info.value.code == AuthErrorCode.MISSING_CLAIM
        assert "iat" in exc_info.value.message

    def test_unparseable_signing_key(self, signing_settings: MagicMock) -> None:
        signing_settings.return_value.supabase_signing_key_jwk = "{not json"

        with pytest.raises(AuthError) as exc_info:
            decode_jwt(create_test_token())

        assert exc_info.value.code == AuthErrorCode.INVALID_TOKEN
        assert "JWK" in exc_info.value.message


class TestTokenPayload:
    """Tests for role resolution on the token payload."""

    def _payload(self, **overrides: Any) -> TokenPayload:
        data = {
            "sub": "550e8400-e29b-41d4-a716-446655440000",
            "email": "owner@example.com",
            "role": "authenticated",
            "exp": int(time.time()) + 3600,
            "iat": int(time.time()),
        }
        data.update(overrides)
        return TokenPayload(**data)

    def test_app_metadata_role_grants_admin(self) -> None:
        context = self._payload(app_metadata={"role": "admin"}).to_user_context()

        assert context.is_admin is True
        assert context.role == "admin"

    def test_top_level_role_is_fallback(self) -> None:
        context = self._payload(role="admin").to_user_context()

        assert context.is_admin is True

    def test_regular_user_is_not_admin(self) -> None:
        context = self._payload().to_user_context()

        assert context.is_admin is False

    def test_custom_admin_role(self) -> None:
        payload = self._payload(app_metadata={"role": "manager"})

        assert payload.to_user_context(admin_role="manager").is_admin is True
        assert payload.to_user_context().is_admin is False

    def test_name_from_user_metadata(self) -> None:
        context = self._payload(user_metadata={"name": "Luigi"}).to_user_context()

        assert context.name == "Luigi"
