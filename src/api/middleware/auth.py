"""Bearer token verification for customers and restaurant admins.

Tokens are Supabase-issued ES256 JWTs. The admin role travels in
``app_metadata`` and is resolved later by ``TokenPayload.to_user_context``.
"""

import json
from enum import Enum
from functools import lru_cache
from typing import Any

import jwt
from jwt import PyJWK

from src.core.config import get_settings
from src.schemas.auth import TokenPayload

REQUIRED_CLAIMS = ["exp", "iat", "sub"]


class AuthErrorCode(str, Enum):
    """Why a bearer token was refused."""

    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    MISSING_CLAIM = "MISSING_CLAIM"


class AuthError(Exception):
    def __init__(self, message: str, code: AuthErrorCode) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


# First match wins; InvalidSignatureError subclasses DecodeError.
_JWT_FAILURES: tuple[tuple[type[Exception], AuthErrorCode, str], ...] = (
    (jwt.ExpiredSignatureError, AuthErrorCode.TOKEN_EXPIRED, "Token has expired"),
    (jwt.InvalidSignatureError, AuthErrorCode.INVALID_SIGNATURE, "Invalid token signature"),
    (jwt.MissingRequiredClaimError, AuthErrorCode.MISSING_CLAIM, "Token missing required claim: {error}"),
    (jwt.DecodeError, AuthErrorCode.INVALID_TOKEN, "Invalid token format: {error}"),
)


@lru_cache
def get_signing_key() -> Any:
    """Public key parsed from ``SUPABASE_SIGNING_KEY_JWK``."""
    jwk_json = get_settings().supabase_signing_key_jwk
    if not jwk_json:
        raise AuthError("Signing key not configured", AuthErrorCode.INVALID_TOKEN)

    try:
        return PyJWK.from_dict(json.loads(jwk_json)).key
    except json.JSONDecodeError as e:
        raise AuthError(f"Invalid signing key JWK format: {e}", AuthErrorCode.INVALID_TOKEN) from e


def _classify(error: Exception) -> AuthError:
    for error_type, code, message in _JWT_FAILURES:
        if isinstance(error, error_type):
            return AuthError(message.format(error=error), code)
    return AuthError(f"Token validation failed: {error}", AuthErrorCode.INVALID_TOKEN)


def decode_jwt(token: str) -> TokenPayload:
    """Verify a bearer token and return its claims.

    Audience is not checked; any signed-in Supabase user may order.

    Raises:
        AuthError: The token is expired, forged, malformed or incomplete.
    """
    try:
        claims: dict[str, Any] = jwt.decode(
            token,
            get_signing_key(),
            algorithms=["ES256"],
            options={"verify_aud": False, "require": REQUIRED_CLAIMS},
        )
        return TokenPayload.model_validate(
            {
                **claims,
                "app_metadata": claims.get("app_metadata") or {},
                "user_metadata": claims.get("user_metadata") or {},
            }
        )
    except AuthError:
        raise
    except Exception as e:
        raise _classify(e) from e
