"""Unit tests for FastAPI dependency injection functions."""

import time
from unittest.mock import MagicMock, patch
from uuid import UUID

import pytest
from fastapi import HTTPException

from src.api.deps import get_current_user, get_optional_user, get_order_service, require_admin
from src.api.middleware.auth import AuthError, AuthErrorCode
from src.core.realtime import RealtimeHub
from src.schemas.auth import TokenPayload, UserContext


def _payload(**overrides: object) -> TokenPayload:
    data = {
        "sub": "550e8400-e29b-41d4-a716-446655440000",
        "email": "test@example.com",
        "role": "authenticated",
        "exp": int(time.time()) + 3600,
        "iat": int(time.time()),
    }
    data.update(overrides)
    return TokenPayload(**data)


class TestGetCurrentUser:
    """Tests for get_current_user dependency."""

    @pytest.mark.asyncio
    @patch("src.api.deps.decode_jwt")
    async def test_extracts_user_context_correctly(self, mock_decode: MagicMock) -> None:
        mock_decode.return_value = _payload()

        user = await get_current_user("Bearer valid-token")

        assert isinstance(user, UserContext)
        assert str(user.user_id) == "550e8400-e29b-41d4-a716-446655440000"
        assert user.email == "test@example.com"
        assert user.is_admin is False
        mock_decode.assert_called_once_with("valid-token")

    @pytest.mark.asyncio
    @patch("src.api.deps.decode_jwt")
    async def test_admin_role_from_app_metadata(self, mock_decode: MagicMock) -> None:
        mock_decode.return_value = _payload(app_metadata={"role": "admin"})

        user = await get_current_user("Bearer valid-token")

        assert user.is_admin is True

    @pytest.mark.asyncio
    async def test_raises_401_for_missing_header(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("")

        assert exc_info.value.status_code == 401
        assert "Authorization header required" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_raises_401_for_invalid_header_format(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("invalid-token")

        assert exc_info.value.status_code == 401
        assert "Invalid authorization header format" in exc_info.value.detail

    @pytest.mark.asyncio
    @patch("src.api.deps.decode_jwt")
    async def test_raises_401_for_expired_token(self, mock_decode: MagicMock) -> None:
        mock_decode.side_effect = AuthError("Token has expired", AuthErrorCode.TOKEN_EXPIRED)

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("Bearer expired-token")

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"


class TestGetOptionalUser:
    """Tests for get_optional_user dependency."""

    @pytest.mark.asyncio
    async def test_returns_none_without_header(self) -> None:
        assert await get_optional_user(None) is None

    @pytest.mark.asyncio
    @patch("src.api.deps.decode_jwt")
    async def test_returns_user_with_header(self, mock_decode: MagicMock) -> None:
        mock_decode.return_value = _payload()

        user = await get_optional_user("Bearer valid-token")

        assert user is not None
        assert user.user_id == UUID("550e8400-e29b-41d4-a716-446655440000")


class TestRequireAdmin:
    """Tests for require_admin dependency."""

    @pytest.mark.asyncio
    async def test_rejects_non_admin(self, customer: UserContext) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await require_admin(customer)

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == "Not authorized as an admin"

    @pytest.mark.asyncio
    async def test_passes_admin_through(self, admin: UserContext) -> None:
        assert await require_admin(admin) is admin


class TestGetOrderService:
    """Tests for order service wiring."""

    def test_hub_is_injected_into_service_and_notifier(self) -> None:
        hub = RealtimeHub()

        service = get_order_service(hub)

        assert service.publisher is hub
        assert service.notifier.publisher is hub
