"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import UUID

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing application modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SUPABASE_SIGNING_KEY_JWK", "test-signing-key-jwk")

ORDER_ID = "660e8400-e29b-41d4-a716-446655440000"
CUSTOMER_ID = "550e8400-e29b-41d4-a716-446655440000"
ADMIN_ID = "770e8400-e29b-41d4-a716-446655440000"


@pytest.fixture(scope="session")
def test_settings() -> Generator[Any, None, None]:
    """Provide test settings with cleared cache.

    Yields:
        Settings: Test configuration settings.
    """
    from src.core.config import get_settings

    # Clear the cache to ensure fresh settings
    get_settings.cache_clear()

    settings = get_settings()
    yield settings

    # Clean up cache after tests
    get_settings.cache_clear()


@pytest.fixture
def mock_supabase_client() -> Generator[MagicMock, None, None]:
    """Provide a mocked Supabase client.

    Yields:
        MagicMock: Mocked Supabase client for testing.
    """
    mock_client = MagicMock()

    # Configure default mock responses
    mock_response = MagicMock()
    mock_response.data = []
    mock_client.table.return_value.select.return_value.limit.return_value.execute.return_value = (
        mock_response
    )

    with patch("src.core.supabase.get_supabase_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def client(mock_supabase_client: MagicMock) -> Generator[TestClient, None, None]:
    """Provide a test client for the FastAPI application.

    Args:
        mock_supabase_client: Mocked Supabase client fixture.

    Yields:
        TestClient: FastAPI test client.
    """
    from src.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def customer() -> Any:
    """A signed-in non-admin user."""
    from src.schemas.auth import UserContext

    return UserContext(
        user_id=UUID(CUSTOMER_ID),
        email="jane@example.com",
        name="Jane Doe",
        role="authenticated",
        is_admin=False,
    )


@pytest.fixture
def admin() -> Any:
    """A signed-in admin user."""
    from src.schemas.auth import UserContext

    return UserContext(
        user_id=UUID(ADMIN_ID),
        email="owner@example.com",
        name="Owner",
        role="admin",
        is_admin=True,
    )


@pytest.fixture
def publisher() -> MagicMock:
    """A recording stand-in for the real-time hub."""
    hub = MagicMock()
    hub.emit = AsyncMock(return_value=1)
    return hub


@pytest.fixture
def order_row() -> dict[str, Any]:
    """A persisted pickup order as returned by the database."""
    return {
        "id": ORDER_ID,
        "user_id": CUSTOMER_ID,
        "user": {"id": CUSTOMER_ID, "name": "Jane Doe", "email": "jane@example.com"},
        "items": [
            {
                "product": "p-1",
                "name": "Margherita",
                "price": 9.5,
                "quantity": 2,
                "image": "https://cdn.example.com/margherita.jpg",
            }
        ],
        "total_amount": 19.0,
        "payment_status": "completed",
        "order_status": "Pending",
        "customer_name": "Jane Doe",
        "customer_email": "jane@example.com",
        "customer_phone": "+4915112345678",
        "payment_method": "card",
        "delivery_type": "pickup",
        "address": "",
        "distance": 0,
        "delivery_charge": 0,
        "created_at": "2026-10-19T12:00:00+00:00",
        "updated_at": "2026-10-19T12:00:00+00:00",
    }
