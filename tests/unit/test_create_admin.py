"""Unit tests for the admin role management script."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from scripts.create_admin import find_user_by_email, set_admin_role


@pytest.fixture
def auth_client() -> MagicMock:
    client = MagicMock()
    client.auth.admin.list_users.return_value = [
        SimpleNamespace(id="u-1", email="cook@example.com", app_metadata={"provider": "email"}),
        SimpleNamespace(id="u-2", email="Owner@Example.com", app_metadata={"provider": "email", "role": "admin"}),
    ]
    return client


class TestFindUserByEmail:
    def test_match_is_case_insensitive(self, auth_client: MagicMock) -> None:
        assert find_user_by_email(auth_client, "owner@example.com").id == "u-2"

    def test_unknown_email(self, auth_client: MagicMock) -> None:
        assert find_user_by_email(auth_client, "nobody@example.com") is None


class TestSetAdminRole:
    def test_grant_keeps_existing_metadata(self, auth_client: MagicMock) -> None:
        user_id = set_admin_role(auth_client, "cook@example.com", "admin")

        assert user_id == "u-1"
        auth_client.auth.admin.update_user_by_id.assert_called_once_with(
            "u-1", {"app_metadata": {"provider": "email", "role": "admin"}}
        )

    def test_revoke_removes_role(self, auth_client: MagicMock) -> None:
        set_admin_role(auth_client, "owner@example.com", "admin", revoke=True)

        auth_client.auth.admin.update_user_by_id.assert_called_once_with(
            "u-2", {"app_metadata": {"provider": "email"}}
        )

    def test_unknown_user_raises(self, auth_client: MagicMock) -> None:
        with pytest.raises(LookupError):
            set_admin_role(auth_client, "nobody@example.com", "admin")

        auth_client.auth.admin.update_user_by_id.assert_not_called()
