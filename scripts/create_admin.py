#!/usr/bin/env python3
"""Grant the admin role to an existing user.

The role is written to the user's ``app_metadata`` through the Supabase
auth admin API, which is where access tokens take it from. The user must
sign in again for a fresh token to carry the new role.

Usage:
    python scripts/create_admin.py admin@example.com
    python scripts/create_admin.py admin@example.com --revoke
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

# Add parent directory to path to import from src
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import get_settings
from src.core.supabase import get_supabase_client

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def find_user_by_email(client: Any, email: str) -> Any | None:
    """Look up an auth user by email (case-insensitive)."""
    wanted = email.strip().lower()
    for user in client.auth.admin.list_users():
        if (user.email or "").lower() == wanted:
            return user
    return None


def set_admin_role(client: Any, email: str, admin_role: str, revoke: bool = False) -> str:
    """Grant or revoke the admin role for a user.

    Args:
        client: Supabase client created with the secret key.
        email: Email of the user to change.
        admin_role: Role value that grants admin capability.
        revoke: Remove the role instead of granting it.

    Returns:
        str: ID of the updated user.

    Raises:
        LookupError: If no user has that email.
    """
    user = find_user_by_email(client, email)
    if user is None:
        raise LookupError(f"No user found with email {email}")

    app_metadata = dict(user.app_metadata or {})
    if revoke:
        app_metadata.pop("role", None)
    else:
        app_metadata["role"] = admin_role

    client.auth.admin.update_user_by_id(str(user.id), {"app_metadata": app_metadata})
    return str(user.id)


def main() -> None:
    """Main execution function."""
    parser = argparse.ArgumentParser(description="Grant or revoke the admin role for a user.")
    parser.add_argument("email", help="Email address of an existing user")
    parser.add_argument("--revoke", action="store_true", help="Remove the admin role instead")
    args = parser.parse_args()

    settings = get_settings()

    try:
        client = get_supabase_client()
        user_id = set_admin_role(client, args.email, settings.admin_role, revoke=args.revoke)
    except LookupError as e:
        logger.error(str(e))
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to update user: {e}", exc_info=True)
        sys.exit(1)

    action = "revoked from" if args.revoke else "granted to"
    logger.info(f"Role '{settings.admin_role}' {action} {args.email} ({user_id})")
    logger.info("The user must sign in again for the change to take effect.")


if __name__ == "__main__":
    main()
