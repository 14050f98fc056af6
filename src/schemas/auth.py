"""Authentication schemas for JWT tokens and user context."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserContext(BaseModel):
    """Authenticated user context extracted from JWT token.

    This model represents the authenticated user for the current request.
    It is populated by the auth middleware from the validated JWT.
    """

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID = Field(description="Unique identifier for the user (from JWT sub claim)")
    email: str | None = Field(default=None, description="User's email address if available")
    name: str | None = Field(default=None, description="User's display name if available")
    role: str | None = Field(default=None, description="User's role (e.g., 'user', 'admin')")
    is_admin: bool = Field(default=False, description="Whether the user holds admin capability")


class TokenPayload(BaseModel):
    """JWT token payload structure for Supabase tokens.

    Represents the claims contained in a Supabase-issued JWT.
    """

    model_config = ConfigDict(from_attributes=True)

    sub: str = Field(description="Subject - the user's UUID")
    email: str | None = Field(default=None, description="User's email address")
    role: str | None = Field(default=None, description="User's role")
    exp: int = Field(description="Expiration timestamp (Unix epoch)")
    iat: int = Field(description="Issued at timestamp (Unix epoch)")
    aud: str | None = Field(default=None, description="Audience - intended recipient")
    iss: str | None = Field(default=None, description="Issuer - token issuer URL")
    app_metadata: dict[str, Any] = Field(default_factory=dict, description="Server-controlled user metadata")
    user_metadata: dict[str, Any] = Field(default_factory=dict, description="User-editable metadata")

    @property
    def expiration_datetime(self) -> datetime:
        """Get expiration as datetime object."""
        return datetime.fromtimestamp(self.exp)

    @property
    def effective_role(self) -> str | None:
        """Role from app_metadata (set by admins) falling back to the top-level claim."""
        return self.app_metadata.get("role") or self.role

    def to_user_context(self, admin_role: str = "admin") -> UserContext:
        """Convert token payload to UserContext.

        Args:
            admin_role: Role value that grants admin capability.

        Returns:
            UserContext: User context derived from token claims.
        """
        role = self.effective_role
        return UserContext(
            user_id=UUID(self.sub),
            email=self.email,
            name=self.user_metadata.get("name") or self.user_metadata.get("full_name"),
            role=role,
            is_admin=role == admin_role,
        )
