"""Review Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.schemas.common import CamelModel


class ReviewCreate(CamelModel):
    """Schema for posting a review."""

    rating: int = Field(ge=1, le=5, description="Star rating from 1 to 5")
    comment: str = Field(min_length=1, max_length=2000, description="Review text")

    @field_validator("comment")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ReviewResponse(CamelModel):
    """Schema for review API responses."""

    id: UUID = Field(description="Review unique identifier")
    user_id: UUID | None = Field(default=None, description="Author user ID")
    user_name: str = Field(default="", description="Author display name")
    rating: int = Field(description="Star rating")
    comment: str = Field(description="Review text")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
