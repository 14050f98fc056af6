"""Review model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class Review(TypedDict):
    """Reviews table row representation."""

    id: UUID
    user_id: UUID
    user_name: str
    rating: int
    comment: str
    created_at: datetime
