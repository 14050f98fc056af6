"""Customer review service."""

import logging
from typing import Any

from supabase import Client

from src.core.supabase import get_supabase_client
from src.models.review import Review
from src.schemas.auth import UserContext
from src.schemas.review import ReviewCreate

logger = logging.getLogger(__name__)


class ReviewService:
    """Service for listing and posting reviews."""

    def __init__(self, supabase_client: Client | None = None) -> None:
        self._supabase_client = supabase_client

    @property
    def client(self) -> Client:
        """Get Supabase client."""
        if self._supabase_client is None:
            self._supabase_client = get_supabase_client()
        return self._supabase_client

    async def list_reviews(self) -> list[Review]:
        response = (
            self.client.table("reviews")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    async def create_review(self, data: ReviewCreate, user: UserContext) -> Review:
        """Store a review under the author's current display name.

        Args:
            data: Validated rating and comment.
            user: Authenticated author.

        Returns:
            Review: The stored review.
        """
        row: dict[str, Any] = {
            "user_id": str(user.user_id),
            "user_name": user.name or (user.email or "").split("@")[0] or "Customer",
            "rating": data.rating,
            "comment": data.comment,
        }
        response = self.client.table("reviews").insert(row).execute()
        if not response.data:
            raise Exception("Failed to create review")

        logger.info("Review %s created by %s", response.data[0]["id"], user.user_id)
        return response.data[0]
