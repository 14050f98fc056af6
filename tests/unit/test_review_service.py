"""Unit tests for ReviewService."""

from typing import Any
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from src.schemas.review import ReviewCreate
from src.services.review_service import ReviewService


@pytest.fixture
def mock_supabase() -> MagicMock:
    mock = MagicMock()

    def insert(row: dict) -> MagicMock:
        query = MagicMock()
        query.execute.return_value = MagicMock(data=[{**row, "id": str(uuid4())}])
        return query

    mock.table.return_value.insert.side_effect = insert
    return mock


class TestCreateReview:
    """Tests for create_review method."""

    @pytest.mark.asyncio
    async def test_uses_profile_name(self, mock_supabase: MagicMock, customer: Any) -> None:
        service = ReviewService(supabase_client=mock_supabase)

        review = await service.create_review(ReviewCreate(rating=5, comment=" Great crust! "), customer)

        assert review["user_name"] == "Jane Doe"
        assert review["comment"] == "Great crust!"
        assert review["user_id"] == str(customer.user_id)

    @pytest.mark.asyncio
    async def test_falls_back_to_email_local_part(self, mock_supabase: MagicMock, customer: Any) -> None:
        service = ReviewService(supabase_client=mock_supabase)
        anonymous = customer.model_copy(update={"name": None})

        review = await service.create_review(ReviewCreate(rating=4, comment="Fast delivery"), anonymous)

        assert review["user_name"] == "jane"


class TestReviewSchema:
    """Tests for review input validation."""

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating: int) -> None:
        with pytest.raises(ValueError):
            ReviewCreate(rating=rating, comment="ok")

    def test_blank_comment(self) -> None:
        with pytest.raises(ValueError):
            ReviewCreate(rating=3, comment="   ")
