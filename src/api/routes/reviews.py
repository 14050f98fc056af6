"""Review API routes."""

from fastapi import APIRouter, status

from src.api.deps import CurrentUser
from src.schemas.review import ReviewCreate, ReviewResponse
from src.services.review_service import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewResponse], summary="List reviews")
async def list_reviews() -> list[ReviewResponse]:
    service = ReviewService()
    reviews = await service.list_reviews()
    return [ReviewResponse.model_validate(r) for r in reviews]


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Post a review",
)
async def create_review(data: ReviewCreate, user: CurrentUser) -> ReviewResponse:
    """Post a review as the authenticated user.

    Args:
        data: Rating (1-5) and comment.
        user: The authenticated author.

    Returns:
        ReviewResponse: The stored review.
    """
    service = ReviewService()
    review = await service.create_review(data, user)
    return ReviewResponse.model_validate(review)
