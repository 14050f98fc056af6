"""Promotional offer API routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from src.api.deps import AdminUser
from src.schemas.common import MessageResponse
from src.schemas.offer import OfferCreate, OfferResponse, OfferUpdate
from src.services.offer_service import OfferService

router = APIRouter(prefix="/offers", tags=["offers"])


@router.get(
    "",
    response_model=list[OfferResponse],
    summary="List active offers",
    description="Offers that are enabled and currently valid.",
)
async def list_active_offers() -> list[OfferResponse]:
    service = OfferService()
    offers = await service.list_active_offers()
    return [OfferResponse.model_validate(o) for o in offers]


@router.get(
    "/all",
    response_model=list[OfferResponse],
    summary="List all offers",
    description="Admin only. Includes inactive and expired offers.",
)
async def list_all_offers(admin: AdminUser) -> list[OfferResponse]:
    service = OfferService()
    offers = await service.list_all_offers()
    return [OfferResponse.model_validate(o) for o in offers]


@router.get("/{offer_id}", response_model=OfferResponse, summary="Get offer by ID")
async def get_offer(offer_id: UUID) -> OfferResponse:
    service = OfferService()
    offer = await service.get_offer(offer_id)
    if not offer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Offer not found",
        )
    return OfferResponse.model_validate(offer)


@router.post(
    "",
    response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an offer",
    description="Admin only. Codes are stored upper-case and must be unique.",
)
async def create_offer(data: OfferCreate, admin: AdminUser) -> OfferResponse:
    """Create an offer.

    Raises:
        ConflictError: 409 if the code already exists.
    """
    service = OfferService()
    offer = await service.create_offer(data)
    return OfferResponse.model_validate(offer)


@router.put("/{offer_id}", response_model=OfferResponse, summary="Update an offer")
async def update_offer(offer_id: UUID, data: OfferUpdate, admin: AdminUser) -> OfferResponse:
    service = OfferService()
    offer = await service.update_offer(offer_id, data)
    if not offer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Offer not found",
        )
    return OfferResponse.model_validate(offer)


@router.delete("/{offer_id}", response_model=MessageResponse, summary="Delete an offer")
async def delete_offer(offer_id: UUID, admin: AdminUser) -> MessageResponse:
    service = OfferService()
    if not await service.delete_offer(offer_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Offer not found",
        )
    return MessageResponse(message="Offer deleted")
