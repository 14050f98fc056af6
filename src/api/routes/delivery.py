"""Delivery charge estimation routes."""

from fastapi import APIRouter, HTTPException, status

from src.api.deps import OrderServiceDep
from src.schemas.order import DeliveryQuoteRequest, DeliveryQuoteResponse

router = APIRouter(prefix="/delivery", tags=["delivery"])


@router.post(
    "/calculate",
    response_model=DeliveryQuoteResponse,
    summary="Estimate delivery charge",
    description="Returns distance and charge for an address, or the default quote if it cannot be resolved.",
)
async def calculate_delivery(
    data: DeliveryQuoteRequest,
    service: OrderServiceDep,
) -> DeliveryQuoteResponse:
    if not data.address.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Address is required",
        )

    quote = await service.quote(data.address)
    return DeliveryQuoteResponse(
        distance=round(quote.distance, 2),
        delivery_charge=round(quote.delivery_charge, 2),
    )
