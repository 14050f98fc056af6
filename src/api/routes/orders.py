"""Order API routes."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import HTMLResponse

from src.api.deps import AdminUser, CurrentUser, OrderServiceDep
from src.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate
from src.services.receipt_service import render_order_receipt

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
    description="Creates an order, adds the delivery charge and notifies connected dashboards.",
)
async def create_order(
    data: OrderCreate,
    user: CurrentUser,
    service: OrderServiceDep,
) -> OrderResponse:
    """Place an order for the authenticated user.

    Args:
        data: Checkout data (subtotal in ``totalAmount``).
        user: The authenticated user.
        service: Order service.

    Returns:
        OrderResponse: The created order including delivery charge.
    """
    return await service.create_order(data, user)


@router.get(
    "",
    response_model=list[OrderResponse],
    summary="List orders",
    description="Admins see all orders; other users see their own.",
)
async def list_orders(user: CurrentUser, service: OrderServiceDep) -> list[OrderResponse]:
    return await service.list_orders(user)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order by ID",
    description="Public lookup used by the order tracking page.",
)
async def get_order(order_id: UUID, service: OrderServiceDep) -> OrderResponse:
    """Get a single order for tracking.

    Raises:
        HTTPException: 404 if order not found.
    """
    order = await service.get_order(order_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )
    return order


@router.put(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Update order status",
    description="Admin only. Publishes the change in real time and notifies the customer when ready for pickup.",
)
async def update_order_status(
    order_id: UUID,
    data: OrderStatusUpdate,
    user: CurrentUser,
    service: OrderServiceDep,
) -> OrderResponse:
    """Change an order's status.

    Raises:
        AuthorizationError: 403 if the user is not an admin.
        ValidationError: 400 if the status is not allowed.
        NotFoundError: 404 if the order does not exist.
    """
    return await service.update_status(order_id, data.order_status, user)


@router.get(
    "/{order_id}/print",
    response_class=HTMLResponse,
    summary="Printable order",
    description="Admin only. Returns an HTML receipt suitable for printing.",
)
async def print_order(order_id: UUID, user: AdminUser, service: OrderServiceDep) -> HTMLResponse:
    order = await service.get_order(order_id)
    if order is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found",
        )
    return HTMLResponse(content=render_order_receipt(order))
