"""Order model type definitions for database operations."""

from datetime import datetime
from typing import Literal, TypedDict
from uuid import UUID


OrderStatus = Literal["Pending", "Preparing", "Ready for Pickup", "Out for Delivery", "Delivered"]
PaymentStatus = Literal["pending", "completed"]
DeliveryType = Literal["pickup", "delivery"]

PENDING: OrderStatus = "Pending"
READY_FOR_PICKUP: OrderStatus = "Ready for Pickup"

# Accepted values for status transitions, in display order
ORDER_STATUSES: tuple[OrderStatus, ...] = (
    "Pending",
    "Preparing",
    "Ready for Pickup",
    "Out for Delivery",
    "Delivered",
)


class OrderLineItem(TypedDict):
    """Snapshot of a product captured when the order was placed.

    Stored as part of the items JSONB array; never re-derived from the
    live product row.
    """

    product: str
    name: str
    price: float
    quantity: int
    image: str


class OrderUser(TypedDict):
    """Owner profile fields joined onto order reads."""

    id: UUID
    name: str | None
    email: str | None


class Order(TypedDict, total=False):
    """Order table row representation."""

    id: UUID
    user_id: UUID
    user: OrderUser | None
    items: list[OrderLineItem]
    total_amount: float
    payment_status: PaymentStatus
    order_status: OrderStatus
    customer_name: str
    customer_email: str
    customer_phone: str | None
    payment_method: str
    delivery_type: DeliveryType
    address: str
    distance: float
    delivery_charge: float
    created_at: datetime
    updated_at: datetime


class OrderInsert(TypedDict):
    """Row inserted when an order is placed."""

    user_id: str
    items: list[OrderLineItem]
    total_amount: float
    payment_status: PaymentStatus
    order_status: OrderStatus
    customer_name: str
    customer_email: str
    customer_phone: str | None
    payment_method: str
    delivery_type: DeliveryType
    address: str
    distance: float
    delivery_charge: float
