"""Order Pydantic schemas for API request/response models.

Wire names are camelCase (``totalAmount``, ``orderStatus``); Python
attributes are snake_case and match the database columns.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from src.models.order import DeliveryType, PaymentStatus
from src.schemas.common import CamelModel


class OrderItemSchema(CamelModel):
    """Snapshot of a product at order time."""

    product: str = Field(min_length=1, description="Product ID the snapshot was taken from")
    name: str = Field(default="", description="Product name at order time")
    price: float = Field(default=0, ge=0, allow_inf_nan=False, description="Unit price at order time")
    quantity: int = Field(default=1, ge=1, description="Quantity ordered")
    image: str = Field(default="", description="Product image URL at order time")


class OrderCreate(CamelModel):
    """Checkout command for POST /orders.

    ``total_amount`` is the subtotal sent by the client; the delivery charge
    is added server-side.
    """

    items: list[OrderItemSchema] = Field(min_length=1, description="Line item snapshots")
    total_amount: float = Field(gt=0, allow_inf_nan=False, description="Order subtotal before delivery")
    customer_name: str = Field(min_length=1, max_length=255, description="Customer name")
    customer_email: str = Field(min_length=3, max_length=255, description="Customer email")
    customer_phone: str | None = Field(default=None, max_length=32, description="Phone for SMS notifications")
    payment_method: str = Field(default="card", description="Free-form payment method")
    delivery_type: DeliveryType = Field(default="pickup", description="pickup or delivery")
    address: str = Field(default="", description="Delivery address (required for delivery)")

    @field_validator("customer_name", "customer_email")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("payment_method", mode="before")
    @classmethod
    def default_payment_method(cls, value: str | None) -> str:
        return value or "card"

    @field_validator("delivery_type", mode="before")
    @classmethod
    def default_delivery_type(cls, value: str | None) -> str:
        return value or "pickup"

    @field_validator("address", mode="before")
    @classmethod
    def default_address(cls, value: str | None) -> str:
        return value or ""


class OrderStatusUpdate(CamelModel):
    """Body for PUT /orders/{id}/status.

    The value is checked against the allowed statuses by the order service
    so that an unknown status is reported as a plain 400.
    """

    order_status: str = Field(default="", description="Target order status")


class OrderUserSchema(CamelModel):
    """Owner profile joined onto an order."""

    id: UUID = Field(description="User ID")
    name: str | None = Field(default=None, description="User name")
    email: str | None = Field(default=None, description="User email")


class OrderResponse(CamelModel):
    """Schema for order API responses and real-time payloads."""

    id: UUID = Field(description="Order unique identifier")
    user_id: UUID | None = Field(default=None, description="Owning user ID")
    user: OrderUserSchema | None = Field(default=None, description="Joined owner profile")
    items: list[OrderItemSchema] = Field(default_factory=list, description="Line item snapshots")
    total_amount: float = Field(description="Subtotal plus delivery charge")
    payment_status: PaymentStatus = Field(default="pending", description="Payment status")
    order_status: str = Field(default="Pending", description="Order status")
    customer_name: str = Field(description="Customer name")
    customer_email: str = Field(description="Customer email")
    customer_phone: str | None = Field(default=None, description="Customer phone")
    payment_method: str = Field(default="card", description="Payment method")
    delivery_type: DeliveryType = Field(default="pickup", description="pickup or delivery")
    address: str = Field(default="", description="Delivery address")
    distance: float = Field(default=0, description="Distance from the restaurant in km")
    delivery_charge: float = Field(default=0, description="Delivery charge")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")

    @property
    def order_number(self) -> str:
        """Short customer-facing order number (last 8 characters of the ID)."""
        return str(self.id)[-8:]

    @property
    def owner_id(self) -> str | None:
        """Resolved owner ID from the join or the foreign key."""
        if self.user is not None:
            return str(self.user.id)
        if self.user_id is not None:
            return str(self.user_id)
        return None


class DeliveryQuoteRequest(CamelModel):
    """Body for POST /delivery/calculate."""

    address: str = Field(default="", description="Customer address")


class DeliveryQuoteResponse(CamelModel):
    """Delivery distance and charge for an address."""

    distance: float = Field(description="Distance in km")
    delivery_charge: float = Field(description="Delivery charge")


class StatusEvent(CamelModel):
    """Payload of the broadcast orderStatusUpdate event."""

    order_id: str
    status: str


class RoomStatusEvent(StatusEvent):
    """Payload of the room-scoped orderStatusUpdate event."""

    order: dict


class PickupReadyEvent(CamelModel):
    """Payload of the pickupReady event."""

    order_id: str
    order_number: str
    message: str
    order: dict
