"""Order lifecycle business logic service."""

import logging
from typing import Any
from uuid import UUID

from supabase import Client

from src.api.middleware.error_handler import AuthorizationError, NotFoundError, ValidationError
from src.core.config import Settings, get_settings
from src.core.realtime import EventPublisher, order_room
from src.core.supabase import get_supabase_client
from src.models.order import ORDER_STATUSES, PENDING, READY_FOR_PICKUP, OrderInsert
from src.schemas.auth import UserContext
from src.schemas.order import OrderCreate, OrderResponse, RoomStatusEvent, StatusEvent
from src.services.geo_service import (
    AddressResolver,
    DeliveryQuote,
    get_address_resolver,
    quote_delivery,
    restaurant_location,
)
from src.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

ORDERS_TABLE = "orders"
# Joins the owner's profile as "user" on reads
ORDER_WITH_USER = "*, user:profiles(id, name, email)"

NEW_ORDER_EVENT = "newOrder"
STATUS_UPDATE_EVENT = "orderStatusUpdate"


class OrderService:
    """Service for order creation, reads and status transitions."""

    def __init__(
        self,
        publisher: EventPublisher,
        notifier: NotificationService,
        resolver: AddressResolver | None = None,
        supabase_client: Client | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize order service.

        Args:
            publisher: Real-time publish handle (the application's hub).
            notifier: Pickup-ready notification dispatcher.
            resolver: Optional address resolver for testing.
            supabase_client: Optional Supabase client for testing.
            settings: Optional settings for testing.
        """
        self.publisher = publisher
        self.notifier = notifier
        self.settings = settings or get_settings()
        self._resolver = resolver
        self._supabase_client = supabase_client

    @property
    def client(self) -> Client:
        """Get Supabase client."""
        if self._supabase_client is None:
            self._supabase_client = get_supabase_client()
        return self._supabase_client

    @property
    def resolver(self) -> AddressResolver:
        """Get address resolver."""
        if self._resolver is None:
            self._resolver = get_address_resolver(self.settings)
        return self._resolver

    async def quote(self, address: str | None) -> DeliveryQuote:
        """Distance and delivery charge for an address, with fallback."""
        return await quote_delivery(address, self.resolver, restaurant_location(self.settings))

    async def create_order(self, data: OrderCreate, user: UserContext) -> OrderResponse:
        """Place an order and announce it to connected clients.

        The delivery charge is computed here and added to the client's
        subtotal once; the total is never recomputed afterwards. Payment is
        recorded as completed because there is no gateway round trip.

        Args:
            data: Validated checkout command.
            user: The ordering user.

        Returns:
            OrderResponse: The persisted order.
        """
        subtotal = float(data.total_amount)

        if data.delivery_type == "delivery":
            quote = await self.quote(data.address)
        else:
            quote = DeliveryQuote(distance=0.0, delivery_charge=0.0)

        total = subtotal + quote.delivery_charge
        logger.info(
            "Order total: Subtotal (%.2f) + Delivery (%.2f) = %.2f",
            subtotal,
            quote.delivery_charge,
            total,
        )

        row: OrderInsert = {
            "user_id": str(user.user_id),
            "items": [item.model_dump() for item in data.items],
            "total_amount": total,
            "payment_status": "completed",
            "order_status": PENDING,
            "customer_name": data.customer_name,
            "customer_email": data.customer_email,
            "customer_phone": data.customer_phone,
            "payment_method": data.payment_method or "card",
            "delivery_type": data.delivery_type,
            "address": data.address or "",
            "distance": quote.distance,
            "delivery_charge": quote.delivery_charge,
        }

        response = self.client.table(ORDERS_TABLE).insert(row).execute()
        if not response.data:
            raise Exception("Failed to create order")

        order = OrderResponse.model_validate(response.data[0])
        logger.info(
            "Order created: %s (%s, total %.2f)",
            order.id,
            order.delivery_type,
            order.total_amount,
        )

        await self._publish(NEW_ORDER_EVENT, order.to_payload())
        return order

    async def get_order(self, order_id: UUID) -> OrderResponse | None:
        """Get an order by ID with the owner's profile joined.

        Args:
            order_id: The order's UUID.

        Returns:
            OrderResponse | None: The order or None if not found.
        """
        response = (
            self.client.table(ORDERS_TABLE)
            .select(ORDER_WITH_USER)
            .eq("id", str(order_id))
            .maybe_single()
            .execute()
        )

        if response and response.data:
            return OrderResponse.model_validate(response.data)
        return None

    async def list_orders(self, user: UserContext) -> list[OrderResponse]:
        """List orders visible to a user, newest first.

        Admins see every order with the owner joined; everyone else sees
        only their own orders.
        """
        if user.is_admin:
            query = self.client.table(ORDERS_TABLE).select(ORDER_WITH_USER)
        else:
            query = (
                self.client.table(ORDERS_TABLE)
                .select("*")
                .eq("user_id", str(user.user_id))
            )

        response = query.order("created_at", desc=True).execute()
        return [OrderResponse.model_validate(row) for row in response.data or []]

    async def update_status(
        self,
        order_id: UUID,
        new_status: str,
        actor: UserContext,
    ) -> OrderResponse:
        """Move an order to a new status and fan the change out.

        The write is committed before anything is published. Then the
        broadcast event, then the order-room event, then (only when the
        order has just become ready for pickup) the customer notification.
        Publishing and notification failures are logged and absorbed.

        Any of the allowed statuses is accepted from any current status.
        Concurrent updates are last-write-wins.

        Args:
            order_id: The order's UUID.
            new_status: Target status.
            actor: User requesting the change.

        Returns:
            OrderResponse: The updated order.

        Raises:
            AuthorizationError: If the actor is not an admin.
            ValidationError: If the status is not allowed.
            NotFoundError: If the order does not exist.
        """
        if not actor.is_admin:
            raise AuthorizationError("Not authorized as an admin")

        if new_status not in ORDER_STATUSES:
            raise ValidationError(
                "Invalid order status",
                details=[{
                    "loc": ["body", "orderStatus"],
                    "msg": f"Must be one of: {', '.join(ORDER_STATUSES)}",
                    "type": "enum",
                }],
            )

        order = await self.get_order(order_id)
        if order is None:
            raise NotFoundError("Order not found")

        previous_status = order.order_status

        response = (
            self.client.table(ORDERS_TABLE)
            .update({"order_status": new_status})
            .eq("id", str(order_id))
            .execute()
        )
        if not response.data:
            raise NotFoundError("Order not found")

        # The update response has no profile join; keep the one already loaded
        updated = OrderResponse.model_validate({**order.model_dump(), **response.data[0], "user": order.user})
        order_id_str = str(updated.id)
        logger.info("Order %s status: %s -> %s", order_id_str, previous_status, new_status)

        await self._publish(
            STATUS_UPDATE_EVENT,
            StatusEvent(order_id=order_id_str, status=new_status).to_payload(),
        )
        await self._publish(
            STATUS_UPDATE_EVENT,
            RoomStatusEvent(
                order_id=order_id_str,
                status=new_status,
                order=updated.to_payload(),
            ).to_payload(),
            room=order_room(order_id_str),
        )

        if new_status == READY_FOR_PICKUP and previous_status != READY_FOR_PICKUP:
            try:
                await self.notifier.notify_pickup_ready(updated)
            except Exception:
                logger.exception("Notification error for order %s (non-blocking)", order_id_str)

        return updated

    async def _publish(self, event: str, payload: dict[str, Any], room: str | None = None) -> None:
        try:
            await self.publisher.emit(event, payload, room=room)
        except Exception:
            logger.exception("Failed to publish %s to %s", event, room or "broadcast")
