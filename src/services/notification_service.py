"""Pickup-ready notifications over real-time, email and SMS channels.

Each channel is attempted independently and reports a ``ChannelResult``.
Nothing raised by a channel escapes ``notify_pickup_ready``: a status update
that triggered a notification must never fail because of it.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from src.core.config import Settings, get_settings
from src.core.realtime import EventPublisher, order_room, user_room
from src.schemas.order import OrderResponse, PickupReadyEvent
from src.services.email_service import EmailService
from src.services.sms_service import SmsService

logger = logging.getLogger(__name__)

PICKUP_READY_EVENT = "pickupReady"
PICKUP_READY_MESSAGE = "Your order is ready for pickup!"


class ChannelStatus(str, Enum):
    """Outcome of a single notification channel."""

    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ChannelResult:
    """Result of attempting one channel."""

    channel: str
    status: ChannelStatus
    detail: str = ""


@dataclass
class NotificationReport:
    """Per-channel results for one notification."""

    order_id: str
    results: list[ChannelResult] = field(default_factory=list)

    def status_of(self, channel: str) -> ChannelStatus | None:
        for result in self.results:
            if result.channel == channel:
                return result.status
        return None

    @property
    def delivered(self) -> bool:
        """True if at least one channel sent successfully."""
        return any(r.status == ChannelStatus.SENT for r in self.results)


class NotificationService:
    """Dispatches the "ready for pickup" notification to a customer."""

    def __init__(
        self,
        publisher: EventPublisher,
        settings: Settings | None = None,
        email_service: EmailService | None = None,
        sms_service: SmsService | None = None,
    ) -> None:
        """Initialize notification service.

        Args:
            publisher: Real-time publish handle.
            settings: Optional settings for testing.
            email_service: Optional email sender for testing.
            sms_service: Optional SMS sender for testing.
        """
        self.publisher = publisher
        self.settings = settings or get_settings()
        self._email_service = email_service
        self._sms_service = sms_service

    @property
    def email_service(self) -> EmailService:
        if self._email_service is None:
            self._email_service = EmailService(self.settings)
        return self._email_service

    @property
    def sms_service(self) -> SmsService:
        if self._sms_service is None:
            self._sms_service = SmsService(self.settings)
        return self._sms_service

    async def notify_pickup_ready(self, order: OrderResponse) -> NotificationReport:
        """Send the pickup-ready notification across all enabled channels.

        Args:
            order: The order that just became ready for pickup.

        Returns:
            NotificationReport: One result per channel. Never raises.
        """
        report = NotificationReport(order_id=str(order.id))
        logger.info("Sending pickup ready notification for order %s", order.id)

        for channel, send in (
            ("realtime", self._send_realtime),
            ("email", self._send_email),
            ("sms", self._send_sms),
        ):
            try:
                result = await send(order)
            except Exception as e:
                logger.exception("Error sending %s notification for order %s", channel, order.id)
                result = ChannelResult(channel, ChannelStatus.FAILED, str(e))
            report.results.append(result)
            self._log_result(order, result)

        return report

    @staticmethod
    def _log_result(order: OrderResponse, result: ChannelResult) -> None:
        if result.status == ChannelStatus.FAILED:
            logger.error(
                "Pickup notification %s failed for order %s: %s",
                result.channel,
                order.id,
                result.detail,
            )
        else:
            logger.info(
                "Pickup notification %s %s for order %s%s",
                result.channel,
                result.status.value,
                order.id,
                f" ({result.detail})" if result.detail else "",
            )

    async def _send_realtime(self, order: OrderResponse) -> ChannelResult:
        payload = PickupReadyEvent(
            order_id=str(order.id),
            order_number=order.order_number,
            message=PICKUP_READY_MESSAGE,
            order=order.to_payload(),
        ).to_payload()

        rooms = [order_room(order.id)]
        if order.owner_id:
            rooms.append(user_room(order.owner_id))

        delivered = 0
        errors: list[str] = []
        for room in rooms:
            try:
                delivered += await self.publisher.emit(PICKUP_READY_EVENT, payload, room=room)
            except Exception as e:
                logger.warning("Failed to emit %s to %s: %s", PICKUP_READY_EVENT, room, str(e))
                errors.append(f"{room}: {e}")

        if len(errors) == len(rooms):
            return ChannelResult("realtime", ChannelStatus.FAILED, "; ".join(errors))

        detail = f"{delivered} client(s) in {len(rooms) - len(errors)} room(s)"
        if errors:
            detail += f"; failed {'; '.join(errors)}"
        return ChannelResult("realtime", ChannelStatus.SENT, detail)

    async def _send_email(self, order: OrderResponse) -> ChannelResult:
        if not self.settings.enable_email_notifications:
            return ChannelResult("email", ChannelStatus.SKIPPED, "disabled")
        if not self.email_service.is_configured:
            return ChannelResult("email", ChannelStatus.SKIPPED, "email service not configured")

        result = await self.email_service.send_pickup_ready_email(order)
        if result.get("success"):
            return ChannelResult("email", ChannelStatus.SENT, f"sent to {order.customer_email}")
        return ChannelResult("email", ChannelStatus.FAILED, result.get("error", "unknown error"))

    async def _send_sms(self, order: OrderResponse) -> ChannelResult:
        if not self.settings.enable_sms_notifications:
            return ChannelResult("sms", ChannelStatus.SKIPPED, "disabled")
        if not self.sms_service.is_configured:
            return ChannelResult("sms", ChannelStatus.SKIPPED, "SMS service not configured")
        if not order.customer_phone:
            return ChannelResult("sms", ChannelStatus.SKIPPED, "no phone number on order")

        result = await self.sms_service.send_pickup_ready_sms(order)
        if result.get("success"):
            return ChannelResult("sms", ChannelStatus.SENT, f"sent to {order.customer_phone}")
        return ChannelResult("sms", ChannelStatus.FAILED, result.get("error", "unknown error"))
