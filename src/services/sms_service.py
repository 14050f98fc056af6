"""SMS service using the Twilio REST API."""

import logging
from typing import Any

import httpx

from src.core.config import Settings, get_settings
from src.schemas.order import OrderResponse

logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"


class SmsService:
    """Service for sending order SMS messages."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @property
    def is_configured(self) -> bool:
        return self.settings.sms_configured

    async def send_pickup_ready_sms(self, order: OrderResponse) -> dict[str, Any]:
        """Text the customer that their order can be collected.

        Args:
            order: The order that became ready. Must carry a customer phone.

        Returns:
            dict: ``success`` flag plus the message SID or error text.
        """
        if not order.customer_phone:
            return {"success": False, "error": "No phone number available"}

        settings = self.settings
        body = (
            f"Your {settings.restaurant_name} order #{order.order_number} is ready for pickup! "
            f"Visit us at {settings.restaurant_address}"
        )

        try:
            async with httpx.AsyncClient(timeout=settings.sms_timeout_seconds) as client:
                response = await client.post(
                    TWILIO_MESSAGES_URL.format(sid=settings.twilio_account_sid),
                    data={
                        "From": settings.twilio_from_number,
                        "To": order.customer_phone,
                        "Body": body,
                    },
                    auth=(settings.twilio_account_sid, settings.twilio_auth_token),
                )
                response.raise_for_status()
                sid = response.json().get("sid")

            logger.info("Pickup ready SMS sent to %s, sid: %s", order.customer_phone, sid)
            return {"success": True, "sid": sid}

        except httpx.TimeoutException:
            logger.error("Timeout sending SMS to %s", order.customer_phone)
            return {"success": False, "error": "Timeout contacting SMS provider"}
        except httpx.HTTPError as e:
            logger.error("Failed to send SMS to %s: %s", order.customer_phone, str(e))
            return {"success": False, "error": str(e)}
