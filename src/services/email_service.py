"""Email service using Resend for transactional emails."""

import asyncio
import logging
from html import escape
from typing import Any

import resend

from src.core.config import Settings, get_settings
from src.schemas.order import OrderResponse

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending order emails via Resend."""

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize email service with Resend API key."""
        self.settings = settings or get_settings()
        resend.api_key = self.settings.resend_api_key
        self.from_email = self.settings.email_from_address

    @property
    def is_configured(self) -> bool:
        return self.settings.email_configured

    def _pickup_ready_html(self, order: OrderResponse) -> str:
        settings = self.settings
        restaurant = escape(settings.restaurant_name)
        tracking_url = f"{settings.tracking_base_url}/tracking/{order.id}"

        return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Your Order is Ready for Pickup!</title>
</head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
    <div style="background: linear-gradient(to right, #16a34a, #15803d); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0;">
        <h1 style="margin: 0; font-size: 28px;">{restaurant}</h1>
    </div>
    <div style="background: #f9fafb; padding: 30px; border-radius: 0 0 10px 10px;">
        <h2 style="color: #16a34a; margin-top: 0;">Your Order is Ready for Pickup!</h2>
        <p style="color: #374151; font-size: 16px;">Hello {escape(order.customer_name)},</p>
        <p style="color: #374151; font-size: 16px;">Great news! Your order <strong>#{order.order_number}</strong> is ready for pickup.</p>

        <div style="background: white; padding: 20px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #16a34a;">
            <h3 style="margin-top: 0; color: #111827;">Order Details</h3>
            <p style="margin: 5px 0;"><strong>Order ID:</strong> {order.order_number}</p>
            <p style="margin: 5px 0;"><strong>Total:</strong> &euro;{order.total_amount:.2f}</p>
            <p style="margin: 5px 0;"><strong>Items:</strong> {len(order.items)} item(s)</p>
        </div>

        <div style="background: #d1fae5; padding: 15px; border-radius: 8px; margin: 20px 0; text-align: center;">
            <p style="margin: 0; color: #065f46; font-weight: bold; font-size: 18px;">
                Pickup Location:<br>
                {escape(settings.restaurant_address)}
            </p>
        </div>

        <div style="text-align: center; margin-top: 30px;">
            <a href="{tracking_url}" style="background: #16a34a; color: white; padding: 12px 30px; text-decoration: none; border-radius: 6px; display: inline-block; font-weight: bold;">
                Track Your Order
            </a>
        </div>

        <p style="color: #6b7280; font-size: 14px; margin-top: 30px; text-align: center;">
            Thank you for choosing {restaurant}!
        </p>
    </div>
</body>
</html>
"""

    async def send_pickup_ready_email(self, order: OrderResponse) -> dict[str, Any]:
        """Tell the customer their order can be collected.

        Args:
            order: The order that became ready.

        Returns:
            dict: ``success`` flag plus the Resend email ID or error text.
        """
        text_content = (
            f"Hello {order.customer_name},\n\n"
            f"Your order #{order.order_number} is ready for pickup.\n"
            f"Total: {order.total_amount:.2f}\n"
            f"Pickup location: {self.settings.restaurant_address}\n"
        )

        params: dict[str, Any] = {
            "from": self.from_email,
            "to": [order.customer_email],
            "subject": "Your Order is Ready for Pickup!",
            "html": self._pickup_ready_html(order),
            "text": text_content,
        }

        try:
            # resend.Emails.send is blocking
            response = await asyncio.to_thread(resend.Emails.send, params)

            logger.info("Pickup ready email sent to %s, id: %s", order.customer_email, response.get("id"))
            return {"success": True, "email_id": response.get("id")}

        except Exception as e:
            logger.error("Failed to send pickup ready email to %s: %s", order.customer_email, str(e))
            return {"success": False, "error": str(e)}
