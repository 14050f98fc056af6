"""Printable HTML receipt for kitchen/counter staff."""

from html import escape

from src.core.config import Settings, get_settings
from src.schemas.order import OrderResponse


def _money(amount: float) -> str:
    return f"&euro;{amount:.2f}"


def render_order_receipt(order: OrderResponse, settings: Settings | None = None) -> str:
    """Render an order as a standalone printable HTML document.

    Args:
        order: The order to print.
        settings: Optional settings for testing.

    Returns:
        str: Complete HTML document.
    """
    settings = settings or get_settings()
    subtotal = order.total_amount - order.delivery_charge
    created = order.created_at.strftime("%d.%m.%Y %H:%M") if order.created_at else ""

    rows = "\n".join(
        f"""            <tr>
                <td>{escape(item.name)}</td>
                <td class="num">{item.quantity}</td>
                <td class="num">{_money(item.price)}</td>
                <td class="num">{_money(item.price * item.quantity)}</td>
            </tr>"""
        for item in order.items
    )

    delivery_block = ""
    if order.delivery_type == "delivery":
        delivery_block = f"""
        <p><strong>Delivery address:</strong> {escape(order.address)}</p>
        <p><strong>Distance:</strong> {order.distance:.2f} km</p>"""

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Order #{order.order_number}</title>
    <style>
        body {{ font-family: Arial, sans-serif; max-width: 400px; margin: 0 auto; padding: 20px; }}
        h1 {{ text-align: center; font-size: 22px; margin-bottom: 4px; }}
        .muted {{ text-align: center; color: #555; margin-top: 0; }}
        table {{ width: 100%; border-collapse: collapse; margin: 16px 0; }}
        th, td {{ border-bottom: 1px dashed #999; padding: 4px 0; text-align: left; }}
        .num {{ text-align: right; }}
        .total {{ font-size: 18px; font-weight: bold; }}
        @media print {{ button {{ display: none; }} }}
    </style>
</head>
<body>
    <h1>{escape(settings.restaurant_name)}</h1>
    <p class="muted">{escape(settings.restaurant_address)}</p>
    <p><strong>Order:</strong> #{order.order_number}</p>
    <p><strong>Date:</strong> {created}</p>
    <p><strong>Status:</strong> {escape(order.order_status)}</p>
    <p><strong>Customer:</strong> {escape(order.customer_name)} ({escape(order.customer_email)})</p>
    <p><strong>Type:</strong> {"Delivery" if order.delivery_type == "delivery" else "Pickup"}</p>{delivery_block}
    <table>
        <thead>
            <tr><th>Item</th><th class="num">Qty</th><th class="num">Price</th><th class="num">Sum</th></tr>
        </thead>
        <tbody>
{rows}
        </tbody>
    </table>
    <p>Subtotal: <span class="num">{_money(subtotal)}</span></p>
    <p>Delivery: <span class="num">{_money(order.delivery_charge)}</span></p>
    <p class="total">Total: {_money(order.total_amount)}</p>
    <p>Payment: {escape(order.payment_method)} ({escape(order.payment_status)})</p>
    <button onclick="window.print()">Print</button>
</body>
</html>
"""
