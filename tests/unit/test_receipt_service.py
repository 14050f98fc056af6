"""Unit tests for the printable order receipt."""

from typing import Any

from src.schemas.order import OrderResponse
from src.services.receipt_service import render_order_receipt


class TestRenderOrderReceipt:
    """Tests for render_order_receipt."""

    def test_pickup_receipt(self, order_row: dict, test_settings: Any) -> None:
        order = OrderResponse.model_validate(order_row)

        html = render_order_receipt(order, test_settings)

        assert html.startswith("<!DOCTYPE html>")
        assert f"#{order.order_number}" in html
        assert "Margherita" in html
        assert "&euro;19.00" in html
        assert "Delivery address" not in html

    def test_delivery_receipt_shows_address_and_charge(self, order_row: dict, test_settings: Any) -> None:
        order = OrderResponse.model_validate({
            **order_row,
            "delivery_type": "delivery",
            "address": "Königstraße 5, Duisburg",
            "distance": 4.25,
            "delivery_charge": 2.0,
            "total_amount": 21.0,
        })

        html = render_order_receipt(order, test_settings)

        assert "Königstraße 5, Duisburg" in html
        assert "4.25 km" in html
        assert "Subtotal: <span class=\"num\">&euro;19.00</span>" in html

    def test_customer_text_is_escaped(self, order_row: dict, test_settings: Any) -> None:
        order = OrderResponse.model_validate({**order_row, "customer_name": "<script>alert(1)</script>"})

        html = render_order_receipt(order, test_settings)

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html
