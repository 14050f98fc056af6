"""Database model type definitions."""

from src.models.offer import Offer
from src.models.order import ORDER_STATUSES, Order, OrderLineItem, OrderStatus
from src.models.product import Product
from src.models.review import Review

__all__ = [
    "ORDER_STATUSES",
    "Offer",
    "Order",
    "OrderLineItem",
    "OrderStatus",
    "Product",
    "Review",
]
