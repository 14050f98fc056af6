"""Offer model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class Offer(TypedDict):
    """Offers table row representation.

    ``code`` is unique and stored upper-cased.
    """

    id: UUID
    title: str
    description: str
    discount: float
    code: str
    valid_from: datetime
    valid_until: datetime
    min_order_amount: float
    image: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
