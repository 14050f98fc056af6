"""Product model type definitions for database operations."""

from datetime import datetime
from typing import TypedDict
from uuid import UUID


class Product(TypedDict):
    """Products table row representation."""

    id: UUID
    name: str
    description: str
    category: str
    price: float
    image: str
    featured: bool
    created_at: datetime
    updated_at: datetime
