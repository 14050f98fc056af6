"""Product Pydantic schemas for API request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from src.schemas.common import CamelModel


class ProductCreate(CamelModel):
    """Schema for creating a product."""

    name: str = Field(min_length=1, max_length=255, description="Product name")
    description: str = Field(default="", description="Product description")
    category: str = Field(min_length=1, max_length=100, description="Menu category")
    price: float = Field(ge=0, description="Unit price")
    image: str = Field(min_length=1, description="Image URL")
    featured: bool = Field(default=False, description="Show on the home page")


class ProductUpdate(CamelModel):
    """Schema for partially updating a product. Omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    category: str | None = Field(default=None, min_length=1, max_length=100)
    price: float | None = Field(default=None, ge=0)
    image: str | None = None
    featured: bool | None = None


class ProductResponse(CamelModel):
    """Schema for product API responses."""

    id: UUID = Field(description="Product unique identifier")
    name: str = Field(description="Product name")
    description: str = Field(default="", description="Product description")
    category: str = Field(description="Menu category")
    price: float = Field(description="Unit price")
    image: str = Field(default="", description="Image URL")
    featured: bool = Field(default=False, description="Featured flag")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
