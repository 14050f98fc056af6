"""Offer Pydantic schemas for API request/response models."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from src.schemas.common import CamelModel


def _assume_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OfferCreate(CamelModel):
    """Schema for creating a promotional offer."""

    title: str = Field(min_length=1, max_length=255, description="Offer title")
    description: str = Field(min_length=1, description="Offer description")
    discount: float = Field(ge=0, le=100, description="Discount percentage (0-100)")
    code: str = Field(min_length=1, max_length=50, description="Promo code (stored upper-case)")
    valid_from: datetime = Field(description="Start of validity")
    valid_until: datetime = Field(description="End of validity")
    min_order_amount: float = Field(default=0, ge=0, description="Minimum order subtotal")
    image: str = Field(default="", description="Image URL")

    @field_validator("title", "description")
    @classmethod
    def strip_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("valid_from", "valid_until")
    @classmethod
    def aware_dates(cls, value: datetime) -> datetime:
        return _assume_utc(value)

    @field_validator("min_order_amount", mode="before")
    @classmethod
    def empty_min_order(cls, value: object) -> object:
        return 0 if value in (None, "") else value

    @model_validator(mode="after")
    def check_dates(self) -> "OfferCreate":
        if self.valid_until <= self.valid_from:
            raise ValueError("Valid until date must be after valid from date")
        return self


class OfferUpdate(CamelModel):
    """Schema for partially updating an offer. Omitted fields are kept."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    discount: float | None = Field(default=None, ge=0, le=100)
    code: str | None = Field(default=None, min_length=1, max_length=50)
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    is_active: bool | None = None
    min_order_amount: float | None = Field(default=None, ge=0)
    image: str | None = None

    @field_validator("code")
    @classmethod
    def normalize_code(cls, value: str | None) -> str | None:
        return value.strip().upper() if value is not None else None

    @field_validator("valid_from", "valid_until")
    @classmethod
    def aware_dates(cls, value: datetime | None) -> datetime | None:
        return _assume_utc(value)


class OfferResponse(CamelModel):
    """Schema for offer API responses."""

    id: UUID = Field(description="Offer unique identifier")
    title: str = Field(description="Offer title")
    description: str = Field(description="Offer description")
    discount: float = Field(description="Discount percentage")
    code: str = Field(description="Promo code")
    valid_from: datetime = Field(description="Start of validity")
    valid_until: datetime = Field(description="End of validity")
    min_order_amount: float = Field(default=0, description="Minimum order subtotal")
    image: str = Field(default="", description="Image URL")
    is_active: bool = Field(default=True, description="Whether the offer is enabled")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
