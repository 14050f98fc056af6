"""Promotional offer business logic service."""

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from pydantic import TypeAdapter
from supabase import Client

from src.api.middleware.error_handler import ConflictError, ValidationError
from src.core.supabase import get_supabase_client
from src.models.offer import Offer
from src.schemas.offer import OfferCreate, OfferUpdate

logger = logging.getLogger(__name__)

_DATETIME = TypeAdapter(datetime)


def _to_utc(value: datetime | str) -> datetime:
    """Parse stored timestamps and treat naive values as UTC."""
    if isinstance(value, str):
        value = _DATETIME.validate_python(value)
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class OfferService:
    """Service for managing promotional offers."""

    def __init__(self, supabase_client: Client | None = None) -> None:
        self._supabase_client = supabase_client

    @property
    def client(self) -> Client:
        """Get Supabase client."""
        if self._supabase_client is None:
            self._supabase_client = get_supabase_client()
        return self._supabase_client

    async def list_active_offers(self, now: datetime | None = None) -> list[Offer]:
        """Offers that are enabled and currently within their validity window."""
        now_iso = (now or datetime.now(timezone.utc)).isoformat()
        response = (
            self.client.table("offers")
            .select("*")
            .eq("is_active", True)
            .lte("valid_from", now_iso)
            .gte("valid_until", now_iso)
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    async def list_all_offers(self) -> list[Offer]:
        """Every offer regardless of state, newest first."""
        response = (
            self.client.table("offers")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return response.data or []

    async def get_offer(self, offer_id: UUID) -> Offer | None:
        response = (
            self.client.table("offers")
            .select("*")
            .eq("id", str(offer_id))
            .maybe_single()
            .execute()
        )
        return response.data if response and response.data else None

    async def _code_taken(self, code: str, exclude_id: UUID | None = None) -> bool:
        query = self.client.table("offers").select("id").eq("code", code)
        if exclude_id is not None:
            query = query.neq("id", str(exclude_id))
        response = query.execute()
        return bool(response.data)

    async def create_offer(self, data: OfferCreate) -> Offer:
        """Create an offer.

        Raises:
            ConflictError: If the code is already used by another offer.
        """
        if await self._code_taken(data.code):
            raise ConflictError("Offer code already exists")

        row = data.model_dump(mode="json")
        row["is_active"] = True
        response = self.client.table("offers").insert(row).execute()
        if not response.data:
            raise Exception("Failed to create offer")

        offer = response.data[0]
        logger.info("Created offer %s (%s)", offer["id"], offer["code"])
        return offer

    async def update_offer(self, offer_id: UUID, data: OfferUpdate) -> Offer | None:
        """Apply a partial update to an offer.

        Returns:
            Offer or None if not found.

        Raises:
            ConflictError: If the new code belongs to another offer.
            ValidationError: If the resulting validity window is empty.
        """
        offer = await self.get_offer(offer_id)
        if offer is None:
            return None

        update_data: dict[str, Any] = data.model_dump(mode="json", exclude_none=True)
        if not update_data:
            return offer

        if "code" in update_data and await self._code_taken(update_data["code"], exclude_id=offer_id):
            raise ConflictError("Offer code already exists")

        valid_from = _to_utc(data.valid_from or offer["valid_from"])
        valid_until = _to_utc(data.valid_until or offer["valid_until"])
        if valid_until <= valid_from:
            raise ValidationError("Valid until date must be after valid from date")

        response = (
            self.client.table("offers")
            .update(update_data)
            .eq("id", str(offer_id))
            .execute()
        )
        if not response.data:
            return None

        logger.info("Updated offer %s", offer_id)
        return response.data[0]

    async def delete_offer(self, offer_id: UUID) -> bool:
        response = (
            self.client.table("offers")
            .delete()
            .eq("id", str(offer_id))
            .execute()
        )
        return bool(response.data)
