"""Product service for catalog CRUD operations."""

import logging
from uuid import UUID

from supabase import Client

from src.core.supabase import get_supabase_client
from src.models.product import Product
from src.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """Service for product operations."""

    def __init__(self, supabase_client: Client | None = None):
        """Initialize product service.

        Args:
            supabase_client: Optional Supabase client for testing.
        """
        self._supabase_client = supabase_client

    @property
    def supabase(self) -> Client:
        """Get Supabase client."""
        if self._supabase_client is None:
            self._supabase_client = get_supabase_client()
        return self._supabase_client

    async def list_products(self) -> list[Product]:
        """List all products, newest first."""
        result = (
            self.supabase.table("products")
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return result.data or []

    async def get_product(self, product_id: UUID) -> Product | None:
        """Get a product by ID.

        Args:
            product_id: Product UUID.

        Returns:
            Product or None if not found.
        """
        result = (
            self.supabase.table("products")
            .select("*")
            .eq("id", str(product_id))
            .execute()
        )

        if result.data:
            return result.data[0]
        return None

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a new product.

        Raises:
            Exception: If creation fails.
        """
        result = self.supabase.table("products").insert(data.model_dump()).execute()

        if not result.data:
            raise Exception("Failed to create product")

        product = result.data[0]
        logger.info("Created product %s", product["id"])
        return product

    async def update_product(self, product_id: UUID, data: ProductUpdate) -> Product | None:
        """Update a product. Fields left as None are not changed.

        Returns:
            Product or None if not found.
        """
        update_data = data.model_dump(exclude_none=True)

        if not update_data:
            return await self.get_product(product_id)

        result = (
            self.supabase.table("products")
            .update(update_data)
            .eq("id", str(product_id))
            .execute()
        )

        if not result.data:
            return None

        logger.info("Updated product %s", product_id)
        return result.data[0]

    async def delete_product(self, product_id: UUID) -> bool:
        """Delete a product.

        Returns:
            bool: True if a row was deleted.
        """
        result = (
            self.supabase.table("products")
            .delete()
            .eq("id", str(product_id))
            .execute()
        )

        deleted = bool(result.data)
        if deleted:
            logger.info("Deleted product %s", product_id)
        return deleted


def get_product_service() -> ProductService:
    """Dependency provider for ProductService."""
    return ProductService()
