"""Product API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.deps import AdminUser
from src.schemas.common import MessageResponse
from src.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from src.services.product_service import ProductService, get_product_service

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(
    product_service: ProductService = Depends(get_product_service),
) -> list[ProductResponse]:
    """List the menu, newest first. Public."""
    products = await product_service.list_products()
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: UUID,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    product = await product_service.get_product(product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return ProductResponse.model_validate(product)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    data: ProductCreate,
    admin: AdminUser,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Create a product. Admin only."""
    product = await product_service.create_product(data)
    return ProductResponse.model_validate(product)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: UUID,
    data: ProductUpdate,
    admin: AdminUser,
    product_service: ProductService = Depends(get_product_service),
) -> ProductResponse:
    """Update a product. Admin only; omitted fields are kept."""
    product = await product_service.update_product(product_id, data)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )

    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: UUID,
    admin: AdminUser,
    product_service: ProductService = Depends(get_product_service),
) -> MessageResponse:
    """Delete a product. Admin only."""
    deleted = await product_service.delete_product(product_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return MessageResponse(message="Product deleted")
