"""Catalog API endpoints.

Provides endpoints for browsing the product catalog:
- GET /products - filtered, searched and sorted catalog view
- GET /products/{id} - product details
- GET /products/{id}/stock - stock level for display
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from storefront.api.dependencies import CatalogDep, result_error
from storefront.api.schemas import (
    ErrorResponse,
    ProductListResponse,
    ProductSchema,
    StockResponse,
)
from storefront.catalog.repository import ALL_CATEGORIES
from storefront.domain.sorting import SortOption

router = APIRouter(prefix="/products", tags=["Catalog"])


@router.get("", response_model=ProductListResponse, summary="List products")
async def list_products(
    service: CatalogDep,
    category: Annotated[str, Query(description="Category tag or 'all'")] = ALL_CATEGORIES,
    sort: Annotated[str, Query(description="default, price-low, price-high, name, category")] = (
        SortOption.DEFAULT.value
    ),
    q: Annotated[str | None, Query(description="Search text")] = None,
) -> ProductListResponse:
    """List products for display.

    Unknown sort options keep catalog order.

    Args:
        category: Category filter.
        sort: Sort option.
        q: Search text over name, description and category.

    Returns:
        Catalog view.
    """
    products = service.browse(category=category, sort_by=sort, query=q)
    return ProductListResponse(
        items=[ProductSchema.from_product(p) for p in products],
        total=len(products),
        category=category,
        sort=sort,
    )


@router.get(
    "/{product_id}",
    response_model=ProductSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get product details",
)
async def get_product(product_id: str, service: CatalogDep) -> ProductSchema:
    """Get product details by ID.

    Raises:
        HTTPException: If product not found.
    """
    product = service.get_product(product_id)
    if product is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error_code": "PRODUCT_NOT_FOUND",
                "message": f"Product {product_id} not found",
            },
        )
    return ProductSchema.from_product(product)


@router.get(
    "/{product_id}/stock",
    response_model=StockResponse,
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Get product stock level",
)
async def get_product_stock(product_id: str, service: CatalogDep) -> StockResponse:
    """Get stock level for a product.

    Raises:
        HTTPException: If product not found or inventory is unreachable.
    """
    result = await service.get_stock(product_id)
    if not result.success:
        raise result_error(result.error_code, result.error)

    stock = result.stock
    if stock is None:
        return StockResponse(product_id=product_id, tracked=False)
    return StockResponse(
        product_id=product_id,
        tracked=True,
        quantity=stock.quantity,
        is_low=stock.is_low,
        is_out=stock.is_out,
    )
