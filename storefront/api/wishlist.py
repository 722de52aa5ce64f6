"""Wishlist API endpoints.

Provides endpoints for the session wishlist:
- GET /wishlist - wishlisted product ids
- POST /wishlist/{id}/toggle - flip membership
- PUT /wishlist/{id} - add
- DELETE /wishlist/{id} - remove
- POST /wishlist/{id}/move-to-cart - add one unit to the cart and unlist
"""

from fastapi import APIRouter

from storefront.api.cart import cart_response
from storefront.api.dependencies import SessionDep, result_error
from storefront.api.schemas import (
    ErrorResponse,
    MoveToCartResponse,
    WishlistItemResponse,
    WishlistResponse,
)
from storefront.application.session_service import ShoppingSession, WishlistResult

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


def wishlist_response(session: ShoppingSession) -> WishlistResponse:
    items = session.wishlist.items()
    return WishlistResponse(items=items, count=len(items))


def _item_response(result: WishlistResult) -> WishlistItemResponse:
    if not result.success:
        raise result_error(result.error_code, result.error)
    return WishlistItemResponse(product_id=result.product_id, in_wishlist=result.in_wishlist)


@router.get("", response_model=WishlistResponse, summary="Get wishlist")
async def get_wishlist(session: SessionDep) -> WishlistResponse:
    return wishlist_response(session)


@router.post(
    "/{product_id}/toggle",
    response_model=WishlistItemResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Toggle wishlist membership",
)
async def toggle_item(product_id: str, session: SessionDep) -> WishlistItemResponse:
    """Add the product if absent, remove it if present.

    Raises:
        HTTPException: 404 for unknown products.
    """
    return _item_response(session.toggle_wishlist(product_id))


@router.put(
    "/{product_id}",
    response_model=WishlistItemResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Add to wishlist",
)
async def add_item(product_id: str, session: SessionDep) -> WishlistItemResponse:
    return _item_response(session.add_to_wishlist(product_id))


@router.delete("/{product_id}", response_model=WishlistItemResponse, summary="Remove from wishlist")
async def remove_item(product_id: str, session: SessionDep) -> WishlistItemResponse:
    return _item_response(session.remove_from_wishlist(product_id))


@router.post(
    "/{product_id}/move-to-cart",
    response_model=MoveToCartResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Move wishlisted product to cart",
)
async def move_to_cart(product_id: str, session: SessionDep) -> MoveToCartResponse:
    """Add one unit to the cart and drop the product from the wishlist.

    Raises:
        HTTPException: 404 if not wishlisted, 422 if the line is full.
    """
    result = session.move_to_cart(product_id)
    if not result.success:
        raise result_error(result.error_code, result.error)
    return MoveToCartResponse(
        product_id=product_id,
        wishlist=wishlist_response(session),
        cart=cart_response(session),
    )
