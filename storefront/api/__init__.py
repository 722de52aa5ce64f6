"""API layer module.

Contains FastAPI routers and request/response schemas.
"""

from storefront.api.cart import router as cart_router
from storefront.api.catalog import router as catalog_router
from storefront.api.checkout import router as checkout_router
from storefront.api.health import router as health_router
from storefront.api.orders import router as orders_router
from storefront.api.wishlist import router as wishlist_router

__all__ = [
    "cart_router",
    "catalog_router",
    "checkout_router",
    "health_router",
    "orders_router",
    "wishlist_router",
]
