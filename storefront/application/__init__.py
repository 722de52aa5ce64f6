"""Application layer module.

Contains application services (use cases) that orchestrate
domain logic and the catalog.
"""

from storefront.application.catalog_service import CatalogService, StockLookupResult
from storefront.application.checkout_service import (
    CheckoutForm,
    CheckoutResult,
    CheckoutService,
    validate_checkout_form,
)
from storefront.application.session_service import (
    CartActionResult,
    SessionRegistry,
    ShoppingSession,
    UndoResult,
    WishlistResult,
)
from storefront.application.snapshots import (
    RestoreReport,
    SkippedLine,
    dump_cart,
    dump_wishlist,
    restore_cart,
    restore_wishlist,
)

__all__ = [
    "CatalogService",
    "StockLookupResult",
    "CheckoutForm",
    "CheckoutResult",
    "CheckoutService",
    "validate_checkout_form",
    "CartActionResult",
    "SessionRegistry",
    "ShoppingSession",
    "UndoResult",
    "WishlistResult",
    "RestoreReport",
    "SkippedLine",
    "dump_cart",
    "dump_wishlist",
    "restore_cart",
    "restore_wishlist",
]
