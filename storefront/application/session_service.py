"""Shopping session application service.

A session owns one shopper's cart, undo history, wishlist, order ledger
and checkout. It is the only place that records cart mutations in the
history and the only place that dispatches undo records back onto the
cart. Sessions are explicit objects held in a SessionRegistry.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import structlog

from storefront.application.checkout_service import CheckoutService
from storefront.application.snapshots import (
    RestoreReport,
    dump_cart,
    dump_wishlist,
    restore_cart,
    restore_wishlist,
)
from storefront.catalog.repository import CatalogSource
from storefront.domain.entities import DEFAULT_MAX_QUANTITY, Cart, CartLine, QuantityChange
from storefront.domain.exceptions import (
    CurrencyMismatchError,
    InvalidQuantityError,
    QuantityLimitExceededError,
)
from storefront.domain.history import (
    ActionHistory,
    ActionRecord,
    AddAction,
    RemoveAction,
    UpdateAction,
)
from storefront.domain.ledger import OrderLedger
from storefront.domain.value_objects import DEFAULT_CURRENCY, Product, ProductId
from storefront.domain.wishlist import Wishlist

logger = structlog.get_logger()


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class CartActionResult:
    """Result of a cart mutation requested by the shopper."""

    line: CartLine | None = None
    record: ActionRecord | None = None
    success: bool = True
    error: str | None = None
    error_code: str | None = None
    details: dict[str, Any] | None = None


@dataclass
class UndoResult:
    """Result of undoing the most recent cart action."""

    record: ActionRecord | None = None

    @property
    def undone(self) -> bool:
        return self.record is not None


@dataclass
class WishlistResult:
    """Result of a wishlist operation."""

    product_id: str
    in_wishlist: bool
    success: bool = True
    error: str | None = None
    error_code: str | None = None


def _product_not_found(product_id: str) -> CartActionResult:
    return CartActionResult(
        success=False,
        error=f"Product {product_id} not found",
        error_code="PRODUCT_NOT_FOUND",
        details={"product_id": product_id},
    )


def _not_in_cart(product_id: str) -> CartActionResult:
    return CartActionResult(
        success=False,
        error=f"Product {product_id} is not in the cart",
        error_code="NOT_IN_CART",
        details={"product_id": product_id},
    )


def _quantity_error(e: InvalidQuantityError) -> CartActionResult:
    code = (
        "QUANTITY_LIMIT_EXCEEDED"
        if isinstance(e, QuantityLimitExceededError)
        else "INVALID_QUANTITY"
    )
    return CartActionResult(success=False, error=e.message, error_code=code, details=e.details)


# ============================================================================
# Shopping Session
# ============================================================================


class ShoppingSession:
    """One shopper's cart engine.

    Example usage:
        session = ShoppingSession("abc", catalog)
        session.add_to_cart("2", 3)
        session.change_quantity("2", 5)
        session.undo_last_action()  # back to 3
    """

    def __init__(
        self,
        session_id: str,
        catalog: CatalogSource,
        max_quantity: int = DEFAULT_MAX_QUANTITY,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        """Initialize a session with an empty cart.

        Args:
            session_id: Session identifier.
            catalog: Catalog used to resolve product ids.
            max_quantity: Per-line quantity limit.
            currency: Cart currency.
        """
        self.session_id = session_id
        self.catalog = catalog
        self.cart = Cart(currency=currency, max_quantity=max_quantity)
        self.history = ActionHistory()
        self.wishlist = Wishlist()
        self.ledger = OrderLedger()
        self.checkout = CheckoutService(session_id, self.cart, self.history, self.ledger)

    # -------------------------------------------------------------------------
    # Cart Mutations
    # -------------------------------------------------------------------------

    def add_to_cart(self, product_id: ProductId | str, quantity: int = 1) -> CartActionResult:
        """Add units of a catalog product to the cart.

        Args:
            product_id: Product identifier.
            quantity: Units to add.

        Returns:
            Result with the resulting line and the recorded action.
        """
        product = self.catalog.find_product(product_id)
        if product is None:
            return _product_not_found(str(product_id))
        return self.add_product(product, quantity)

    def add_product(self, product: Product, quantity: int = 1) -> CartActionResult:
        """Add units of an already resolved product to the cart."""
        try:
            change = self.cart.add_item(product, quantity)
        except InvalidQuantityError as e:
            rejected = _quantity_error(e)
            logger.info(
                "Cart add rejected",
                session_id=self.session_id,
                product_id=product.id,
                quantity=quantity,
                error_code=rejected.error_code,
            )
            return rejected
        except CurrencyMismatchError as e:
            return CartActionResult(
                success=False,
                error=e.message,
                error_code="CURRENCY_MISMATCH",
                details=e.details,
            )

        record = AddAction(
            product_id=product.id,
            quantity=quantity,
            previous_quantity=change.old_quantity,
        )
        self.history.push(record)
        self._log_change("Cart item added", change)
        return CartActionResult(line=self.cart.get_line(product.id), record=record)

    def remove_from_cart(self, product_id: ProductId | str) -> CartActionResult:
        """Remove a product's line from the cart.

        Args:
            product_id: Product identifier.

        Returns:
            Result with the removed line.
        """
        line = self.cart.remove_item(product_id)
        if line is None:
            return _not_in_cart(str(product_id))

        record = RemoveAction(product_id=line.product_id, product=line.product, quantity=line.quantity)
        self.history.push(record)
        logger.info(
            "Cart item removed",
            session_id=self.session_id,
            product_id=line.product_id,
            quantity=line.quantity,
            cart_total_cents=self.cart.total.amount_cents,
        )
        return CartActionResult(line=line, record=record)

    def change_quantity(self, product_id: ProductId | str, quantity: int) -> CartActionResult:
        """Set the quantity of a line.

        Setting the quantity a line already has succeeds without being
        recorded in the history.

        Args:
            product_id: Product identifier.
            quantity: New quantity.

        Returns:
            Result with the updated line.
        """
        try:
            change = self.cart.update_quantity(product_id, quantity)
        except InvalidQuantityError as e:
            return _quantity_error(e)
        if change is None:
            return _not_in_cart(str(product_id))

        line = self.cart.get_line(product_id)
        if change.is_noop:
            return CartActionResult(line=line)

        record = UpdateAction(
            product_id=change.product.id,
            old_quantity=change.old_quantity,
            new_quantity=change.new_quantity,
        )
        self.history.push(record)
        self._log_change("Cart quantity updated", change)
        return CartActionResult(line=line, record=record)

    def increment(self, product_id: ProductId | str) -> CartActionResult:
        """Raise a line's quantity by one."""
        line = self.cart.get_line(product_id)
        if line is None:
            return _not_in_cart(str(product_id))
        return self.change_quantity(product_id, line.quantity + 1)

    def decrement(self, product_id: ProductId | str) -> CartActionResult:
        """Lower a line's quantity by one, never below one."""
        line = self.cart.get_line(product_id)
        if line is None:
            return _not_in_cart(str(product_id))
        return self.change_quantity(product_id, max(1, line.quantity - 1))

    def clear_cart(self) -> int:
        """Empty the cart. Not recorded in the history.

        Returns:
            Number of lines removed.
        """
        removed = self.cart.clear()
        logger.info("Cart cleared", session_id=self.session_id, lines_removed=removed)
        return removed

    # -------------------------------------------------------------------------
    # Undo
    # -------------------------------------------------------------------------

    def undo_last_action(self) -> UndoResult:
        """Revert the most recent recorded cart action.

        The record is consumed whether or not its target line still
        exists, and undo itself is never recorded.

        Returns:
            Result carrying the consumed record, empty if there was none.
        """
        record = self.history.pop()
        if record is None:
            return UndoResult()

        try:
            self._revert(record)
        except InvalidQuantityError as e:
            # the line moved on since the record was taken; cart is unchanged
            logger.warning(
                "Cart action could not be undone",
                session_id=self.session_id,
                action_type=record.action_type.value,
                product_id=record.product_id,
                error=e.message,
            )
            return UndoResult(record=record)

        logger.info(
            "Cart action undone",
            session_id=self.session_id,
            action_type=record.action_type.value,
            product_id=record.product_id,
            remaining=len(self.history),
        )
        return UndoResult(record=record)

    # -------------------------------------------------------------------------
    # Wishlist
    # -------------------------------------------------------------------------

    def _wishlist_product(self, product_id: ProductId | str) -> WishlistResult | None:
        if self.catalog.find_product(product_id) is None:
            return WishlistResult(
                product_id=str(product_id),
                in_wishlist=False,
                success=False,
                error=f"Product {product_id} not found",
                error_code="PRODUCT_NOT_FOUND",
            )
        return None

    def toggle_wishlist(self, product_id: ProductId | str) -> WishlistResult:
        """Flip wishlist membership of a catalog product."""
        if error := self._wishlist_product(product_id):
            return error
        return WishlistResult(product_id=str(product_id), in_wishlist=self.wishlist.toggle(product_id))

    def add_to_wishlist(self, product_id: ProductId | str) -> WishlistResult:
        if error := self._wishlist_product(product_id):
            return error
        self.wishlist.add(product_id)
        return WishlistResult(product_id=str(product_id), in_wishlist=True)

    def remove_from_wishlist(self, product_id: ProductId | str) -> WishlistResult:
        self.wishlist.remove(product_id)
        return WishlistResult(product_id=str(product_id), in_wishlist=False)

    def move_to_cart(self, product_id: ProductId | str) -> CartActionResult:
        """Move a wishlisted product into the cart.

        Adds one unit (recorded like any other add) and drops the product
        from the wishlist. If the add fails the wishlist is left alone.

        Args:
            product_id: Product identifier.

        Returns:
            Result of the cart add.
        """
        if not self.wishlist.contains(product_id):
            return CartActionResult(
                success=False,
                error=f"Product {product_id} is not in the wishlist",
                error_code="NOT_IN_WISHLIST",
                details={"product_id": str(product_id)},
            )

        result = self.add_to_cart(product_id, 1)
        if result.success:
            self.wishlist.remove(product_id)
        return result

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict[str, list[Any]]:
        """Save shape of the cart and wishlist."""
        return {"cart": dump_cart(self.cart), "wishlist": dump_wishlist(self.wishlist)}

    def load_snapshot(
        self, cart_lines: Iterable[Any], wishlist_ids: Iterable[Any] | None = None
    ) -> RestoreReport:
        """Replace the cart (and optionally wishlist) from a snapshot.

        The undo history is cleared because its records describe the
        cart that was replaced.

        Args:
            cart_lines: Cart snapshot entries.
            wishlist_ids: Wishlist snapshot, None to keep the current one.

        Returns:
            Report of restored and skipped cart entries.
        """
        report = restore_cart(self.cart, cart_lines, self.catalog)
        if wishlist_ids is not None:
            restore_wishlist(self.wishlist, wishlist_ids, self.catalog)
        self.history.clear()
        return report

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _revert(self, record: ActionRecord) -> None:
        if isinstance(record, AddAction):
            if record.created_line:
                self.cart.remove_item(record.product_id)
            else:
                self.cart.update_quantity(record.product_id, record.previous_quantity)
        elif isinstance(record, RemoveAction):
            self.cart.add_item(record.product, record.quantity)
        elif isinstance(record, UpdateAction):
            self.cart.update_quantity(record.product_id, record.old_quantity)

    def _log_change(self, event: str, change: QuantityChange) -> None:
        logger.info(
            event,
            session_id=self.session_id,
            product_id=change.product.id,
            old_quantity=change.old_quantity,
            new_quantity=change.new_quantity,
            cart_total_cents=self.cart.total.amount_cents,
        )


# ============================================================================
# Session Registry
# ============================================================================


class SessionRegistry:
    """Sessions keyed by session id, created on first use."""

    def __init__(
        self,
        catalog: CatalogSource,
        max_quantity: int = DEFAULT_MAX_QUANTITY,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self.catalog = catalog
        self.max_quantity = max_quantity
        self.currency = currency
        self._sessions: dict[str, ShoppingSession] = {}

    def get_or_create(self, session_id: str) -> ShoppingSession:
        """Get the session for an id, creating it if needed."""
        session = self._sessions.get(session_id)
        if session is None:
            session = ShoppingSession(
                session_id,
                self.catalog,
                max_quantity=self.max_quantity,
                currency=self.currency,
            )
            self._sessions[session_id] = session
            logger.info("Session created", session_id=session_id)
        return session

    def get(self, session_id: str) -> ShoppingSession | None:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
