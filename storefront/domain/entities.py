"""Domain entities for the storefront cart engine.

The Cart is the only mutable aggregate. Orders are immutable snapshots
taken from a cart at checkout time and never change afterwards.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.base import Entity
from storefront.domain.exceptions import (
    CurrencyMismatchError,
    InvalidQuantityError,
    QuantityLimitExceededError,
)
from storefront.domain.value_objects import (
    DEFAULT_CURRENCY,
    CartId,
    CustomerInfo,
    Money,
    OrderId,
    Product,
    ProductId,
    ShippingAddress,
)

DEFAULT_MAX_QUANTITY = 99


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


# ============================================================================
# Cart Line
# ============================================================================


@dataclass(frozen=True)
class CartLine:
    """One product and quantity pairing in the cart.

    Lines are frozen; a quantity update replaces the line in place, so
    views handed out by ``Cart.get_items`` can never mutate the cart.

    Attributes:
        product: Reference to the catalog product.
        quantity: Number of units, within the cart's per-line limit.
    """

    product: Product
    quantity: int

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def unit_price(self) -> Money:
        return self.product.unit_price

    @property
    def line_total(self) -> Money:
        """Calculate total price for this line.

        Returns:
            Unit price multiplied by quantity.
        """
        return self.product.unit_price * self.quantity


@dataclass(frozen=True)
class QuantityChange:
    """Outcome of a successful quantity-changing cart operation.

    Callers use it to build undo records.

    Attributes:
        product: Product whose line changed.
        old_quantity: Quantity before the change (0 if the line is new).
        new_quantity: Quantity after the change.
    """

    product: Product
    old_quantity: int
    new_quantity: int

    @property
    def created_line(self) -> bool:
        return self.old_quantity == 0

    @property
    def is_noop(self) -> bool:
        return self.old_quantity == self.new_quantity


# ============================================================================
# Cart Entity
# ============================================================================


@dataclass(kw_only=True, eq=False)
class Cart(Entity[CartId]):
    """Shopping cart.

    Lines are kept in insertion order with an auxiliary product id to
    index map, giving constant-time lookup by product while preserving
    display order. ``total`` is recomputed from the lines after every
    mutation and is never adjusted incrementally.

    Every mutator validates before touching state: a rejected call leaves
    lines, size and total exactly as they were.

    Attributes:
        id: Unique cart identifier.
        currency: Currency every product price must be in.
        max_quantity: Maximum quantity allowed on a single line.
    """

    id: CartId = field(default_factory=CartId.generate)
    currency: str = DEFAULT_CURRENCY
    max_quantity: int = DEFAULT_MAX_QUANTITY
    _lines: list[CartLine] = field(default_factory=list, init=False, repr=False)
    _index: dict[str, int] = field(default_factory=dict, init=False, repr=False)
    _total: Money = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not _is_positive_int(self.max_quantity):
            raise ValueError(f"max_quantity must be a positive integer, got {self.max_quantity!r}")
        self.currency = self.currency.upper()
        self._recalculate()

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    @property
    def total(self) -> Money:
        """Sum of price times quantity over all lines."""
        return self._total

    @property
    def size(self) -> int:
        """Number of distinct lines."""
        return len(self._lines)

    @property
    def item_count(self) -> int:
        """Total quantity across all lines."""
        return sum(line.quantity for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def get_items(self) -> tuple[CartLine, ...]:
        """Get the lines in display order.

        Returns:
            Immutable snapshot of the current lines.
        """
        return tuple(self._lines)

    def get_line(self, product_id: ProductId | str) -> CartLine | None:
        """Find the line for a product.

        Args:
            product_id: Product identifier.

        Returns:
            CartLine if found, None otherwise.
        """
        index = self._index.get(str(product_id))
        if index is None:
            return None
        return self._lines[index]

    def contains(self, product_id: ProductId | str) -> bool:
        return str(product_id) in self._index

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_item(self, product: Product, quantity: int = 1) -> QuantityChange:
        """Add units of a product to the cart.

        If the product already has a line, its quantity is increased.
        Otherwise a new line is appended at the end.

        Args:
            product: Product to add.
            quantity: Number of units to add.

        Returns:
            The resulting quantity change (old quantity 0 for a new line).

        Raises:
            InvalidQuantityError: If quantity is not a positive integer.
            QuantityLimitExceededError: If the line would exceed the limit.
            CurrencyMismatchError: If the product is priced in another currency.
        """
        if not _is_positive_int(quantity):
            raise InvalidQuantityError(quantity)
        if product.unit_price.currency != self.currency:
            raise CurrencyMismatchError(self.currency, product.unit_price.currency)

        index = self._index.get(product.id)
        if index is not None:
            return self._set_quantity(index, self._lines[index].quantity + quantity)

        self._check_limit(product.id, quantity)
        self._index[product.id] = len(self._lines)
        self._lines.append(CartLine(product=product, quantity=quantity))
        self._recalculate()
        return QuantityChange(product=product, old_quantity=0, new_quantity=quantity)

    def remove_item(self, product_id: ProductId | str) -> CartLine | None:
        """Remove the line for a product.

        Remaining lines keep their relative order.

        Args:
            product_id: Product identifier.

        Returns:
            The removed line, or None if the product was not in the cart.
        """
        index = self._index.pop(str(product_id), None)
        if index is None:
            return None

        removed = self._lines.pop(index)
        for position in range(index, len(self._lines)):
            self._index[self._lines[position].product_id] = position
        self._recalculate()
        return removed

    def update_quantity(
        self, product_id: ProductId | str, new_quantity: int
    ) -> QuantityChange | None:
        """Set the quantity of an existing line.

        No-op updates (same quantity) are applied and reported as such;
        deciding whether to record them is up to the caller.

        Args:
            product_id: Product identifier.
            new_quantity: New quantity value.

        Returns:
            The quantity change, or None if the product was not in the cart.

        Raises:
            InvalidQuantityError: If quantity is not a positive integer.
            QuantityLimitExceededError: If quantity exceeds the limit.
        """
        index = self._index.get(str(product_id))
        if index is None:
            return None

        if not _is_positive_int(new_quantity):
            raise InvalidQuantityError(new_quantity)
        return self._set_quantity(index, new_quantity)

    def clear(self) -> int:
        """Remove all lines from the cart.

        Returns:
            Number of lines removed.
        """
        count = len(self._lines)
        self._lines.clear()
        self._index.clear()
        self._recalculate()
        return count

    def restore_lines(self, lines: Iterable[CartLine]) -> None:
        """Replace the cart contents with previously saved lines.

        All lines are validated before anything is replaced.

        Args:
            lines: Lines in display order.

        Raises:
            InvalidQuantityError: If any quantity is not a positive integer.
            QuantityLimitExceededError: If any quantity exceeds the limit.
            CurrencyMismatchError: If any product is priced in another currency.
            ValueError: If two lines share a product id.
        """
        staged = list(lines)
        index: dict[str, int] = {}
        for position, line in enumerate(staged):
            if not _is_positive_int(line.quantity):
                raise InvalidQuantityError(line.quantity)
            self._check_limit(line.product_id, line.quantity)
            if line.unit_price.currency != self.currency:
                raise CurrencyMismatchError(self.currency, line.unit_price.currency)
            if line.product_id in index:
                raise ValueError(f"Duplicate cart line for product {line.product_id}")
            index[line.product_id] = position

        self._lines = staged
        self._index = index
        self._recalculate()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _set_quantity(self, index: int, new_quantity: int) -> QuantityChange:
        line = self._lines[index]
        self._check_limit(line.product_id, new_quantity)

        self._lines[index] = CartLine(product=line.product, quantity=new_quantity)
        self._recalculate()
        return QuantityChange(
            product=line.product,
            old_quantity=line.quantity,
            new_quantity=new_quantity,
        )

    def _check_limit(self, product_id: str, quantity: int) -> None:
        if quantity > self.max_quantity:
            raise QuantityLimitExceededError(product_id, quantity, self.max_quantity)

    def _recalculate(self) -> None:
        self._total = Money(
            amount_cents=sum(line.line_total.amount_cents for line in self._lines),
            currency=self.currency,
        )


# ============================================================================
# Order Snapshot
# ============================================================================


@dataclass(frozen=True)
class OrderLine:
    """A line item in an order.

    Order lines are immutable snapshots of cart lines at the time
    of checkout.

    Attributes:
        product: Product at time of order.
        quantity: Ordered quantity.
    """

    product: Product
    quantity: int

    @property
    def line_total(self) -> Money:
        return self.product.unit_price * self.quantity

    @classmethod
    def from_cart_line(cls, line: CartLine) -> "OrderLine":
        """Create order line from cart line.

        Args:
            line: Cart line to copy.

        Returns:
            OrderLine snapshot.
        """
        return cls(product=line.product, quantity=line.quantity)


@dataclass(frozen=True, kw_only=True)
class Order:
    """A completed order.

    Orders are created only by checkout and never change afterwards.

    Attributes:
        id: Unique order identifier.
        lines: Ordered line snapshots.
        total: Cart total at submission time.
        placed_at: When the order was placed (UTC).
        customer: Customer details from the checkout form.
        shipping_address: Shipping address from the checkout form.
    """

    id: OrderId
    lines: tuple[OrderLine, ...]
    total: Money
    placed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer: CustomerInfo | None = None
    shipping_address: ShippingAddress | None = None

    @property
    def item_count(self) -> int:
        """Get total number of items.

        Returns:
            Sum of all line quantities.
        """
        return sum(line.quantity for line in self.lines)
