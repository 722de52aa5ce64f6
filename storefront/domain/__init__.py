"""Domain layer - Entities, value objects, undo history, sorting, state machines.

This module exports the core building blocks of the cart engine:

- **Entities**: Cart with its ordered lines, immutable Order snapshots
- **Value Objects**: Money, Product, typed IDs, checkout details
- **History**: Action records and the undo stack
- **Wishlist / Ledger**: product id set and append-only order history
- **Sorting**: comparators, quick sort, merge sort
- **State Machines**: checkout lifecycle
- **Exceptions**: domain-specific errors and invariant violations

Example usage:
    from storefront.domain import Cart, Money, Product, ProductId

    cart = Cart()
    product = Product(
        product_id=ProductId("2"),
        name="Bright but Light",
        unit_price=Money.from_float(2850.00),
        category="best-sellers",
    )
    cart.add_item(product, quantity=2)

    print(cart.total)  # ₱5,700.00 PHP
"""

# Base classes
from storefront.domain.base import Entity, ValueObject

# Entities
from storefront.domain.entities import (
    DEFAULT_MAX_QUANTITY,
    Cart,
    CartLine,
    Order,
    OrderLine,
    QuantityChange,
)

# Exceptions
from storefront.domain.exceptions import (
    CartError,
    CheckoutError,
    CurrencyMismatchError,
    DomainError,
    EmptyCartError,
    FieldError,
    InvalidQuantityError,
    InvalidStateTransitionError,
    MoneyError,
    NegativeMoneyError,
    QuantityLimitExceededError,
    ValidationFailedError,
)

# History
from storefront.domain.history import (
    ActionHistory,
    ActionRecord,
    ActionType,
    AddAction,
    RemoveAction,
    UpdateAction,
)
from storefront.domain.ledger import OrderLedger

# Sorting
from storefront.domain.sorting import (
    Comparator,
    SortOption,
    by_category,
    by_name,
    by_price_ascending,
    by_price_descending,
    merge_sort,
    quick_sort,
    sort_products,
)

# State Machines
from storefront.domain.state_machines import CheckoutStatus, validate_checkout_transition

# Value Objects
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
from storefront.domain.wishlist import Wishlist

__all__ = [
    # Base classes
    "Entity",
    "ValueObject",
    # Entities
    "DEFAULT_MAX_QUANTITY",
    "Cart",
    "CartLine",
    "Order",
    "OrderLine",
    "QuantityChange",
    # Value Objects
    "DEFAULT_CURRENCY",
    "CartId",
    "CustomerInfo",
    "Money",
    "OrderId",
    "Product",
    "ProductId",
    "ShippingAddress",
    # History
    "ActionHistory",
    "ActionRecord",
    "ActionType",
    "AddAction",
    "RemoveAction",
    "UpdateAction",
    # Wishlist / Ledger
    "Wishlist",
    "OrderLedger",
    # Sorting
    "Comparator",
    "SortOption",
    "by_category",
    "by_name",
    "by_price_ascending",
    "by_price_descending",
    "merge_sort",
    "quick_sort",
    "sort_products",
    # State Machines
    "CheckoutStatus",
    "validate_checkout_transition",
    # Exceptions
    "DomainError",
    "InvalidStateTransitionError",
    "CartError",
    "InvalidQuantityError",
    "QuantityLimitExceededError",
    "EmptyCartError",
    "CheckoutError",
    "FieldError",
    "ValidationFailedError",
    "MoneyError",
    "CurrencyMismatchError",
    "NegativeMoneyError",
]
