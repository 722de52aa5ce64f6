"""Domain exceptions.

Raised by the cart, the checkout state machine and money arithmetic
before any state changes, so a raised error always leaves the cart,
history and ledger as they were. Lookups that find nothing return None
instead of raising.

Hierarchy::

    DomainError
    ├── InvalidStateTransitionError
    ├── CartError
    │   ├── InvalidQuantityError
    │   │   └── QuantityLimitExceededError
    │   └── EmptyCartError
    ├── CheckoutError
    │   └── ValidationFailedError
    └── MoneyError
        ├── CurrencyMismatchError
        └── NegativeMoneyError
"""

from dataclasses import dataclass
from typing import Any


class DomainError(Exception):
    """Root of the storefront's business rule errors.

    Attributes:
        message: Human-readable description.
        details: Structured context for API error bodies and logs.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidStateTransitionError(DomainError):
    """A state machine was asked to move along an edge it does not have."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Describe the rejected move.

        Args:
            entity_type: Kind of state machine, e.g. "Checkout".
            entity_id: Which instance (the session id for checkouts).
            current_state: State the machine is in.
            target_state: State that was requested.
            allowed_transitions: States reachable from ``current_state``.
        """
        allowed = list(allowed_transitions or [])
        super().__init__(
            f"{entity_type} {entity_id} cannot go from '{current_state}' to "
            f"'{target_state}' (allowed: {', '.join(allowed) or 'none'})",
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Cart Errors
# ============================================================================


class CartError(DomainError):
    """A cart mutation was rejected."""


class InvalidQuantityError(CartError):
    """Quantity is not a positive integer, or is otherwise unusable."""

    def __init__(self, quantity: object, reason: str = "Quantity must be a positive integer") -> None:
        super().__init__(
            f"Invalid quantity {quantity!r}: {reason}",
            details={"quantity": quantity, "reason": reason},
        )
        self.quantity = quantity


class QuantityLimitExceededError(InvalidQuantityError):
    """A line would end up above the cart's per-line limit.

    Attributes:
        product_id: Product whose line was being changed.
        limit: The cart's per-line maximum.
    """

    def __init__(self, product_id: str, quantity: int, limit: int) -> None:
        super().__init__(quantity, reason=f"Maximum quantity per item is {limit}")
        self.details["product_id"] = product_id
        self.details["limit"] = limit
        self.product_id = product_id
        self.limit = limit


class EmptyCartError(CartError):
    """Checkout was attempted with nothing in the cart."""

    def __init__(self, cart_id: str) -> None:
        super().__init__(
            "Your cart is empty. Add something before checking out.",
            details={"cart_id": cart_id},
        )


# ============================================================================
# Checkout Errors
# ============================================================================


class CheckoutError(DomainError):
    """A checkout step was rejected."""


@dataclass(frozen=True)
class FieldError:
    """Why one checkout form field was rejected.

    Attributes:
        field: Form field name, e.g. ``"zip_code"``.
        reason: Message shown next to the field.
    """

    field: str
    reason: str


class ValidationFailedError(CheckoutError):
    """The checkout form has at least one invalid field.

    Attributes:
        errors: One entry per failing field, in form order.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        names = ", ".join(error.field for error in errors)
        super().__init__(
            f"Please correct the highlighted fields: {names}",
            details={"errors": [{"field": e.field, "reason": e.reason} for e in errors]},
        )
        self.errors = errors


# ============================================================================
# Money Errors
# ============================================================================


class MoneyError(DomainError):
    """Money arithmetic was rejected."""


class CurrencyMismatchError(MoneyError):
    """Two amounts in different currencies were combined."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"Expected an amount in {expected}, got {actual}",
            details={"expected": expected, "actual": actual},
        )


class NegativeMoneyError(MoneyError):
    """A money amount below zero was constructed."""

    def __init__(self, amount: int) -> None:
        super().__init__(
            f"Money amount cannot be negative: {amount}",
            details={"amount": amount},
        )
