"""Checkout application service.

Orchestrates the checkout flow for one shopping session:
- Starting a checkout review (cart must not be empty)
- Validating the customer, shipping and optional payment form
- Recording the order, then clearing the cart and its undo history

Side effects on a successful submission are strictly ordered: the order
is appended to the ledger before the cart is cleared, so an interruption
between the two can only duplicate an order, never lose one.
"""

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator

from storefront.domain.entities import Cart, Order
from storefront.domain.exceptions import (
    EmptyCartError,
    FieldError,
    InvalidStateTransitionError,
    ValidationFailedError,
)
from storefront.domain.history import ActionHistory
from storefront.domain.ledger import OrderLedger
from storefront.domain.state_machines import CheckoutStatus, validate_checkout_transition
from storefront.domain.value_objects import CustomerInfo, ShippingAddress

logger = structlog.get_logger()

REQUIRED_MESSAGE = "This field is required"

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_SEPARATORS_RE = re.compile(r"[\s\-.()]")
_PHONE_RE = re.compile(r"^\+?\d{7,15}$")
_CVV_RE = re.compile(r"^\d{3,4}$")
_EXPIRY_RE = re.compile(r"^(0[1-9]|1[0-2])/(\d{2}|\d{4})$")


# ============================================================================
# Checkout Form
# ============================================================================


def _luhn_valid(digits: str) -> bool:
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


class CheckoutForm(BaseModel):
    """Checkout form submitted by the shopper.

    Customer and shipping fields are required. Payment fields are
    optional but validated when present. Pass ``{"today": date}`` as
    validation context to pin the card expiry check to a given day.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str
    last_name: str
    email: str
    phone: str
    address: str
    city: str
    zip_code: str
    country: str
    card_number: str | None = None
    cvv: str | None = None
    expiry: str | None = None

    @field_validator(
        "first_name", "last_name", "email", "phone", "address", "city", "zip_code", "country"
    )
    @classmethod
    def _required(cls, value: str) -> str:
        if not value:
            raise ValueError(REQUIRED_MESSAGE)
        return value

    @field_validator("card_number", "cvv", "expiry", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        if not _EMAIL_RE.match(value):
            raise ValueError("Please enter a valid email address")
        return value

    @field_validator("phone")
    @classmethod
    def _phone(cls, value: str) -> str:
        if not _PHONE_RE.match(_PHONE_SEPARATORS_RE.sub("", value)):
            raise ValueError("Please enter a valid phone number")
        return value

    @field_validator("card_number")
    @classmethod
    def _card_number(cls, value: str | None) -> str | None:
        if value is None:
            return None
        digits = re.sub(r"[\s-]", "", value)
        if not digits.isdigit() or not 13 <= len(digits) <= 19 or not _luhn_valid(digits):
            raise ValueError("Please enter a valid card number")
        return digits

    @field_validator("cvv")
    @classmethod
    def _cvv(cls, value: str | None) -> str | None:
        if value is not None and not _CVV_RE.match(value):
            raise ValueError("Please enter a valid CVV")
        return value

    @field_validator("expiry")
    @classmethod
    def _expiry(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return None
        match = _EXPIRY_RE.match(value)
        if not match:
            raise ValueError("Expiry must be in MM/YY format")
        month = int(match.group(1))
        year = int(match.group(2))
        if year < 100:
            year += 2000

        context = info.context or {}
        today: date = context.get("today") or datetime.now(timezone.utc).date()
        if (year, month) < (today.year, today.month):
            raise ValueError("Card has expired")
        return value

    def customer(self) -> CustomerInfo:
        return CustomerInfo(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            phone=self.phone,
        )

    def shipping_address(self) -> ShippingAddress:
        return ShippingAddress(
            address=self.address,
            city=self.city,
            postal_code=self.zip_code,
            country=self.country,
        )


def validate_checkout_form(data: Any, today: date | None = None) -> CheckoutForm:
    """Validate raw checkout form data.

    Args:
        data: Mapping of form field names to values.
        today: Day used for the card expiry check, defaults to today (UTC).

    Returns:
        The validated form.

    Raises:
        ValidationFailedError: With one error per failing field.
    """
    try:
        return CheckoutForm.model_validate(data, context={"today": today})
    except ValidationError as e:
        raise ValidationFailedError(_field_errors(e)) from e


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    seen: set[str] = set()
    for error in exc.errors():
        name = ".".join(str(part) for part in error["loc"]) or "form"
        if name in seen:
            continue
        seen.add(name)

        if error["type"] == "missing":
            reason = REQUIRED_MESSAGE
        elif error["type"] == "value_error":
            reason = str(error["ctx"]["error"])
        else:
            reason = "Invalid value"
        errors.append(FieldError(field=name, reason=reason))
    return errors


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class CheckoutResult:
    """Result of a checkout operation."""

    status: CheckoutStatus
    order: Order | None = None
    field_errors: list[FieldError] = field(default_factory=list)
    success: bool = True
    error: str | None = None
    error_code: str | None = None


# ============================================================================
# Checkout Service
# ============================================================================


class CheckoutService:
    """Checkout state machine for one shopping session.

    Example usage:
        checkout = CheckoutService("session-1", cart, history, ledger)
        checkout.start_checkout()
        result = checkout.submit(form_data)
        if result.success:
            print(result.order.total)
    """

    def __init__(
        self,
        session_id: str,
        cart: Cart,
        history: ActionHistory,
        ledger: OrderLedger,
    ) -> None:
        """Initialize checkout service.

        Args:
            session_id: Owning session, used as checkout id in logs and errors.
            cart: Session cart.
            history: Session undo history.
            ledger: Session order ledger.
        """
        self.session_id = session_id
        self.cart = cart
        self.history = history
        self.ledger = ledger
        self.status = CheckoutStatus.IDLE
        self.last_errors: list[FieldError] = []

    def _transition(self, target: CheckoutStatus) -> None:
        validate_checkout_transition(self.session_id, self.status, target)
        logger.info(
            "Checkout transition",
            session_id=self.session_id,
            from_status=self.status.value,
            to_status=target.value,
        )
        self.status = target

    def _empty_cart(self) -> CheckoutResult:
        error = EmptyCartError(str(self.cart.id))
        logger.info("Checkout refused for empty cart", session_id=self.session_id)
        return CheckoutResult(
            status=self.status,
            success=False,
            error=error.message,
            error_code="EMPTY_CART",
        )

    def start_checkout(self) -> CheckoutResult:
        """Move to review if the cart has lines.

        Returns:
            Result with the resulting status. An empty cart yields
            ``EMPTY_CART`` and leaves the status unchanged.
        """
        if self.status is CheckoutStatus.REVIEWING:
            return CheckoutResult(status=self.status)
        if self.cart.is_empty:
            return self._empty_cart()

        try:
            self._transition(CheckoutStatus.REVIEWING)
        except InvalidStateTransitionError as e:
            return CheckoutResult(
                status=self.status,
                success=False,
                error=e.message,
                error_code="INVALID_STATE_TRANSITION",
            )
        self.last_errors = []
        return CheckoutResult(status=self.status)

    def submit(self, form_data: Any, today: date | None = None) -> CheckoutResult:
        """Validate the form and place the order.

        On validation failure the checkout goes back to review with
        per-field errors and the cart is untouched. On success the order
        is recorded, then the cart and undo history are cleared.

        Args:
            form_data: Raw form field values.
            today: Day used for the card expiry check.

        Returns:
            Result carrying the Order or the field errors.
        """
        if not self.status.accepts_submission():
            return CheckoutResult(
                status=self.status,
                success=False,
                error=f"Checkout is not under review (status '{self.status.value}')",
                error_code="INVALID_STATE_TRANSITION",
            )
        if self.cart.is_empty:
            self._transition(CheckoutStatus.IDLE)
            return self._empty_cart()

        self._transition(CheckoutStatus.SUBMITTING)
        try:
            form = validate_checkout_form(form_data, today=today)
        except ValidationFailedError as e:
            self._transition(CheckoutStatus.REVIEWING)
            self.last_errors = e.errors
            logger.info(
                "Checkout form rejected",
                session_id=self.session_id,
                fields=[error.field for error in e.errors],
            )
            return CheckoutResult(
                status=self.status,
                field_errors=e.errors,
                success=False,
                error=e.message,
                error_code="VALIDATION_FAILED",
            )

        order = self.ledger.add_order(
            self.cart.get_items(),
            self.cart.total,
            customer=form.customer(),
            shipping_address=form.shipping_address(),
        )
        self.cart.clear()
        dropped = self.history.clear()
        self._transition(CheckoutStatus.COMPLETED)
        self.last_errors = []

        logger.info(
            "Order placed",
            session_id=self.session_id,
            order_id=str(order.id),
            total_cents=order.total.amount_cents,
            currency=order.total.currency,
            line_count=len(order.lines),
            history_dropped=dropped,
        )
        return CheckoutResult(status=self.status, order=order)

    def cancel(self) -> CheckoutResult:
        """Leave review without placing an order.

        Returns:
            Result with the resulting status.
        """
        if self.status is CheckoutStatus.IDLE:
            return CheckoutResult(status=self.status)
        try:
            self._transition(CheckoutStatus.IDLE)
        except InvalidStateTransitionError as e:
            return CheckoutResult(
                status=self.status,
                success=False,
                error=e.message,
                error_code="INVALID_STATE_TRANSITION",
            )
        self.last_errors = []
        return CheckoutResult(status=self.status)
