"""Value objects of the cart engine.

Typed identifiers, money, catalog products, and the customer details a
successful checkout captures. All of them are frozen dataclasses.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Self
from uuid import UUID, uuid4

from storefront.domain.base import ValueObject
from storefront.domain.exceptions import CurrencyMismatchError, NegativeMoneyError

DEFAULT_CURRENCY = "PHP"

CURRENCY_SYMBOLS = {"PHP": "₱", "USD": "$", "EUR": "€", "GBP": "£"}


# ============================================================================
# Identifiers
# ============================================================================


@dataclass(frozen=True)
class _UuidId(ValueObject):
    value: UUID

    @classmethod
    def generate(cls) -> Self:
        return cls(uuid4())

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse an identifier from its canonical UUID text.

        Raises:
            ValueError: If ``value`` is not a UUID.
        """
        return cls(UUID(value))

    def __str__(self) -> str:
        return str(self.value)


class CartId(_UuidId):
    """Identifier of a session cart."""


class OrderId(_UuidId):
    """Identifier of a placed order."""


@dataclass(frozen=True)
class ProductId(ValueObject):
    """Catalog product identifier.

    Product IDs are opaque strings assigned by the catalog source, such
    as ``"7"``.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise ValueError("Product ID cannot be empty")

    def __str__(self) -> str:
        return self.value


# ============================================================================
# Money
# ============================================================================


@dataclass(frozen=True)
class Money(ValueObject):
    """Non-negative amount in minor units (centavos) with a currency code.

    Integer minor units keep cart totals exact. Amounts in different
    currencies never combine.

    Attributes:
        amount_cents: Amount in minor units.
        currency: Upper-cased ISO 4217 code.
    """

    amount_cents: int
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if self.amount_cents < 0:
            raise NegativeMoneyError(self.amount_cents)
        object.__setattr__(self, "currency", self.currency.upper())

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Self:
        return cls(0, currency)

    @classmethod
    def from_decimal(cls, amount: Decimal, currency: str = DEFAULT_CURRENCY) -> Self:
        """Build money from a major-unit amount such as ``Decimal("2850.00")``.

        Fractions of a centavo round half up.
        """
        minor = (amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return cls(int(minor), currency)

    @classmethod
    def from_float(cls, amount: float, currency: str = DEFAULT_CURRENCY) -> Self:
        # str() first so 19.99 stays 19.99 instead of its binary expansion
        return cls.from_decimal(Decimal(str(amount)), currency)

    def to_decimal(self) -> Decimal:
        """Amount in major units."""
        return Decimal(self.amount_cents) / 100

    def is_zero(self) -> bool:
        return self.amount_cents == 0

    def __add__(self, other: "Money") -> "Money":
        """Sum two amounts of the same currency.

        Raises:
            CurrencyMismatchError: If the currencies differ.
        """
        if other.currency != self.currency:
            raise CurrencyMismatchError(self.currency, other.currency)
        return Money(self.amount_cents + other.amount_cents, self.currency)

    def __mul__(self, quantity: int) -> "Money":
        """Price of ``quantity`` units at this unit price."""
        return Money(self.amount_cents * quantity, self.currency)

    __rmul__ = __mul__

    def __str__(self) -> str:
        """Display form, e.g. ``₱2,850.00 PHP``."""
        symbol = CURRENCY_SYMBOLS.get(self.currency, "")
        return f"{symbol}{self.to_decimal():,.2f} {self.currency}"


# ============================================================================
# Product
# ============================================================================


@dataclass(frozen=True)
class Product(ValueObject):
    """A catalog item as seen by the cart engine.

    Products are owned by the catalog source. The engine only holds
    references to them, so cart lines, undo records and order snapshots
    can all share the same instance.

    Attributes:
        product_id: Catalog identifier, unique and stable.
        name: Display name.
        unit_price: Price per unit.
        category: Category tag (e.g. 'fresh', 'synthetic').
        image: Primary image reference.
        description: Long description.
        additional_images: Gallery image references.
        rating: Average rating (0.0-5.0).
        reviews: Review texts.
    """

    product_id: ProductId
    name: str
    unit_price: Money
    category: str
    image: str = ""
    description: str = ""
    additional_images: tuple[str, ...] = ()
    rating: float = 0.0
    reviews: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        """Plain string form of the product identifier."""
        return str(self.product_id)

    def __str__(self) -> str:
        return f"{self.name} ({self.unit_price})"


# ============================================================================
# Checkout Details
# ============================================================================


def _require(value: str, label: str) -> None:
    if not value or not value.strip():
        raise ValueError(f"{label} cannot be empty")


@dataclass(frozen=True)
class CustomerInfo(ValueObject):
    """Who placed the order.

    Built from an already validated checkout form, so the checks here
    only guard against direct misuse.
    """

    first_name: str
    last_name: str
    email: str
    phone: str

    def __post_init__(self) -> None:
        _require(self.first_name, "First name")
        _require(self.last_name, "Last name")
        if "@" not in self.email:
            raise ValueError("Invalid email address")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class ShippingAddress(ValueObject):
    """Where the order ships to."""

    address: str
    city: str
    postal_code: str
    country: str

    def __post_init__(self) -> None:
        _require(self.address, "Address")
        _require(self.city, "City")
        _require(self.postal_code, "Postal code")

    def format_single_line(self) -> str:
        return ", ".join((self.address, self.city, self.postal_code, self.country))
