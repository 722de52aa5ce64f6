"""API schemas for the storefront API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from storefront.domain.entities import Cart, CartLine, Order
from storefront.domain.value_objects import Money, Product


# ============================================================================
# Common Schemas
# ============================================================================


class PriceSchema(BaseModel):
    """Price representation."""

    amount: int = Field(..., description="Amount in smallest currency unit (centavos)")
    currency: str = Field(..., description="Currency code")
    formatted: str = Field(..., description="Display string, e.g. ₱2,850.00")

    @classmethod
    def from_money(cls, money: Money) -> "PriceSchema":
        return cls(amount=money.amount_cents, currency=money.currency, formatted=str(money))


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Catalog Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """Catalog product."""

    id: str
    name: str
    price: PriceSchema
    category: str
    image: str = ""
    description: str = ""
    additional_images: list[str] = Field(default_factory=list)
    rating: float = 0.0

    @classmethod
    def from_product(cls, product: Product) -> "ProductSchema":
        return cls(
            id=product.id,
            name=product.name,
            price=PriceSchema.from_money(product.unit_price),
            category=product.category,
            image=product.image,
            description=product.description,
            additional_images=list(product.additional_images),
            rating=product.rating,
        )


class ProductListResponse(BaseModel):
    """Catalog view."""

    items: list[ProductSchema]
    total: int = Field(..., description="Number of products in the view")
    category: str = Field(..., description="Category filter applied")
    sort: str = Field(..., description="Sort option applied")


class StockResponse(BaseModel):
    """Stock level of a product, for display only."""

    product_id: str
    tracked: bool = Field(..., description="Whether inventory tracks this product")
    quantity: int | None = None
    is_low: bool = False
    is_out: bool = False


# ============================================================================
# Cart Schemas
# ============================================================================


class CartLineSchema(BaseModel):
    """Cart line."""

    product_id: str
    name: str
    image: str = ""
    unit_price: PriceSchema
    quantity: int
    line_total: PriceSchema

    @classmethod
    def from_line(cls, line: CartLine) -> "CartLineSchema":
        return cls(
            product_id=line.product_id,
            name=line.product.name,
            image=line.product.image,
            unit_price=PriceSchema.from_money(line.unit_price),
            quantity=line.quantity,
            line_total=PriceSchema.from_money(line.line_total),
        )


class CartResponse(BaseModel):
    """Cart contents and derived totals."""

    session_id: str
    items: list[CartLineSchema]
    size: int = Field(..., description="Number of distinct lines")
    item_count: int = Field(..., description="Total quantity across lines")
    total: PriceSchema
    max_quantity: int = Field(..., description="Per-line quantity limit")
    undo_available: int = Field(..., description="Number of actions that can be undone")

    @classmethod
    def build(cls, session_id: str, cart: Cart, undo_available: int) -> "CartResponse":
        return cls(
            session_id=session_id,
            items=[CartLineSchema.from_line(line) for line in cart.get_items()],
            size=cart.size,
            item_count=cart.item_count,
            total=PriceSchema.from_money(cart.total),
            max_quantity=cart.max_quantity,
            undo_available=undo_available,
        )


class AddItemRequest(BaseModel):
    """Request to add a product to the cart."""

    product_id: str = Field(..., min_length=1, description="Catalog product ID")
    quantity: int = Field(default=1, description="Units to add")


class UpdateQuantityRequest(BaseModel):
    """Request to set a line quantity."""

    quantity: int = Field(..., description="New quantity")


class UndoResponse(BaseModel):
    """Outcome of an undo request."""

    undone: bool
    action_type: str | None = None
    product_id: str | None = None
    cart: CartResponse


class ClearCartResponse(BaseModel):
    """Outcome of emptying the cart."""

    lines_removed: int
    cart: CartResponse


# ============================================================================
# Snapshot Schemas
# ============================================================================


class SnapshotSchema(BaseModel):
    """Saved cart and wishlist contents.

    Cart entries are ``{"productId": str, "quantity": int}`` objects. They
    are accepted loosely on load; bad entries are skipped and reported.
    """

    cart: list[Any] = Field(default_factory=list)
    wishlist: list[Any] | None = None


class SkippedLineSchema(BaseModel):
    """Snapshot entry that was not restored."""

    position: int
    product_id: str | None = None
    reason: str


class RestoreResponse(BaseModel):
    """Outcome of loading a snapshot."""

    restored: int
    skipped: list[SkippedLineSchema]
    cart: CartResponse


# ============================================================================
# Wishlist Schemas
# ============================================================================


class WishlistResponse(BaseModel):
    """Wishlist contents."""

    items: list[str]
    count: int


class WishlistItemResponse(BaseModel):
    """Wishlist membership of one product."""

    product_id: str
    in_wishlist: bool


class MoveToCartResponse(BaseModel):
    """Outcome of moving a wishlisted product into the cart."""

    product_id: str
    wishlist: WishlistResponse
    cart: CartResponse


# ============================================================================
# Checkout and Order Schemas
# ============================================================================


class OrderLineSchema(BaseModel):
    """Order line snapshot."""

    product_id: str
    name: str
    unit_price: PriceSchema
    quantity: int
    line_total: PriceSchema


class OrderSchema(BaseModel):
    """Placed order."""

    id: str
    lines: list[OrderLineSchema]
    item_count: int
    total: PriceSchema
    placed_at: datetime
    customer_name: str | None = None
    email: str | None = None
    shipping_address: str | None = None

    @classmethod
    def from_order(cls, order: Order) -> "OrderSchema":
        return cls(
            id=str(order.id),
            lines=[
                OrderLineSchema(
                    product_id=line.product.id,
                    name=line.product.name,
                    unit_price=PriceSchema.from_money(line.product.unit_price),
                    quantity=line.quantity,
                    line_total=PriceSchema.from_money(line.line_total),
                )
                for line in order.lines
            ],
            item_count=order.item_count,
            total=PriceSchema.from_money(order.total),
            placed_at=order.placed_at,
            customer_name=order.customer.full_name if order.customer else None,
            email=order.customer.email if order.customer else None,
            shipping_address=(
                order.shipping_address.format_single_line() if order.shipping_address else None
            ),
        )


class OrderListResponse(BaseModel):
    """Orders placed in this session, oldest first."""

    items: list[OrderSchema]
    total: int


class CheckoutStateResponse(BaseModel):
    """Checkout state of the session."""

    status: str
    allowed_transitions: list[str]
    field_errors: list[ErrorDetail] = Field(default_factory=list)
    cart_total: PriceSchema
    order: OrderSchema | None = None
