"""Append-only ledger of completed orders."""

from collections.abc import Iterable
from datetime import datetime, timezone

from storefront.domain.entities import CartLine, Order, OrderLine
from storefront.domain.value_objects import CustomerInfo, Money, OrderId, ShippingAddress


class OrderLedger:
    """Order history for a session.

    Orders are copied out of the cart when appended, so later cart
    mutations can never alter recorded history. Orders are kept oldest
    first and are never removed.
    """

    def __init__(self) -> None:
        self._orders: list[Order] = []

    def add_order(
        self,
        lines: Iterable[CartLine],
        total: Money,
        placed_at: datetime | None = None,
        customer: CustomerInfo | None = None,
        shipping_address: ShippingAddress | None = None,
    ) -> Order:
        """Record a completed order.

        Args:
            lines: Cart lines at submission time.
            total: Cart total at submission time.
            placed_at: Order timestamp, defaults to now (UTC).
            customer: Customer details from checkout.
            shipping_address: Shipping address from checkout.

        Returns:
            The appended Order.
        """
        order = Order(
            id=OrderId.generate(),
            lines=tuple(OrderLine.from_cart_line(line) for line in lines),
            total=total,
            placed_at=placed_at or datetime.now(timezone.utc),
            customer=customer,
            shipping_address=shipping_address,
        )
        self._orders.append(order)
        return order

    def get_orders(self) -> tuple[Order, ...]:
        """Get all orders, oldest first."""
        return tuple(self._orders)

    def get_order(self, order_id: OrderId | str) -> Order | None:
        """Find an order by ID.

        Args:
            order_id: Order identifier.

        Returns:
            Order if found, None otherwise.
        """
        for order in self._orders:
            if str(order.id) == str(order_id):
                return order
        return None

    def __len__(self) -> int:
        return len(self._orders)
