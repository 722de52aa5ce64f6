"""Undo history for cart mutations.

Every successful cart mutation is recorded as an action record that
describes how to revert it. Records live on a LIFO stack; undoing pops
the most recent one, so repeated undo walks further back in time.

Dispatching a popped record onto the cart is done by the shopping
session, not by the stack itself.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from storefront.domain.value_objects import Product


class ActionType(str, Enum):
    """Kinds of reversible cart mutations."""

    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"


@dataclass(frozen=True)
class AddAction:
    """Units of a product were added to the cart.

    Attributes:
        product_id: Product that was added.
        quantity: Units added.
        previous_quantity: Line quantity before the add, 0 if the add
            created the line. Undo restores this quantity instead of
            dropping the whole line when the add merged into an
            existing one.
    """

    action_type: ClassVar[ActionType] = ActionType.ADD

    product_id: str
    quantity: int
    previous_quantity: int = 0

    @property
    def created_line(self) -> bool:
        return self.previous_quantity == 0


@dataclass(frozen=True)
class RemoveAction:
    """A line was removed from the cart.

    The full product is kept because the line no longer exists in the
    cart to recover it from.

    Attributes:
        product_id: Product that was removed.
        product: Product snapshot at removal time.
        quantity: Line quantity at removal time.
    """

    action_type: ClassVar[ActionType] = ActionType.REMOVE

    product_id: str
    product: Product
    quantity: int


@dataclass(frozen=True)
class UpdateAction:
    """A line quantity was changed.

    Attributes:
        product_id: Product whose line changed.
        old_quantity: Quantity before the change.
        new_quantity: Quantity after the change.
    """

    action_type: ClassVar[ActionType] = ActionType.UPDATE

    product_id: str
    old_quantity: int
    new_quantity: int


ActionRecord = AddAction | RemoveAction | UpdateAction


class ActionHistory:
    """LIFO stack of action records, bounded only by memory."""

    def __init__(self) -> None:
        self._items: list[ActionRecord] = []

    def push(self, record: ActionRecord) -> None:
        """Push a record onto the top of the stack."""
        self._items.append(record)

    def pop(self) -> ActionRecord | None:
        """Remove and return the most recent record.

        Returns:
            The top record, or None if the stack is empty.
        """
        if not self._items:
            return None
        return self._items.pop()

    def peek(self) -> ActionRecord | None:
        """Return the most recent record without removing it."""
        if not self._items:
            return None
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def clear(self) -> int:
        """Drop all records.

        Returns:
            Number of records dropped.
        """
        count = len(self._items)
        self._items.clear()
        return count
