"""Wishlist of product identifiers."""

from collections.abc import Iterable

from storefront.domain.value_objects import ProductId


class Wishlist:
    """Set of product ids the shopper wants to remember.

    Membership is unique. Ids are reported in the order they were added,
    which is only a display convenience.
    """

    def __init__(self, product_ids: Iterable[ProductId | str] = ()) -> None:
        # dict keeps insertion order and gives set semantics
        self._ids: dict[str, None] = {}
        for product_id in product_ids:
            self.add(product_id)

    def add(self, product_id: ProductId | str) -> bool:
        """Add a product.

        Returns:
            True if the product was not already present.
        """
        key = str(product_id)
        if key in self._ids:
            return False
        self._ids[key] = None
        return True

    def remove(self, product_id: ProductId | str) -> bool:
        """Remove a product.

        Returns:
            True if the product was present.
        """
        key = str(product_id)
        if key not in self._ids:
            return False
        del self._ids[key]
        return True

    def toggle(self, product_id: ProductId | str) -> bool:
        """Add the product if absent, remove it if present.

        Returns:
            Membership after the toggle.
        """
        if self.contains(product_id):
            self.remove(product_id)
            return False
        self.add(product_id)
        return True

    def contains(self, product_id: ProductId | str) -> bool:
        return str(product_id) in self._ids

    def __contains__(self, product_id: object) -> bool:
        return str(product_id) in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def items(self) -> list[str]:
        return list(self._ids)

    def clear(self) -> None:
        self._ids.clear()
