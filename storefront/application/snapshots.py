"""Save and load shapes for cart and wishlist contents.

A cart snapshot is a JSON-friendly list of ``{"productId", "quantity"}``
objects in display order. Loading resolves product ids against the
catalog; unknown products and bad entries are skipped and reported, so a
stale snapshot can never leave the cart in an invalid state.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from storefront.catalog.repository import CatalogSource
from storefront.domain.entities import Cart, CartLine
from storefront.domain.wishlist import Wishlist

logger = structlog.get_logger()


class CartSnapshotLine(BaseModel):
    """One persisted cart line."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: str = Field(alias="productId", min_length=1)
    quantity: int


@dataclass(frozen=True)
class SkippedLine:
    """A snapshot entry that was not restored."""

    position: int
    product_id: str | None
    reason: str


@dataclass
class RestoreReport:
    """Outcome of loading a cart snapshot."""

    restored: int = 0
    skipped: list[SkippedLine] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.skipped


def dump_cart(cart: Cart) -> list[dict[str, Any]]:
    """Serialize cart lines in display order.

    Args:
        cart: Cart to serialize.

    Returns:
        List of ``{"productId": str, "quantity": int}`` objects.
    """
    return [
        CartSnapshotLine(product_id=line.product_id, quantity=line.quantity).model_dump(
            by_alias=True
        )
        for line in cart.get_items()
    ]


def restore_cart(cart: Cart, raw_lines: Iterable[Any], catalog: CatalogSource) -> RestoreReport:
    """Replace cart contents from a snapshot.

    Entries are resolved against the catalog in order. An entry is
    skipped when it is malformed, names an unknown product, repeats a
    product already restored, carries a quantity outside the cart's
    limits or is priced in another currency. The surviving lines replace
    the cart contents in one step.

    Args:
        cart: Cart to load into.
        raw_lines: Snapshot entries as produced by ``dump_cart``.
        catalog: Catalog used to resolve product ids.

    Returns:
        Report of restored and skipped entries.
    """
    report = RestoreReport()
    lines: list[CartLine] = []
    seen: set[str] = set()

    for position, raw in enumerate(raw_lines):
        try:
            entry = CartSnapshotLine.model_validate(raw)
        except ValidationError:
            product_id = raw.get("productId") if isinstance(raw, dict) else None
            report.skipped.append(
                SkippedLine(
                    position,
                    None if product_id is None else str(product_id),
                    "malformed entry",
                )
            )
            continue

        product = catalog.find_product(entry.product_id)
        if product is None:
            reason = "unknown product"
        elif entry.product_id in seen:
            reason = "duplicate product"
        elif not 1 <= entry.quantity <= cart.max_quantity:
            reason = "quantity out of range"
        elif product.unit_price.currency != cart.currency:
            reason = "currency mismatch"
        else:
            seen.add(entry.product_id)
            lines.append(CartLine(product=product, quantity=entry.quantity))
            continue
        report.skipped.append(SkippedLine(position, entry.product_id, reason))

    cart.restore_lines(lines)
    report.restored = len(lines)

    for skipped in report.skipped:
        logger.warning(
            "Skipped cart snapshot entry",
            cart_id=str(cart.id),
            position=skipped.position,
            product_id=skipped.product_id,
            reason=skipped.reason,
        )
    logger.info(
        "Cart restored from snapshot",
        cart_id=str(cart.id),
        restored=report.restored,
        skipped=len(report.skipped),
    )
    return report


def dump_wishlist(wishlist: Wishlist) -> list[str]:
    return wishlist.items()


def restore_wishlist(
    wishlist: Wishlist, product_ids: Iterable[Any], catalog: CatalogSource
) -> list[str]:
    """Replace wishlist contents from a snapshot.

    Args:
        wishlist: Wishlist to load into.
        product_ids: Persisted product ids.
        catalog: Catalog used to drop ids that no longer exist.

    Returns:
        Ids that were skipped.
    """
    skipped: list[str] = []
    wishlist.clear()
    for product_id in product_ids:
        if not isinstance(product_id, str) or catalog.find_product(product_id) is None:
            skipped.append(str(product_id))
            continue
        wishlist.add(product_id)

    if skipped:
        logger.warning("Skipped wishlist snapshot entries", product_ids=skipped)
    return skipped
