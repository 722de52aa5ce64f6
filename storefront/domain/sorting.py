"""Comparator-based sorting for catalog views.

Two algorithms are provided, both driven by a three-way comparator
(negative, zero or positive):

- ``quick_sort``: in-place partition-exchange sort using the last
  element as pivot (Lomuto scheme). Average O(n log n); worst case
  O(n^2) when the input is already ordered with respect to the
  comparator, e.g. sorting a price-descending list ascending. Catalog
  views are tens of items, so this is acceptable. Not stable.
- ``merge_sort``: top-down merge sort returning a new list. O(n log n)
  always. Stable: on ties the element from the left half goes first.

Neither algorithm copies on behalf of the caller beyond what it needs;
``sort_products`` copies before sorting so the catalog order is kept.

Name and category comparators collate case-insensitively with
``locale.strcoll``, so their order follows the process ``LC_COLLATE``
(set from ``Settings.collation_locale`` at app startup).
"""

import locale
from collections.abc import Callable, Sequence
from enum import Enum
from typing import TypeVar

from storefront.domain.value_objects import Product

T = TypeVar("T")

Comparator = Callable[[T, T], int]


# ============================================================================
# Comparators
# ============================================================================


def _collate(a: str, b: str) -> int:
    # Uses the process LC_COLLATE (see apply_collation_locale); under the
    # default "C" locale this is code-point order of the casefolded text.
    return locale.strcoll(a.casefold(), b.casefold()) or locale.strcoll(a, b)


def by_price_ascending(a: Product, b: Product) -> int:
    return a.unit_price.amount_cents - b.unit_price.amount_cents


def by_price_descending(a: Product, b: Product) -> int:
    return b.unit_price.amount_cents - a.unit_price.amount_cents


def by_name(a: Product, b: Product) -> int:
    return _collate(a.name, b.name)


def by_category(a: Product, b: Product) -> int:
    return _collate(a.category, b.category)


# ============================================================================
# Partition-exchange sort
# ============================================================================


def quick_sort(
    items: list[T],
    compare: Comparator[T],
    left: int = 0,
    right: int | None = None,
) -> list[T]:
    """Sort ``items[left:right + 1]`` in place.

    Args:
        items: List to sort; it is mutated.
        compare: Three-way comparator.
        left: First index of the range.
        right: Last index of the range, defaults to the end.

    Returns:
        The same list, for chaining.
    """
    if right is None:
        right = len(items) - 1
    if left < right:
        pivot_index = _partition(items, compare, left, right)
        quick_sort(items, compare, left, pivot_index - 1)
        quick_sort(items, compare, pivot_index + 1, right)
    return items


def _partition(items: list[T], compare: Comparator[T], left: int, right: int) -> int:
    pivot = items[right]
    boundary = left - 1
    for j in range(left, right):
        if compare(items[j], pivot) <= 0:
            boundary += 1
            items[boundary], items[j] = items[j], items[boundary]
    items[boundary + 1], items[right] = items[right], items[boundary + 1]
    return boundary + 1


# ============================================================================
# Merge sort
# ============================================================================


def merge_sort(items: Sequence[T], compare: Comparator[T]) -> list[T]:
    """Return a sorted copy of ``items``.

    Args:
        items: Sequence to sort; it is not mutated.
        compare: Three-way comparator.

    Returns:
        New sorted list.
    """
    if len(items) <= 1:
        return list(items)

    mid = len(items) // 2
    left = merge_sort(items[:mid], compare)
    right = merge_sort(items[mid:], compare)
    return _merge(left, right, compare)


def _merge(left: list[T], right: list[T], compare: Comparator[T]) -> list[T]:
    result: list[T] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # <= keeps equal elements in their original order
        if compare(left[i], right[j]) <= 0:
            result.append(left[i])
            i += 1
        else:
            result.append(right[j])
            j += 1
    result.extend(left[i:])
    result.extend(right[j:])
    return result


# ============================================================================
# Catalog view ordering
# ============================================================================


class SortOption(str, Enum):
    """Display orderings offered by the storefront."""

    DEFAULT = "default"
    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    NAME = "name"
    CATEGORY = "category"


def sort_products(products: Sequence[Product], sort_by: SortOption | str) -> list[Product]:
    """Order products for display without touching the source sequence.

    Price orderings use quick sort; name and category use merge sort so
    that products with equal keys keep their catalog order. Unknown
    options return the products in their original order.

    Args:
        products: Products to order.
        sort_by: Sort option or its string value.

    Returns:
        New list in display order.
    """
    products_copy = list(products)
    try:
        option = SortOption(sort_by)
    except ValueError:
        return products_copy

    if option is SortOption.PRICE_LOW:
        return quick_sort(products_copy, by_price_ascending)
    if option is SortOption.PRICE_HIGH:
        return quick_sort(products_copy, by_price_descending)
    if option is SortOption.NAME:
        return merge_sort(products_copy, by_name)
    if option is SortOption.CATEGORY:
        return merge_sort(products_copy, by_category)
    return products_copy
