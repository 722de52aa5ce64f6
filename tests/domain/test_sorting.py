"""Tests for comparators and the sort engine."""

import random

import pytest

from storefront.domain.sorting import (
    SortOption,
    by_category,
    by_name,
    by_price_ascending,
    by_price_descending,
    merge_sort,
    quick_sort,
    sort_products,
)


def int_compare(a: int, b: int) -> int:
    return a - b


@pytest.fixture
def products(make_product):
    """Small catalog with distinct prices, in catalog order."""
    return [
        make_product("1", 9999_00, name="Candy Pink", category="best-sellers"),
        make_product("7", 15999_00, name="Blooms Blush", category="fresh"),
        make_product("13", 349_00, name="eterna", category="synthetic"),
        make_product("19", 1999_00, name="Spring Tulips", category="seasonal"),
        make_product("2", 2850_00, name="Bright but Light", category="best-sellers"),
    ]


class TestComparators:
    """Tests for product comparators."""

    def test_price_ascending(self, products) -> None:
        """Cheaper products compare lower."""
        cheap, dear = products[2], products[1]
        assert by_price_ascending(cheap, dear) < 0
        assert by_price_ascending(dear, cheap) > 0
        assert by_price_ascending(cheap, cheap) == 0

    def test_price_descending_is_reverse(self, products) -> None:
        """Descending is ascending with the sign flipped."""
        a, b = products[0], products[3]
        assert by_price_descending(a, b) == -by_price_ascending(a, b)

    def test_name_is_case_insensitive(self, products) -> None:
        """Lowercase names sort among capitalized ones."""
        eterna, spring = products[2], products[3]
        assert by_name(eterna, spring) < 0


class TestQuickSort:
    """Tests for the partition-exchange sort."""

    def test_sorts_in_place(self) -> None:
        """The input list itself is sorted and returned."""
        items = [5, 3, 8, 1, 9, 2]
        result = quick_sort(items, int_compare)
        assert result is items
        assert items == [1, 2, 3, 5, 8, 9]

    def test_empty_and_single(self) -> None:
        """Trivial inputs are returned unchanged."""
        assert quick_sort([], int_compare) == []
        assert quick_sort([4], int_compare) == [4]

    def test_already_sorted_input(self) -> None:
        """Ordered input (worst case) still sorts correctly."""
        items = list(range(50))
        assert quick_sort(list(reversed(items)), int_compare) == items
        assert quick_sort(list(items), int_compare) == items

    def test_sub_range(self) -> None:
        """Only the given index range is sorted."""
        items = [9, 4, 3, 2, 1, 0]
        quick_sort(items, int_compare, 1, 3)
        assert items == [9, 2, 3, 4, 1, 0]

    def test_same_multiset_in_order(self) -> None:
        """Output is a permutation of the input in comparator order."""
        rng = random.Random(7)
        items = [rng.randint(0, 20) for _ in range(200)]
        expected = sorted(items)
        assert quick_sort(list(items), int_compare) == expected


class TestMergeSort:
    """Tests for merge sort."""

    def test_returns_new_list(self) -> None:
        """The input is not mutated."""
        items = [3, 1, 2]
        result = merge_sort(items, int_compare)
        assert result == [1, 2, 3]
        assert items == [3, 1, 2]

    def test_stable_on_ties(self, make_product) -> None:
        """Equal keys keep their original relative order."""
        items = [
            make_product("a", 100, category="fresh"),
            make_product("b", 100, category="best-sellers"),
            make_product("c", 100, category="fresh"),
            make_product("d", 100, category="best-sellers"),
        ]
        result = merge_sort(items, by_category)
        assert [p.id for p in result] == ["b", "d", "a", "c"]

    def test_random_input(self) -> None:
        """Matches the built-in sort on random data."""
        rng = random.Random(11)
        items = [rng.randint(-50, 50) for _ in range(101)]
        assert merge_sort(items, int_compare) == sorted(items)


class TestSortProducts:
    """Tests for catalog view ordering."""

    def test_price_low_and_high_are_reverses(self, products) -> None:
        """With distinct prices, descending is ascending reversed."""
        low = sort_products(products, SortOption.PRICE_LOW)
        high = sort_products(products, "price-high")

        assert [p.id for p in low] == ["13", "19", "2", "1", "7"]
        assert [p.id for p in high] == list(reversed([p.id for p in low]))

    def test_name_order(self, products) -> None:
        """Name sort is alphabetical, ignoring case."""
        result = sort_products(products, "name")
        assert [p.name for p in result] == [
            "Blooms Blush",
            "Bright but Light",
            "Candy Pink",
            "eterna",
            "Spring Tulips",
        ]

    def test_category_keeps_catalog_order_within_category(self, products) -> None:
        """Products in the same category stay in catalog order."""
        result = sort_products(products, "category")
        assert [p.id for p in result] == ["1", "2", "7", "19", "13"]

    @pytest.mark.parametrize("option", ["default", "rating", ""])
    def test_other_options_keep_catalog_order(self, products, option) -> None:
        """Default and unknown options return a copy in catalog order."""
        result = sort_products(products, option)
        assert result == products
        assert result is not products

    def test_source_is_not_mutated(self, products) -> None:
        """Sorting never reorders the caller's sequence."""
        before = list(products)
        sort_products(products, "price-low")
        assert products == before
