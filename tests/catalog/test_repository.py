"""Tests for the in-memory catalog."""

from storefront.catalog.repository import InMemoryCatalog, seed_products
from storefront.domain.value_objects import ProductId


class TestSeedCatalog:
    """Tests for the seeded storefront catalog."""

    def test_seed_categories(self, catalog) -> None:
        """The catalog covers the storefront's four categories."""
        assert catalog.categories() == ["best-sellers", "fresh", "synthetic", "seasonal"]

    def test_ids_are_unique(self) -> None:
        """Every seeded product has its own id."""
        ids = [p.id for p in seed_products()]
        assert len(ids) == len(set(ids))

    def test_prices_in_centavos(self, catalog) -> None:
        """Prices are stored in minor units."""
        assert catalog.find_product("2").unit_price.amount_cents == 285000
        assert catalog.find_product("14").unit_price.amount_cents == 29900

    def test_seed_currency(self) -> None:
        """The seed currency is configurable."""
        catalog = InMemoryCatalog.with_seed_data("USD")
        assert catalog.find_product("1").unit_price.currency == "USD"


class TestLookups:
    """Tests for find, list and search."""

    def test_find_by_string_or_product_id(self, catalog) -> None:
        """Lookups accept plain strings and typed ids."""
        assert catalog.find_product("7").name == "Blooms Blush"
        assert catalog.find_product(ProductId("7")).name == "Blooms Blush"

    def test_find_unknown_returns_none(self, catalog) -> None:
        """Unknown products are None, not an error."""
        assert catalog.find_product("999") is None

    def test_list_by_category(self, catalog) -> None:
        """Category filter keeps catalog order."""
        assert [p.id for p in catalog.list_products("synthetic")] == ["13", "14", "15"]

    def test_list_all(self, catalog) -> None:
        """None and 'all' both list everything."""
        assert catalog.list_products() == catalog.list_products("all")
        assert len(catalog.list_products()) == len(catalog)

    def test_search_is_case_insensitive(self, catalog) -> None:
        """Search matches name, description and category."""
        assert [p.id for p in catalog.search("TULIP")] == ["19"]
        assert [p.id for p in catalog.search("seasonal")] == ["19", "20"]

    def test_blank_search_lists_everything(self, catalog) -> None:
        """A blank query matches all products."""
        assert len(catalog.search("   ")) == len(catalog)

    def test_add_replaces_product(self, catalog, make_product) -> None:
        """Adding an existing id replaces the product."""
        count = len(catalog)
        catalog.add(make_product("7", 100, name="Replacement"))

        assert catalog.find_product("7").name == "Replacement"
        assert len(catalog) == count
