"""Shared fixtures for storefront tests."""

from collections.abc import Callable

import pytest

from storefront.catalog.repository import InMemoryCatalog
from storefront.domain.entities import Cart
from storefront.domain.value_objects import Money, Product, ProductId

ProductFactory = Callable[..., Product]


@pytest.fixture
def make_product() -> ProductFactory:
    """Factory for catalog products priced in centavos."""

    def _make(
        product_id: str,
        price_cents: int = 1000,
        name: str | None = None,
        category: str = "fresh",
        currency: str = "PHP",
    ) -> Product:
        return Product(
            product_id=ProductId(product_id),
            name=name or f"Product {product_id}",
            unit_price=Money(amount_cents=price_cents, currency=currency),
            category=category,
        )

    return _make


@pytest.fixture
def rose(make_product: ProductFactory) -> Product:
    return make_product("rose", 6670_00, name="Blissful Roses", category="fresh")


@pytest.fixture
def tulip(make_product: ProductFactory) -> Product:
    return make_product("tulip", 1999_00, name="Spring Tulips", category="seasonal")


@pytest.fixture
def silk(make_product: ProductFactory) -> Product:
    return make_product("silk", 299_00, name="Silken", category="synthetic")


@pytest.fixture
def cart() -> Cart:
    return Cart()


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Seeded storefront catalog."""
    return InMemoryCatalog.with_seed_data()
