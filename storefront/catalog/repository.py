"""In-memory product catalog.

The catalog is the external "catalog source" the cart engine queries by
product id. Lookups return None for unknown products rather than
raising.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Protocol

import structlog

from storefront.domain.value_objects import Money, Product, ProductId

logger = structlog.get_logger()

ALL_CATEGORIES = "all"


class CatalogSource(Protocol):
    """What the engine needs from a catalog."""

    def find_product(self, product_id: ProductId | str) -> Product | None: ...

    def list_products(self, category: str | None = None) -> list[Product]: ...

    def search(self, query: str) -> list[Product]: ...


class InMemoryCatalog:
    """Catalog held in memory, in catalog order.

    Example usage:
        catalog = InMemoryCatalog.with_seed_data()
        product = catalog.find_product("2")
        fresh = catalog.list_products(category="fresh")
    """

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products: dict[str, Product] = {}
        for product in products:
            self.add(product)

    @classmethod
    def with_seed_data(cls, currency: str = "PHP") -> "InMemoryCatalog":
        """Create a catalog populated with the storefront's products.

        Args:
            currency: Currency for product prices.

        Returns:
            Seeded catalog.
        """
        return cls(seed_products(currency))

    def add(self, product: Product) -> None:
        """Add or replace a product.

        Args:
            product: Product to store.
        """
        if product.id in self._products:
            logger.warning("Replacing catalog product", product_id=product.id)
        self._products[product.id] = product

    def find_product(self, product_id: ProductId | str) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product identifier.

        Returns:
            Product if found, None otherwise.
        """
        return self._products.get(str(product_id))

    def list_products(self, category: str | None = None) -> list[Product]:
        """List products, optionally limited to one category.

        Args:
            category: Category tag, or None / "all" for everything.

        Returns:
            Products in catalog order.
        """
        if category is None or category == ALL_CATEGORIES:
            return list(self._products.values())
        return [p for p in self._products.values() if p.category == category]

    def categories(self) -> list[str]:
        """Distinct categories in catalog order."""
        return list(dict.fromkeys(p.category for p in self._products.values()))

    def search(self, query: str) -> list[Product]:
        """Case-insensitive text search over name, description and category.

        Args:
            query: Search text. Blank queries match every product.

        Returns:
            Matching products in catalog order.
        """
        needle = query.strip().lower()
        if not needle:
            return self.list_products()
        return [
            p
            for p in self._products.values()
            if needle in p.name.lower()
            or needle in p.description.lower()
            or needle in p.category.lower()
        ]

    def __len__(self) -> int:
        return len(self._products)


# ============================================================================
# Seed Data
# ============================================================================


_SEED: list[tuple[str, str, str, str, str, tuple[str, ...]]] = [
    (
        "1", "Candy Pink", "9999.00", "best-sellers",
        "A vibrant pink arrangement perfect for celebrations. Premium pink roses, "
        "peonies, and carnations for birthdays, anniversaries, or just to brighten "
        "someone's day.",
        ("pics/b1.webp", "pics/b2.webp", "pics/b3.webp"),
    ),
    (
        "2", "Bright but Light", "2850.00", "best-sellers",
        "A cheerful mix of bright flowers to light up any room. Sunflowers, daisies, "
        "and yellow roses in a sunny, uplifting bouquet.",
        ("pics/b2.webp", "pics/b1.webp", "pics/b3.webp"),
    ),
    (
        "3", "Berry Cheesecake", "6880.00", "best-sellers",
        "Rich tones of berry and cream in an elegant display. Burgundy roses, purple "
        "lisianthus, and white hydrangeas.",
        ("pics/b3.webp", "pics/b1.webp", "pics/b2.webp"),
    ),
    (
        "4", "Dream Land", "3990.00", "best-sellers",
        "Soft pastel blooms that evoke a dreamy atmosphere. Lavender, pale pink roses, "
        "and white hydrangeas.",
        ("pics/b4.webp", "pics/b1.webp", "pics/b2.webp"),
    ),
    (
        "5", "Pinkish Belle", "5390.00", "best-sellers",
        "Delicate pink flowers arranged with timeless elegance. Pink peonies, roses, "
        "and carnations.",
        ("pics/b5.webp", "pics/b1.webp", "pics/b2.webp"),
    ),
    (
        "7", "Blooms Blush", "15999.00", "fresh",
        "A luxurious bouquet of premium fresh blooms featuring garden roses, "
        "ranunculus, and eucalyptus.",
        ("pics/f1.jpg", "pics/f2.jpg", "pics/f3.jpg"),
    ),
    (
        "8", "Blissful Roses", "6670.00", "fresh",
        "Classic roses arranged to perfection. Two dozen premium red roses for "
        "romantic occasions.",
        ("pics/f2.jpg", "pics/f1.jpg", "pics/f3.jpg"),
    ),
    (
        "9", "Rosette", "3490.00", "fresh",
        "A charming arrangement of pink and white roses with baby's breath.",
        ("pics/ff3.webp", "pics/f1.jpg", "pics/f2.jpg"),
    ),
    (
        "13", "Eterna", "349.00", "synthetic",
        "Lifelike synthetic flowers that last forever, requiring no maintenance "
        "or watering.",
        ("pics/s1.jpg", "pics/s2.jpg", "pics/s3.jpg"),
    ),
    (
        "14", "Silken", "299.00", "synthetic",
        "Silk flowers with remarkable realism, down to the veining in the leaves.",
        ("pics/ff2.jpg", "pics/s1.jpg", "pics/s2.jpg"),
    ),
    (
        "15", "Velvessa", "349.00", "synthetic",
        "Velvety textures that mimic real petals.",
        ("pics/s2.jpg", "pics/s1.jpg", "pics/ff2.jpg"),
    ),
    (
        "19", "Spring Tulips", "1999.00", "seasonal",
        "Fresh spring tulips in shades of pink, yellow, and purple.",
        ("pics/spring1.webp", "pics/spring2.jpg", "pics/spring3.jpg"),
    ),
    (
        "20", "Summer Sunflowers", "2499.00", "seasonal",
        "Bright sunflowers to capture summer joy.",
        ("pics/summer1.jpg", "pics/spring1.webp", "pics/fall.jpg"),
    ),
]


def seed_products(currency: str = "PHP") -> list[Product]:
    """Build the storefront's product list.

    Args:
        currency: Currency for product prices.

    Returns:
        Products in catalog order.
    """
    return [
        Product(
            product_id=ProductId(product_id),
            name=name,
            unit_price=Money.from_decimal(Decimal(price), currency),
            category=category,
            image=images[0],
            description=description,
            additional_images=images,
        )
        for product_id, name, price, category, description, images in _SEED
    ]
