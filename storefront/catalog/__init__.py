"""Product catalog and stock sources.

The catalog answers lookups by product id and backs the catalog views;
the stock source annotates those views with inventory levels.
"""

from storefront.catalog.repository import (
    ALL_CATEGORIES,
    CatalogSource,
    InMemoryCatalog,
    seed_products,
)
from storefront.catalog.stock import (
    HttpStockSource,
    InMemoryStockSource,
    StockClientError,
    StockInfo,
    StockSource,
)

__all__ = [
    # Catalog
    "ALL_CATEGORIES",
    "CatalogSource",
    "InMemoryCatalog",
    "seed_products",
    # Stock
    "HttpStockSource",
    "InMemoryStockSource",
    "StockClientError",
    "StockInfo",
    "StockSource",
]
