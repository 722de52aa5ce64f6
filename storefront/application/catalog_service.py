"""Catalog browsing application service.

Builds catalog views: filter by category or search text, then order with
the sort engine. Stock levels are looked up on demand for display only.
"""

from dataclasses import dataclass

import structlog

from storefront.catalog.repository import ALL_CATEGORIES, CatalogSource
from storefront.catalog.stock import StockClientError, StockInfo, StockSource
from storefront.domain.sorting import SortOption, sort_products
from storefront.domain.value_objects import Product, ProductId

logger = structlog.get_logger()


@dataclass
class StockLookupResult:
    """Result of a stock lookup."""

    product_id: str
    stock: StockInfo | None = None
    success: bool = True
    error: str | None = None
    error_code: str | None = None


class CatalogService:
    """Service for catalog views.

    Example usage:
        service = CatalogService(catalog, stock_source)
        products = service.browse(category="fresh", sort_by="price-low")
    """

    def __init__(self, catalog: CatalogSource, stock_source: StockSource | None = None) -> None:
        self.catalog = catalog
        self.stock_source = stock_source

    def browse(
        self,
        category: str | None = None,
        sort_by: SortOption | str = SortOption.DEFAULT,
        query: str | None = None,
    ) -> list[Product]:
        """List products for display.

        Args:
            category: Category filter, None or "all" for every category.
            sort_by: Display sort key; unknown keys keep catalog order.
            query: Optional search text, combined with the category filter.

        Returns:
            Products in display order.
        """
        if query and query.strip():
            products = self.catalog.search(query)
            if category and category != ALL_CATEGORIES:
                products = [p for p in products if p.category == category]
        else:
            products = self.catalog.list_products(category)
        return sort_products(products, sort_by)

    def get_product(self, product_id: ProductId | str) -> Product | None:
        return self.catalog.find_product(product_id)

    async def get_stock(self, product_id: ProductId | str) -> StockLookupResult:
        """Look up the stock level of a catalog product.

        Args:
            product_id: Product identifier.

        Returns:
            Result with stock info; ``stock`` is None when untracked.
        """
        key = str(product_id)
        if self.catalog.find_product(key) is None:
            return StockLookupResult(
                product_id=key,
                success=False,
                error=f"Product {key} not found",
                error_code="PRODUCT_NOT_FOUND",
            )
        if self.stock_source is None:
            return StockLookupResult(product_id=key)

        try:
            stock = await self.stock_source.stock_info(key)
        except StockClientError as e:
            logger.warning("Stock lookup failed", product_id=key, error=e.message)
            return StockLookupResult(
                product_id=key,
                success=False,
                error=e.message,
                error_code="STOCK_UNAVAILABLE",
            )

        logger.debug(
            "Stock looked up",
            product_id=key,
            quantity=stock.quantity if stock else None,
        )
        return StockLookupResult(product_id=key, stock=stock)
