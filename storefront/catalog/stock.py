"""Stock lookups against the inventory backend.

Stock levels only annotate catalog views (low stock, sold out). They
never gate cart mutations: an out-of-stock product can still be added
unless the caller checks first.
"""

from dataclasses import dataclass
from typing import Any, Protocol

import httpx
import structlog

from storefront.domain.value_objects import ProductId

logger = structlog.get_logger()


@dataclass(frozen=True)
class StockInfo:
    """Stock level for one product.

    Attributes:
        product_id: Product identifier.
        quantity: Units on hand.
        min_threshold: Reorder threshold; at or below it stock is low.
    """

    product_id: str
    quantity: int
    min_threshold: int = 0

    @property
    def is_out(self) -> bool:
        return self.quantity <= 0

    @property
    def is_low(self) -> bool:
        return not self.is_out and self.quantity <= self.min_threshold

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "StockInfo":
        """Create from inventory API response data."""
        return cls(
            product_id=str(data["product_id"]),
            quantity=int(data.get("quantity", 0)),
            min_threshold=int(data.get("min_threshold", 0)),
        )


class StockSource(Protocol):
    """Async stock lookup used to annotate rendering."""

    async def stock_info(self, product_id: ProductId | str) -> StockInfo | None: ...


class StockClientError(Exception):
    """Error from inventory API call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InMemoryStockSource:
    """Stock levels held in memory."""

    def __init__(self, levels: dict[str, StockInfo] | None = None) -> None:
        self._levels: dict[str, StockInfo] = dict(levels or {})

    def set_level(self, product_id: ProductId | str, quantity: int, min_threshold: int = 0) -> None:
        key = str(product_id)
        self._levels[key] = StockInfo(product_id=key, quantity=quantity, min_threshold=min_threshold)

    async def stock_info(self, product_id: ProductId | str) -> StockInfo | None:
        return self._levels.get(str(product_id))


class HttpStockSource:
    """HTTP client for the inventory backend.

    Calls ``GET /stock/{product_id}``; a 404 means the product is not
    tracked and yields None.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        request_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize inventory client.

        Args:
            base_url: Inventory backend URL.
            timeout: Request timeout in seconds.
            request_id: Optional request ID for correlation.
            transport: Optional transport override (tests).
        """
        self.base_url = base_url
        self.timeout = timeout
        self.request_id = request_id
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {}
            if self.request_id:
                headers["X-Request-ID"] = self.request_id
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpStockSource":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def stock_info(self, product_id: ProductId | str) -> StockInfo | None:
        """Get stock level for a product.

        Args:
            product_id: Product identifier.

        Returns:
            StockInfo if tracked, None otherwise.

        Raises:
            StockClientError: On API error (except 404).
        """
        try:
            client = await self._get_client()
            response = await client.get(f"/stock/{product_id}")

            if response.status_code == 404:
                return None

            if response.status_code != 200:
                raise StockClientError(
                    f"Failed to get stock: {response.text}",
                    response.status_code,
                )

            data = response.json()
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            data.setdefault("product_id", str(product_id))
            return StockInfo.from_api_response(data)

        except httpx.RequestError as e:
            logger.error(
                "Inventory API request failed",
                product_id=str(product_id),
                error=str(e),
            )
            raise StockClientError(f"Request failed: {str(e)}") from e
        except (ValueError, TypeError) as e:
            # json decode errors are ValueError subclasses
            logger.error(
                "Inventory API returned malformed stock data",
                product_id=str(product_id),
                error=str(e),
            )
            raise StockClientError(f"Malformed stock response: {e}") from e
