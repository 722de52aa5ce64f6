"""Shared fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from storefront.catalog.repository import InMemoryCatalog
from storefront.catalog.stock import InMemoryStockSource
from storefront.main import create_app


@pytest.fixture
def stock() -> InMemoryStockSource:
    source = InMemoryStockSource()
    source.set_level("7", 2, min_threshold=5)
    source.set_level("8", 0)
    source.set_level("1", 40, min_threshold=5)
    return source


@pytest.fixture
def client(stock) -> TestClient:
    """Create test client for a fresh app with its own sessions."""
    app = create_app(catalog=InMemoryCatalog.with_seed_data(), stock_source=stock)
    return TestClient(app)


@pytest.fixture
def checkout_form() -> dict[str, str]:
    """A valid checkout form."""
    return {
        "first_name": "Ana",
        "last_name": "Reyes",
        "email": "ana@example.com",
        "phone": "0917-123-4567",
        "address": "12 Rizal St",
        "city": "Manila",
        "zip_code": "1000",
        "country": "PH",
    }
