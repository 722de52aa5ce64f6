"""Tests for health check endpoints."""

from fastapi import status
from fastapi.testclient import TestClient

from storefront.catalog.repository import InMemoryCatalog
from storefront.catalog.stock import InMemoryStockSource
from storefront.main import create_app


def make_client(catalog: InMemoryCatalog) -> TestClient:
    return TestClient(create_app(catalog=catalog, stock_source=InMemoryStockSource()))


def test_health_check() -> None:
    """Test health endpoint returns healthy status."""
    response = make_client(InMemoryCatalog.with_seed_data()).get("/health")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "storefront"
    assert "version" in data


def test_readiness_check() -> None:
    """Test readiness endpoint reports catalog and session counts."""
    client = make_client(InMemoryCatalog.with_seed_data())
    client.get("/cart", headers={"X-Session-ID": "alice"})

    response = client.get("/ready")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ready", "products": 13, "sessions": 1}


def test_readiness_empty_catalog() -> None:
    """An empty catalog is reported."""
    response = make_client(InMemoryCatalog()).get("/ready")
    assert response.json()["status"] == "empty_catalog"
