"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    products: int
    sessions: int


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="storefront",
        version=request.app.state.settings.api_version,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status with catalog and session counts.
    """
    products = len(request.app.state.catalog_service.catalog.list_products())
    return ReadinessResponse(
        status="ready" if products > 0 else "empty_catalog",
        products=products,
        sessions=len(request.app.state.sessions),
    )
