"""Shared API dependencies and error conversion."""

from typing import Annotated, Any

from fastapi import Depends, Header, HTTPException, Request, status

from storefront.application.catalog_service import CatalogService
from storefront.application.session_service import SessionRegistry, ShoppingSession
from storefront.infrastructure.config import Settings

# Result error codes to HTTP status
ERROR_STATUS: dict[str, int] = {
    "PRODUCT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "NOT_IN_CART": status.HTTP_404_NOT_FOUND,
    "NOT_IN_WISHLIST": status.HTTP_404_NOT_FOUND,
    "INVALID_QUANTITY": 422,
    "QUANTITY_LIMIT_EXCEEDED": 422,
    "CURRENCY_MISMATCH": 422,
    "VALIDATION_FAILED": 422,
    "EMPTY_CART": status.HTTP_409_CONFLICT,
    "INVALID_STATE_TRANSITION": status.HTTP_409_CONFLICT,
    "STOCK_UNAVAILABLE": status.HTTP_502_BAD_GATEWAY,
}


def result_error(
    error_code: str | None,
    message: str | None,
    details: list[dict[str, Any]] | None = None,
) -> HTTPException:
    """Build the HTTPException for a failed service result.

    Args:
        error_code: Result error code.
        message: Result error message.
        details: Optional error details (``field`` / ``message`` pairs).

    Returns:
        Exception to raise from the handler.
    """
    code = error_code or "ERROR"
    return HTTPException(
        status_code=ERROR_STATUS.get(code, status.HTTP_400_BAD_REQUEST),
        detail={
            "error_code": code,
            "message": message or "Request failed",
            "details": details or [],
        },
    )


def get_registry(request: Request) -> SessionRegistry:
    """Get the session registry of the running app."""
    return request.app.state.sessions


def get_settings(request: Request) -> Settings:
    """Get the settings the running app was built with."""
    return request.app.state.settings


def get_session(
    registry: Annotated[SessionRegistry, Depends(get_registry)],
    app_settings: Annotated[Settings, Depends(get_settings)],
    x_session_id: Annotated[str | None, Header()] = None,
) -> ShoppingSession:
    """Get the shopping session named by the ``X-Session-ID`` header.

    Requests without the header share the configured default session.
    """
    return registry.get_or_create(x_session_id or app_settings.default_session_id)


def get_catalog_service(request: Request) -> CatalogService:
    """Get the catalog service of the running app."""
    return request.app.state.catalog_service


SessionDep = Annotated[ShoppingSession, Depends(get_session)]
CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
