"""Storefront API main application module.

This module builds the FastAPI application and configures core
middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.api.cart import router as cart_router
from storefront.api.catalog import router as catalog_router
from storefront.api.checkout import router as checkout_router
from storefront.api.health import router as health_router
from storefront.api.middleware import setup_middleware
from storefront.api.orders import router as orders_router
from storefront.api.wishlist import router as wishlist_router
from storefront.application.catalog_service import CatalogService
from storefront.application.session_service import SessionRegistry
from storefront.catalog.repository import CatalogSource, InMemoryCatalog
from storefront.catalog.stock import HttpStockSource, StockSource
from storefront.domain.exceptions import (
    CartError,
    CheckoutError,
    DomainError,
    EmptyCartError,
    InvalidStateTransitionError,
    MoneyError,
)
from storefront.infrastructure.collation import apply_collation_locale
from storefront.infrastructure.config import Settings, settings
from storefront.infrastructure.logging_setup import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    cfg: Settings = app.state.settings
    configure_logging(cfg.log_level, cfg.log_json)
    apply_collation_locale(cfg.collation_locale)
    logger.info(
        "Starting storefront API",
        version=cfg.api_version,
        debug=cfg.debug,
        products=len(app.state.catalog_service.catalog.list_products()),
        max_quantity=cfg.max_quantity_per_line,
    )

    yield

    stock_source = app.state.catalog_service.stock_source
    if isinstance(stock_source, HttpStockSource):
        await stock_source.close()
    logger.info("Shutting down storefront API")


def _error_body(
    request: Request, error_code: str, message: str, details: list | None = None
) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details or [],
        "request_id": getattr(request.state, "request_id", None),
    }


def _domain_error_status(exc: DomainError) -> int:
    if isinstance(exc, (InvalidStateTransitionError, EmptyCartError)):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, (CartError, CheckoutError, MoneyError)):
        return 422
    return status.HTTP_400_BAD_REQUEST


def create_app(
    app_settings: Settings | None = None,
    catalog: CatalogSource | None = None,
    stock_source: StockSource | None = None,
) -> FastAPI:
    """Build the storefront application.

    Each app owns its own session registry, so separate apps (and tests)
    never share carts.

    Args:
        app_settings: Settings to use, defaults to the environment settings.
        catalog: Catalog source, defaults to the seeded in-memory catalog.
        stock_source: Stock source, defaults to the HTTP inventory client.

    Returns:
        Configured FastAPI application.
    """
    cfg = app_settings or settings
    if catalog is None:
        catalog = InMemoryCatalog.with_seed_data(cfg.currency)
    if stock_source is None:
        stock_source = HttpStockSource(cfg.inventory_url, timeout=cfg.stock_timeout_seconds)

    app = FastAPI(
        title="Storefront API",
        description="Cart, wishlist and checkout engine for the storefront",
        version=cfg.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = cfg
    app.state.catalog_service = CatalogService(catalog, stock_source)
    app.state.sessions = SessionRegistry(
        catalog,
        max_quantity=cfg.max_quantity_per_line,
        currency=cfg.currency,
    )

    # CORS middleware (must be added before custom middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup custom middleware (request ID, error handling)
    setup_middleware(app)

    # Include routers
    app.include_router(health_router, tags=["Health"])
    app.include_router(catalog_router)
    app.include_router(cart_router)
    app.include_router(wishlist_router)
    app.include_router(checkout_router)
    app.include_router(orders_router)

    # ========================================================================
    # Custom Exception Handlers
    # ========================================================================

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent format."""
        detail = exc.detail
        if isinstance(detail, dict):
            error_code = detail.get("error_code", "ERROR")
            message = detail.get("message", str(detail))
            details = detail.get("details", [])
        else:
            error_code = "ERROR"
            message = str(detail)
            details = []

        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, error_code, message, details),
        )

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        """Handle domain errors that escaped the application services."""
        logger.warning(
            "Domain error in handler",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=exc.message,
        )
        details = [{"field": key, "message": str(value)} for key, value in exc.details.items()]
        return JSONResponse(
            status_code=_domain_error_status(exc),
            content=_error_body(request, "DOMAIN_ERROR", exc.message, details),
        )

    return app


app = create_app()
