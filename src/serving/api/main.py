"""
FastAPI Application Factory

Creates and configures the API application: middleware, routers, and
exception handlers.
"""

from typing import Any, Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from src.config import get_settings
from src.serving.api.errors import register_exception_handlers
from src.serving.api.middleware import (
    RequestLoggingMiddleware,
    RateLimitMiddleware,
    SecurityHeadersMiddleware,
)
from src.serving.api.routes import (
    analytics_router,
    filters_router,
    health_router,
    sales_router,
)

settings = get_settings()


def create_api_app(lifespan: Optional[Callable[[FastAPI], Any]] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        lifespan: Optional lifespan context manager factory

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="Retail Sales Dashboard API",
        description="Search, filter, sort and summarize retail sales transactions",
        version=settings.version,
        debug=settings.debug,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        lifespan=lifespan,
    )

    # Add CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Add compression
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Custom middleware
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.security.rate_limit_requests,
        window_seconds=settings.security.rate_limit_window_seconds,
    )
    app.add_middleware(RequestLoggingMiddleware)

    # API routes
    prefix = settings.api_prefix
    app.include_router(health_router, prefix=prefix, tags=["Health"])
    app.include_router(sales_router, prefix=prefix, tags=["Sales"])
    app.include_router(filters_router, prefix=prefix, tags=["Filters"])
    app.include_router(analytics_router, prefix=prefix, tags=["Analytics"])

    register_exception_handlers(app)

    return app
