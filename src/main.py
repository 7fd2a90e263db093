"""
FastAPI Production Application

Main entry point for the Retail Sales Dashboard API.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
import structlog

from src.config import get_settings
from src.config.logging import configure_logging
from src.database.connection import init_database, close_database
from src.engine.service import SalesDataService, SalesLoader
from src.ingestion.loaders import build_loader
from src.serving.api.main import create_api_app
from src.serving.cache import CacheManager

settings = get_settings()
logger = structlog.get_logger(__name__)


def create_app(
    loader: Optional[SalesLoader] = None,
    service: Optional[SalesDataService] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        loader: Record source; defaults to the configured backend
        service: Pre-built service, e.g. one already loaded in tests

    Returns:
        FastAPI app that loads its record store on startup
    """
    sales_service = service or SalesDataService(
        facet_cache=CacheManager("facets", default_ttl=settings.query.facet_cache_ttl_seconds),
    )
    uses_database = loader is None and settings.data_source.backend == "database"

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        configure_logging()

        logger.info(
            "Starting Retail Sales Dashboard API",
            environment=settings.app_env,
            backend=loader.name if loader else settings.data_source.backend,
        )

        if uses_database:
            await init_database()

        try:
            await sales_service.reload(loader or build_loader(settings))
        except Exception:
            if uses_database:
                await close_database()
            raise

        yield

        # Cleanup
        logger.info("Shutting down...")
        if uses_database:
            await close_database()

    app = create_api_app(lifespan=lifespan)
    app.state.sales_service = sales_service

    @app.get("/")
    async def api_info(request: Request):
        """API information endpoint."""
        service: SalesDataService = request.app.state.sales_service
        return {
            "name": "Retail Sales Dashboard API",
            "version": settings.version,
            "environment": settings.app_env,
            "dataSource": service.data_source,
            "endpoints": {
                "sales": f"{settings.api_prefix}/sales",
                "filters": f"{settings.api_prefix}/filters",
                "analytics": f"{settings.api_prefix}/analytics",
                "health": f"{settings.api_prefix}/health",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
