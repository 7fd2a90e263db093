"""
Exception Handlers

Maps exceptions to JSON error envelopes.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from src.config import get_settings
from src.engine.store import StoreNotReadyError

settings = get_settings()
logger = structlog.get_logger(__name__)


async def store_not_ready_handler(request: Request, exc: StoreNotReadyError) -> JSONResponse:
    logger.warning("Request before data load", path=request.url.path)
    return JSONResponse(
        status_code=503,
        content={"error": "Service unavailable", "message": str(exc)},
        headers={"Retry-After": "5"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404 and exc.detail == "Not Found":
        return JSONResponse(
            status_code=404,
            content={
                "error": "Route not found",
                "path": request.url.path,
                "method": request.method,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Something went wrong!",
            "message": "Internal server error" if settings.is_production else str(exc),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreNotReadyError, store_not_ready_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
