"""
Health Check Endpoints

Provides health and readiness checks for orchestration systems.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from src.config import get_settings
from src.database.connection import check_database_health
from src.engine.service import SalesDataService
from src.serving.api.dependencies import get_sales_service

settings = get_settings()
router = APIRouter()

_STARTED_AT = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    environment: str
    timestamp: datetime
    uptime_seconds: float
    data_source: Optional[str]
    records: int
    checks: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: SalesDataService = Depends(get_sales_service),
) -> HealthResponse:
    """
    Comprehensive health check endpoint.

    Checks:
    - Record store loaded
    - Database connectivity (database backend only)
    """
    checks: Dict[str, Any] = {
        "store": {"status": "healthy" if service.is_ready else "loading"},
    }
    overall_status = "healthy" if service.is_ready else "degraded"

    if settings.data_source.backend == "database":
        db_health = await check_database_health()
        checks["database"] = db_health
        if db_health.get("status") != "healthy":
            overall_status = "degraded"

    return HealthResponse(
        status=overall_status,
        version=settings.version,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
        uptime_seconds=round(time.monotonic() - _STARTED_AT, 3),
        data_source=service.data_source,
        records=len(service.store),
        checks=checks,
    )


@router.get("/health/live")
async def liveness_check() -> Dict[str, str]:
    """
    Kubernetes liveness probe endpoint.

    Returns 200 if the application is running.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_check(
    response: Response,
    service: SalesDataService = Depends(get_sales_service),
) -> Dict[str, str]:
    """
    Kubernetes readiness probe endpoint.

    Returns 200 once the record store has been loaded.
    """
    if not service.is_ready:
        response.status_code = 503
        return {"status": "not_ready", "reason": "data_not_loaded"}
    return {"status": "ready"}
