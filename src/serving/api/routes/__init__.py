"""
API Routes Module
"""
from .health import router as health_router
from .sales import router as sales_router
from .filters import router as filters_router
from .analytics import router as analytics_router

__all__ = [
    "health_router",
    "sales_router",
    "filters_router",
    "analytics_router",
]
