"""
Analytics API Endpoint

Dashboard summary over the whole dataset.
"""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
import structlog

from src.engine.service import SalesDataService
from src.serving.api.dependencies import get_sales_service
from src.serving.api.schemas import AnalyticsOut, ErrorResponse

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get(
    "/analytics",
    response_model=AnalyticsOut,
    responses={404: {"model": ErrorResponse}},
)
async def get_analytics(
    response: Response,
    service: SalesDataService = Depends(get_sales_service),
):
    """Revenue totals, top categories and brands, region and monthly revenue"""
    summary = service.get_analytics()
    if summary is None:
        logger.info("Analytics requested with no data")
        return JSONResponse(status_code=404, content={"error": "No data available for analytics"})

    response.headers["Cache-Control"] = "public, max-age=600"
    return AnalyticsOut.from_summary(summary)
