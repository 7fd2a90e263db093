"""
Sales API Endpoints

Filtered, sorted, paginated access to sales transactions.
"""

from fastapi import APIRouter, Depends
import structlog

from src.engine.service import SalesDataService
from src.serving.api.dependencies import get_sales_service
from src.serving.api.params import SalesQuery, sales_query_params
from src.serving.api.schemas import SalesPage

router = APIRouter()
logger = structlog.get_logger(__name__)


@router.get("/sales", response_model=SalesPage)
async def get_sales(
    query: SalesQuery = Depends(sales_query_params),
    service: SalesDataService = Depends(get_sales_service),
) -> SalesPage:
    """
    Query sales transactions.

    Multi-select filters take comma-separated values. Invalid paging
    values fall back to defaults and are clamped.
    """
    result = service.query(query.spec, page=query.page, page_size=query.limit)

    logger.debug(
        "Sales query completed",
        filters=sorted(field.value for field in query.spec.selections),
        sort=query.spec.sort_key.value if query.spec.sort_key else None,
        page=query.page,
        total=result.pagination.total_records,
    )
    return SalesPage.from_result(result)
