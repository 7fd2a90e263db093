"""
Filter Options Endpoint
"""

import hashlib

from fastapi import APIRouter, Depends, Request, Response

from src.engine.service import SalesDataService
from src.serving.api.dependencies import get_sales_service
from src.serving.api.schemas import FilterOptions

router = APIRouter()

CACHE_CONTROL = "public, max-age=300"


@router.get("/filters", response_model=FilterOptions)
async def get_filter_options(
    request: Request,
    response: Response,
    service: SalesDataService = Depends(get_sales_service),
):
    """Distinct values for every filter plus the observed age range"""
    options = FilterOptions.from_vocabulary(service.get_facets())
    etag = '"{}"'.format(
        hashlib.md5(options.model_dump_json(by_alias=True).encode()).hexdigest()
    )

    if request.headers.get("If-None-Match") == etag:
        return Response(status_code=304, headers={"ETag": etag, "Cache-Control": CACHE_CONTROL})

    response.headers["Cache-Control"] = CACHE_CONTROL
    response.headers["ETag"] = etag
    return options
