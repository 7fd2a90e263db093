"""
Query Parameter Parsing

Turns raw /sales query-string values into a FilterSpec plus paging values.
Malformed input is normalized (defaulted or clamped), never rejected.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from fastapi import Query

from src.config import get_settings
from src.engine.executor import clamp_paging
from src.engine.filters import FilterSpec, SortKey
from src.engine.records import parse_datetime, parse_float, parse_int

settings = get_settings()

AGE_PARAM_MIN = 0
AGE_PARAM_MAX = 150


@dataclass(frozen=True)
class SalesQuery:
    """Parsed /sales request"""
    spec: FilterSpec
    page: int
    limit: int


def split_multi(value: Optional[str]) -> List[str]:
    """Comma-separated multi-select value -> trimmed, non-empty entries"""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def optional_int(value: Optional[str]) -> Optional[int]:
    """Integer part of a numeric string; None when absent or unparseable"""
    number = parse_float(value, default=math.nan) if value else math.nan
    return None if math.isnan(number) else int(number)


def optional_datetime(value: Optional[str]) -> Optional[datetime]:
    return parse_datetime(value, default=None) if value else None


def build_sales_query(
    search: Optional[str] = None,
    customer_region: Optional[str] = None,
    gender: Optional[str] = None,
    age_min: Optional[str] = None,
    age_max: Optional[str] = None,
    product_category: Optional[str] = None,
    tags: Optional[str] = None,
    payment_method: Optional[str] = None,
    date_start: Optional[str] = None,
    date_end: Optional[str] = None,
    customer_type: Optional[str] = None,
    order_status: Optional[str] = None,
    brand: Optional[str] = None,
    sort_by: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> SalesQuery:
    """Normalize raw parameter strings into a SalesQuery"""
    minimum = optional_int(age_min)
    maximum = optional_int(age_max)

    spec = FilterSpec.build(
        search=search.strip() if search and search.strip() else None,
        age_min=max(AGE_PARAM_MIN, minimum) if minimum is not None else None,
        age_max=min(AGE_PARAM_MAX, maximum) if maximum is not None else None,
        date_start=optional_datetime(date_start),
        date_end=optional_datetime(date_end),
        sort_key=SortKey.parse(sort_by),
        customer_region=split_multi(customer_region),
        gender=split_multi(gender),
        product_category=split_multi(product_category),
        tags=split_multi(tags),
        payment_method=split_multi(payment_method),
        customer_type=split_multi(customer_type),
        order_status=split_multi(order_status),
        brand=split_multi(brand),
    )

    page_number, page_size = clamp_paging(
        parse_int(page, default=1),
        parse_int(limit, default=settings.query.default_page_size),
    )
    return SalesQuery(spec=spec, page=page_number, limit=page_size)


def sales_query_params(
    search: Optional[str] = Query(None, description="Customer name or phone number"),
    customer_region: Optional[str] = Query(None, alias="customerRegion"),
    gender: Optional[str] = Query(None),
    age_min: Optional[str] = Query(None, alias="ageMin"),
    age_max: Optional[str] = Query(None, alias="ageMax"),
    product_category: Optional[str] = Query(None, alias="productCategory"),
    tags: Optional[str] = Query(None),
    payment_method: Optional[str] = Query(None, alias="paymentMethod"),
    date_start: Optional[str] = Query(None, alias="dateStart"),
    date_end: Optional[str] = Query(None, alias="dateEnd"),
    customer_type: Optional[str] = Query(None, alias="customerType"),
    order_status: Optional[str] = Query(None, alias="orderStatus"),
    brand: Optional[str] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="date_desc, quantity, customer_name, amount_desc"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
) -> SalesQuery:
    """FastAPI dependency; multi-select values are comma-separated"""
    return build_sales_query(
        search=search,
        customer_region=customer_region,
        gender=gender,
        age_min=age_min,
        age_max=age_max,
        product_category=product_category,
        tags=tags,
        payment_method=payment_method,
        date_start=date_start,
        date_end=date_end,
        customer_type=customer_type,
        order_status=order_status,
        brand=brand,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )
