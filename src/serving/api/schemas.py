"""
API Response Models

Pydantic models for the JSON the dashboard consumes. Field names are
snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.engine.analytics import AnalyticsSummary
from src.engine.executor import PageResult
from src.engine.facets import FacetVocabulary
from src.engine.records import SalesRecord


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SaleOut(CamelModel):
    """One sales transaction"""
    customer_id: str
    customer_name: str
    phone_number: str
    gender: str
    age: int
    customer_region: str
    customer_type: str
    product_id: str
    product_name: str
    brand: str
    product_category: str
    tags: List[str]
    quantity: int
    price_per_unit: float
    discount_percentage: float
    total_amount: float
    final_amount: float
    date: datetime
    payment_method: str
    order_status: str
    delivery_type: str
    store_id: str
    store_location: str
    salesperson_id: str
    employee_name: str

    @field_validator("tags", mode="before")
    @classmethod
    def _sorted_tags(cls, value):
        return sorted(value)

    @classmethod
    def from_record(cls, record: SalesRecord) -> "SaleOut":
        return cls.model_validate(record)


class PaginationOut(CamelModel):
    current_page: int
    total_pages: int
    total_records: int
    has_next: bool
    has_prev: bool


class SalesPage(CamelModel):
    """Response for GET /sales"""
    data: List[SaleOut]
    pagination: PaginationOut

    @classmethod
    def from_result(cls, result: PageResult) -> "SalesPage":
        return cls(
            data=[SaleOut.from_record(record) for record in result.data],
            pagination=PaginationOut.model_validate(result.pagination),
        )


class AgeRangeOut(CamelModel):
    min: int
    max: int


class FilterOptions(CamelModel):
    """Response for GET /filters"""
    customer_region: List[str]
    gender: List[str]
    product_category: List[str]
    tags: List[str]
    payment_method: List[str]
    customer_type: List[str]
    order_status: List[str]
    brand: List[str]
    age_range: AgeRangeOut

    @classmethod
    def from_vocabulary(cls, vocabulary: FacetVocabulary) -> "FilterOptions":
        return cls.model_validate(vocabulary)


class AnalyticsOut(CamelModel):
    """Response for GET /analytics"""
    total_revenue: float
    total_orders: int
    avg_order_value: float
    top_categories: Dict[str, int]
    top_brands: Dict[str, int]
    region_stats: Dict[str, float]
    monthly_trends: Dict[str, float]

    @classmethod
    def from_summary(cls, summary: AnalyticsSummary) -> "AnalyticsOut":
        return cls.model_validate(summary)


class ErrorResponse(BaseModel):
    """Error envelope"""
    error: str
    message: Optional[str] = None
