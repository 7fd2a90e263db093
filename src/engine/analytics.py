"""
Aggregate Engine

Summary analytics over the whole store in a single pass: revenue totals,
order count, average order value, category/brand order counts, revenue by
region, and revenue by calendar month.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from src.engine.records import SalesRecord
from src.engine.store import RecordStore


@dataclass(frozen=True)
class AnalyticsSummary:
    """Dashboard summary; breakdowns are ordered for display"""
    total_revenue: float
    total_orders: int
    avg_order_value: float
    top_categories: Dict[str, int] = field(default_factory=dict)
    top_brands: Dict[str, int] = field(default_factory=dict)
    region_stats: Dict[str, float] = field(default_factory=dict)
    monthly_trends: Dict[str, float] = field(default_factory=dict)


def _descending(totals: Dict[str, float]) -> Dict[str, float]:
    # sorted() is stable, so ties keep first-seen order
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def compute_analytics(records: Iterable[SalesRecord]) -> Optional[AnalyticsSummary]:
    """Summarize records; None when there are none."""
    total_revenue = 0.0
    total_orders = 0
    categories: Counter = Counter()
    brands: Counter = Counter()
    regions: Dict[str, float] = defaultdict(float)
    months: Dict[str, float] = defaultdict(float)

    for record in records:
        total_orders += 1
        total_revenue += record.final_amount
        categories[record.product_category] += 1
        brands[record.brand] += 1
        regions[record.customer_region] += record.final_amount
        months[record.month] += record.final_amount

    if total_orders == 0:
        return None

    return AnalyticsSummary(
        total_revenue=total_revenue,
        total_orders=total_orders,
        avg_order_value=total_revenue / total_orders,
        top_categories=dict(categories.most_common()),
        top_brands=dict(brands.most_common()),
        region_stats=_descending(regions),
        monthly_trends=dict(sorted(months.items())),
    )


class AggregateEngine:
    """Recomputes the summary on every call; nothing is cached."""

    def compute(self, store: RecordStore) -> Optional[AnalyticsSummary]:
        return compute_analytics(store.snapshot_or_empty())
