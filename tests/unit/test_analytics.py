"""
Unit Tests - Aggregate Engine
"""
from datetime import datetime

import pytest

from src.engine.analytics import AggregateEngine, compute_analytics
from src.engine.store import RecordStore


class TestComputeAnalytics:
    """Tests for compute_analytics"""

    def test_totals(self, make_record):
        records = [
            make_record(final_amount=100.0, product_category="Beauty", brand="A", customer_region="North",
                        date=datetime(2023, 1, 5)),
            make_record(final_amount=50.0, product_category="Beauty", brand="B", customer_region="South",
                        date=datetime(2023, 1, 20)),
            make_record(final_amount=25.5, product_category="Clothing", brand="A", customer_region="North",
                        date=datetime(2023, 2, 1)),
        ]

        summary = compute_analytics(records)

        assert summary.total_orders == 3
        assert summary.total_revenue == pytest.approx(175.5)
        assert summary.avg_order_value == pytest.approx(58.5)
        assert summary.top_categories == {"Beauty": 2, "Clothing": 1}
        assert summary.top_brands == {"A": 2, "B": 1}
        assert summary.region_stats == {"North": pytest.approx(125.5), "South": pytest.approx(50.0)}
        assert summary.monthly_trends == {"2023-01": pytest.approx(150.0), "2023-02": pytest.approx(25.5)}

    def test_breakdown_ordering(self, make_record):
        """Test counts and region revenue descend, months ascend"""
        records = [
            make_record(final_amount=10.0, customer_region="East", product_category="X", date=datetime(2023, 5, 1)),
            make_record(final_amount=90.0, customer_region="West", product_category="Y", date=datetime(2022, 3, 1)),
            make_record(final_amount=5.0, customer_region="West", product_category="Y", date=datetime(2023, 1, 1)),
        ]

        summary = compute_analytics(records)

        assert list(summary.top_categories) == ["Y", "X"]
        assert list(summary.region_stats) == ["West", "East"]
        assert list(summary.monthly_trends) == ["2022-03", "2023-01", "2023-05"]

    def test_sums_match_totals(self, generated_records):
        """Test breakdowns add up to the headline numbers"""
        summary = compute_analytics(generated_records)

        assert sum(summary.top_categories.values()) == summary.total_orders
        assert sum(summary.top_brands.values()) == summary.total_orders
        assert sum(summary.region_stats.values()) == pytest.approx(summary.total_revenue)
        assert sum(summary.monthly_trends.values()) == pytest.approx(summary.total_revenue)

    def test_empty_is_no_data(self):
        """Test no records yields None rather than zeros"""
        assert compute_analytics([]) is None


class TestAggregateEngine:
    """Tests for AggregateEngine"""

    def test_not_ready_store_is_no_data(self):
        assert AggregateEngine().compute(RecordStore()) is None

    def test_loaded_empty_store_is_no_data(self):
        assert AggregateEngine().compute(RecordStore([])) is None

    def test_recomputed_each_call(self, make_record):
        store = RecordStore([make_record(final_amount=10.0)])
        engine = AggregateEngine()

        assert engine.compute(store).total_revenue == pytest.approx(10.0)

        store.replace([make_record(final_amount=10.0), make_record(final_amount=5.0)])
        assert engine.compute(store).total_revenue == pytest.approx(15.0)
