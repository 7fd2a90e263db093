"""
Unit Tests - Query Parameter Parsing
"""
from datetime import datetime

import pytest

from src.engine.filters import FilterField, SortKey
from src.serving.api.params import build_sales_query, optional_int, split_multi


class TestHelpers:
    """Tests for parsing helpers"""

    @pytest.mark.parametrize("raw,expected", [
        (None, []),
        ("", []),
        ("North", ["North"]),
        (" North , East ,, ", ["North", "East"]),
    ])
    def test_split_multi(self, raw, expected):
        assert split_multi(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        (None, None),
        ("", None),
        ("abc", None),
        ("42", 42),
        ("-5", -5),
        ("30.7", 30),
    ])
    def test_optional_int(self, raw, expected):
        assert optional_int(raw) == expected


class TestBuildSalesQuery:
    """Tests for build_sales_query"""

    def test_defaults(self):
        query = build_sales_query()

        assert query.page == 1
        assert query.limit == 10
        assert query.spec.selections == {}
        assert query.spec.sort_key is None
        assert query.spec.search is None

    def test_selections(self):
        query = build_sales_query(customer_region="North,South", tags="organic", brand=" ")

        assert query.spec.selected(FilterField.CUSTOMER_REGION) == frozenset({"North", "South"})
        assert query.spec.selected(FilterField.TAGS) == frozenset({"organic"})
        assert FilterField.BRAND not in query.spec.selections

    def test_age_clamping(self):
        query = build_sales_query(age_min="-3", age_max="200")

        assert query.spec.age_min == 0
        assert query.spec.age_max == 150

    def test_unparseable_age_ignored(self):
        query = build_sales_query(age_min="young")
        assert query.spec.age_min is None

    def test_dates(self):
        query = build_sales_query(date_start="2023-01-01", date_end="garbage")

        assert query.spec.date_start == datetime(2023, 1, 1)
        assert query.spec.date_end is None

    def test_sort_and_search(self):
        query = build_sales_query(sort_by="customer_name", search="  jo  ")

        assert query.spec.sort_key is SortKey.CUSTOMER_NAME
        assert query.spec.search == "jo"

    @pytest.mark.parametrize("page,limit,expected", [
        ("0", "10", (1, 10)),
        ("x", "y", (1, 10)),
        ("2", "250", (2, 100)),
        ("4", "-1", (4, 1)),
    ])
    def test_paging(self, page, limit, expected):
        query = build_sales_query(page=page, limit=limit)
        assert (query.page, query.limit) == expected
