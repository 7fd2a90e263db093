"""
Unit Tests - Cache and Facet Derivation
"""
from datetime import timedelta

import pytest

from src.engine.facets import (
    DEFAULT_AGE_RANGE,
    FALLBACK_VOCABULARY,
    AgeRange,
    FacetDeriver,
    compute_facets,
)
from src.engine.filters import FilterField
from src.engine.store import RecordStore
from src.serving.cache import CacheManager


class TestCacheManager:
    """Tests for CacheManager"""

    def test_get_set(self, fake_clock):
        cache = CacheManager("test", default_ttl=60, clock=fake_clock)
        cache.set("k", {"a": 1})

        assert cache.get("k") == {"a": 1}
        assert "k" in cache

    def test_expiry(self, fake_clock):
        """Test entries vanish once their TTL elapses"""
        cache = CacheManager("test", default_ttl=60, clock=fake_clock)
        cache.set("k", "v")

        fake_clock.advance(59)
        assert cache.get("k") == "v"

        fake_clock.advance(1)
        assert cache.get("k") is None

    def test_per_entry_ttl(self, fake_clock):
        cache = CacheManager("test", default_ttl=60, clock=fake_clock)
        cache.set("short", 1, ttl=timedelta(seconds=5))
        cache.set("long", 2)

        fake_clock.advance(10)

        assert "short" not in cache
        assert cache.get("long") == 2

    def test_get_or_set_calls_factory_once(self, fake_clock):
        """Test a hit skips the factory"""
        cache = CacheManager("test", default_ttl=60, clock=fake_clock)
        calls = []

        def factory():
            calls.append(1)
            return len(calls)

        assert cache.get_or_set("k", factory) == 1
        assert cache.get_or_set("k", factory) == 1
        assert len(calls) == 1

    def test_delete_and_invalidate(self, fake_clock):
        cache = CacheManager("test", clock=fake_clock)
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.delete("a") is True
        assert cache.delete("a") is False
        assert cache.invalidate_all() == 1
        assert cache.get("b") is None

    def test_size_bounded(self, fake_clock):
        """Test the oldest entries are evicted past maxsize"""
        cache = CacheManager("test", clock=fake_clock, maxsize=2)
        for key in ("a", "b", "c"):
            cache.set(key, key)

        assert "a" not in cache
        assert cache.invalidate_all() == 2

    def test_expired_entries_not_counted(self, fake_clock):
        cache = CacheManager("test", default_ttl=10, clock=fake_clock)
        cache.set("old", 1)
        fake_clock.advance(5)
        cache.set("new", 2)
        fake_clock.advance(5)

        assert cache.invalidate_all() == 1

    def test_falsy_values_are_cached(self, fake_clock):
        """Test empty values still count as hits"""
        cache = CacheManager("test", clock=fake_clock)
        calls = []

        def factory():
            calls.append(1)
            return []

        cache.get_or_set("k", factory)
        cache.get_or_set("k", factory)

        assert len(calls) == 1


class TestComputeFacets:
    """Tests for compute_facets"""

    def test_sorted_and_distinct(self, generated_records):
        """Test every field is sorted and duplicate-free"""
        vocabulary = compute_facets(generated_records)

        for filter_field in FilterField:
            values = vocabulary.values_for(filter_field)
            assert list(values) == sorted(set(values))
            assert values

    def test_values_come_from_records(self, make_record):
        records = [
            make_record(customer_region="West", tags={"b", "a"}, brand="Zeta"),
            make_record(customer_region="East", tags={"a"}, brand="Alpha"),
            make_record(customer_region="West", tags=set(), brand=""),
        ]

        vocabulary = compute_facets(records)

        assert vocabulary.customer_region == ("East", "West")
        assert vocabulary.tags == ("a", "b")
        assert vocabulary.brand == ("Alpha", "Zeta")

    def test_age_range_ignores_unknown_ages(self, make_record):
        """Test ages of zero do not lower the minimum"""
        records = [make_record(age=0), make_record(age=22), make_record(age=61)]

        assert compute_facets(records).age_range == AgeRange(22, 61)

    def test_age_range_default_when_no_ages(self, make_record):
        assert compute_facets([make_record(age=0)]).age_range == AgeRange(*DEFAULT_AGE_RANGE)

    def test_empty_input_is_fallback(self):
        """Test no records yields the representative vocabulary"""
        vocabulary = compute_facets([])

        assert vocabulary is FALLBACK_VOCABULARY
        assert vocabulary.age_range == AgeRange(18, 65)
        assert "Electronics" in vocabulary.product_category


class TestFacetDeriver:
    """Tests for FacetDeriver caching"""

    @pytest.fixture
    def deriver(self, fake_clock):
        return FacetDeriver(CacheManager("facets", default_ttl=300, clock=fake_clock))

    def test_cached_within_ttl(self, deriver, fake_clock, make_record):
        """Test repeated calls inside the TTL return the cached object"""
        store = RecordStore([make_record(brand="One")])

        first = deriver.derive(store)
        store.replace([make_record(brand="Two")])
        fake_clock.advance(299)

        assert deriver.derive(store) is first
        assert first.brand == ("One",)

    def test_recomputed_after_ttl(self, deriver, fake_clock, make_record):
        store = RecordStore([make_record(brand="One")])
        deriver.derive(store)

        store.replace([make_record(brand="Two")])
        fake_clock.advance(300)

        assert deriver.derive(store).brand == ("Two",)

    def test_recomputed_after_invalidate(self, deriver, make_record):
        """Test invalidation forces a fresh derivation"""
        store = RecordStore([make_record(brand="One")])
        deriver.derive(store)

        store.replace([make_record(brand="Two")])
        deriver.invalidate()

        assert deriver.derive(store).brand == ("Two",)

    def test_not_ready_store_not_cached(self, deriver, make_record):
        """Test the fallback served before load is not pinned"""
        store = RecordStore()

        assert deriver.derive(store) is FALLBACK_VOCABULARY

        store.replace([make_record(brand="Loaded")])
        assert deriver.derive(store).brand == ("Loaded",)

    def test_loaded_empty_store_gets_fallback(self, deriver):
        assert deriver.derive(RecordStore([])) is FALLBACK_VOCABULARY
