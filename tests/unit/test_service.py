"""
Unit Tests - Sales Data Service
"""
import pytest

from src.engine.filters import FilterSpec, SortKey
from src.engine.service import SalesDataService, SalesLoader
from src.engine.store import StoreNotReadyError
from src.ingestion.loaders import InMemorySalesLoader
from src.serving.cache import CacheManager


class FailingLoader:
    name = "broken"

    async def load_all(self):
        raise OSError("disk on fire")


class TestSalesDataService:
    """Tests for SalesDataService"""

    def test_query_before_load(self):
        """Test querying an unloaded service is a distinct failure"""
        service = SalesDataService()

        assert service.is_ready is False
        with pytest.raises(StoreNotReadyError):
            service.query(FilterSpec())

    def test_facets_and_analytics_before_load(self):
        service = SalesDataService()

        assert service.get_facets().age_range.min == 18
        assert service.get_analytics() is None

    async def test_reload(self, make_record):
        """Test reload swaps data in and records the source"""
        service = SalesDataService()
        loader = InMemorySalesLoader([make_record(customer_id="A"), make_record(customer_id="B")])

        count = await service.reload(loader)

        assert count == 2
        assert service.is_ready
        assert service.data_source == "memory"
        assert service.loaded_at is not None
        assert service.query(FilterSpec()).pagination.total_records == 2

    async def test_reload_invalidates_facets(self, make_record, fake_clock):
        """Test facets reflect new data immediately after reload"""
        service = SalesDataService(facet_cache=CacheManager("facets", default_ttl=300, clock=fake_clock))
        await service.reload(InMemorySalesLoader([make_record(brand="Old")]))
        assert service.get_facets().brand == ("Old",)

        await service.reload(InMemorySalesLoader([make_record(brand="New")]))

        assert service.get_facets().brand == ("New",)

    async def test_failed_reload_keeps_snapshot(self, make_record):
        """Test a loader error propagates and leaves data untouched"""
        service = SalesDataService()
        await service.reload(InMemorySalesLoader([make_record()]))

        with pytest.raises(OSError):
            await service.reload(FailingLoader())

        assert len(service.store) == 1
        assert service.data_source == "memory"

    async def test_query_paging(self, generated_records):
        service = SalesDataService()
        await service.reload(InMemorySalesLoader(generated_records))

        page = service.query(FilterSpec(sort_key=SortKey.QUANTITY), page=2, page_size=25)

        assert page.pagination.current_page == 2
        assert len(page.data) == 25
        assert page.pagination.has_prev is True

    def test_loaders_satisfy_protocol(self):
        assert isinstance(InMemorySalesLoader([]), SalesLoader)
        assert isinstance(FailingLoader(), SalesLoader)
