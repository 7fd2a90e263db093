"""
Sales Data Service

Facade over the query engine exposing the operations the HTTP layer calls:
query, get_facets, get_analytics, invalidate_facet_cache, and reload.
"""

import time
from typing import Optional, Protocol, Sequence, runtime_checkable

import structlog

from src.engine.analytics import AggregateEngine, AnalyticsSummary
from src.engine.executor import DEFAULT_PAGE_SIZE, PageResult, QueryExecutor
from src.engine.facets import FacetDeriver, FacetVocabulary
from src.engine.filters import FilterSpec, PredicateBuilder
from src.engine.records import SalesRecord
from src.engine.store import RecordStore
from src.serving.cache import CacheManager

logger = structlog.get_logger(__name__)


@runtime_checkable
class SalesLoader(Protocol):
    """Anything that can produce the full record collection"""

    name: str

    async def load_all(self) -> Sequence[SalesRecord]:
        ...


class SalesDataService:
    """
    Owns one record store and the engines that read it.

    Example:
        service = SalesDataService()
        await service.reload(CsvSalesLoader("data/sales_data.csv"))
        page = service.query(FilterSpec.build(gender=["Female"]), page=1, page_size=20)
    """

    def __init__(
        self,
        store: Optional[RecordStore] = None,
        facet_cache: Optional[CacheManager] = None,
    ):
        self.store = store or RecordStore()
        self.predicate_builder = PredicateBuilder()
        self.executor = QueryExecutor()
        self.facet_deriver = FacetDeriver(facet_cache)
        self.aggregate_engine = AggregateEngine()
        self.data_source: Optional[str] = None
        self.loaded_at: Optional[float] = None

    @property
    def is_ready(self) -> bool:
        return self.store.is_ready

    def query(
        self,
        spec: FilterSpec,
        page: Optional[int] = 1,
        page_size: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> PageResult:
        """
        Filter, sort, and page the store.

        Raises:
            StoreNotReadyError: If no data has been loaded yet
        """
        predicates = self.predicate_builder.build(spec)
        return self.executor.execute(self.store, predicates, spec.sort_key, page, page_size)

    def get_facets(self) -> FacetVocabulary:
        return self.facet_deriver.derive(self.store)

    def get_analytics(self) -> Optional[AnalyticsSummary]:
        return self.aggregate_engine.compute(self.store)

    def invalidate_facet_cache(self) -> None:
        self.facet_deriver.invalidate()
        logger.debug("Facet cache invalidated")

    async def reload(self, loader: SalesLoader) -> int:
        """
        Load all records from a loader and swap them in.

        The previous snapshot stays in place if the loader fails.

        Returns:
            Number of records now in the store
        """
        start = time.perf_counter()
        try:
            records = await loader.load_all()
        except Exception as e:
            logger.error("Record load failed", source=loader.name, error=str(e))
            raise

        count = self.store.replace(records)
        self.invalidate_facet_cache()
        self.data_source = loader.name
        self.loaded_at = time.time()

        logger.info(
            "Record store loaded",
            source=loader.name,
            records=count,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )
        return count
