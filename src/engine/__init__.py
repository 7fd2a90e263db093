"""
Query Engine Module
"""
from .records import SalesRecord
from .store import RecordStore, StoreNotReadyError
from .filters import FilterField, FilterSpec, Predicate, PredicateBuilder, SortKey
from .executor import PageResult, Pagination, QueryExecutor
from .facets import FacetDeriver, FacetVocabulary
from .analytics import AggregateEngine, AnalyticsSummary
from .service import SalesDataService, SalesLoader

__all__ = [
    "SalesRecord",
    "RecordStore",
    "StoreNotReadyError",
    "FilterField",
    "FilterSpec",
    "Predicate",
    "PredicateBuilder",
    "SortKey",
    "PageResult",
    "Pagination",
    "QueryExecutor",
    "FacetDeriver",
    "FacetVocabulary",
    "AggregateEngine",
    "AnalyticsSummary",
    "SalesDataService",
    "SalesLoader",
]
