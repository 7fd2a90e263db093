"""
Query Executor

Filter, sort, and paginate a record store. Results are never cached and the
store is never mutated.
"""

import math
import unicodedata
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from src.engine.filters import Predicate, SortKey
from src.engine.records import SalesRecord
from src.engine.store import RecordStore


MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata for a page"""
    current_page: int
    total_pages: int
    total_records: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class PageResult:
    """One page of an ordered, filtered result set"""
    data: List[SalesRecord] = field(default_factory=list)
    pagination: Pagination = field(default_factory=lambda: Pagination(1, 0, 0, False, False))


def clamp_paging(page: Optional[int], page_size: Optional[int]) -> Tuple[int, int]:
    """Clamp page to >= 1 and page size to [1, 100]."""
    page = 1 if page is None else max(1, int(page))
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE
    page_size = min(MAX_PAGE_SIZE, max(MIN_PAGE_SIZE, int(page_size)))
    return page, page_size


def collation_key(text: str) -> Tuple[str, str]:
    """
    Locale-style sort key: accents and case are ignored at the primary
    level, the raw string breaks ties.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


# key function, descending?
_SORTS: Dict[SortKey, Tuple[Callable[[SalesRecord], object], bool]] = {
    SortKey.DATE_DESC: (lambda r: r.date, True),
    SortKey.QUANTITY: (lambda r: r.quantity, True),
    SortKey.CUSTOMER_NAME: (lambda r: collation_key(r.customer_name), False),
    SortKey.AMOUNT_DESC: (lambda r: r.final_amount, True),
}


def sort_records(records: Sequence[SalesRecord], sort_key: Optional[SortKey]) -> List[SalesRecord]:
    """Stable sort; no key keeps the incoming order."""
    if sort_key is None or sort_key not in _SORTS:
        return list(records)
    key, descending = _SORTS[sort_key]
    return sorted(records, key=key, reverse=descending)


def filter_records(records: Sequence[SalesRecord], predicates: Sequence[Predicate]) -> List[SalesRecord]:
    """Single pass; all() stops at the first failing predicate."""
    if not predicates:
        return list(records)
    return [record for record in records if all(p(record) for p in predicates)]


def paginate(records: Sequence[SalesRecord], page: int, page_size: int) -> PageResult:
    """Slice one page out of an already ordered sequence."""
    total = len(records)
    total_pages = math.ceil(total / page_size)
    start = (page - 1) * page_size
    return PageResult(
        data=list(records[start:start + page_size]),
        pagination=Pagination(
            current_page=page,
            total_pages=total_pages,
            total_records=total,
            has_next=page < total_pages,
            has_prev=page > 1,
        ),
    )


class QueryExecutor:
    """
    Runs a compiled query against a store.

    Example:
        executor = QueryExecutor()
        result = executor.execute(store, predicates, SortKey.DATE_DESC, page=2, page_size=20)
    """

    def execute(
        self,
        store: RecordStore,
        predicates: Sequence[Predicate],
        sort_key: Optional[SortKey] = None,
        page: Optional[int] = 1,
        page_size: Optional[int] = DEFAULT_PAGE_SIZE,
    ) -> PageResult:
        page, page_size = clamp_paging(page, page_size)
        filtered = filter_records(store.records, predicates)
        ordered = sort_records(filtered, sort_key)
        return paginate(ordered, page, page_size)
