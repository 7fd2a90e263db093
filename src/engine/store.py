"""
Record Store

Holds the snapshot of sales records every query, facet, and analytics
operation reads from. The snapshot is replaced wholesale on reload and is
never mutated in place, so concurrent readers need no coordination.
"""

from typing import Iterable, Iterator, Optional, Tuple

from src.engine.records import SalesRecord


class StoreNotReadyError(RuntimeError):
    """Raised when the store is read before any data has been loaded."""

    def __init__(self, message: str = "Record store not initialized. Load data before querying."):
        super().__init__(message)


class RecordStore:
    """
    In-memory, read-mostly collection of sales records.

    A store starts out "not ready", which is distinct from "loaded but empty".

    Example:
        store = RecordStore()
        store.replace(records)
        for record in store.records:
            ...
    """

    def __init__(self, records: Optional[Iterable[SalesRecord]] = None):
        self._records: Optional[Tuple[SalesRecord, ...]] = None
        if records is not None:
            self.replace(records)

    @property
    def is_ready(self) -> bool:
        """True once a snapshot has been loaded (even an empty one)"""
        return self._records is not None

    @property
    def records(self) -> Tuple[SalesRecord, ...]:
        """Current snapshot, in load order"""
        if self._records is None:
            raise StoreNotReadyError()
        return self._records

    def replace(self, records: Iterable[SalesRecord]) -> int:
        """Swap in a new snapshot; returns its size."""
        snapshot = tuple(records)
        self._records = snapshot
        return len(snapshot)

    def snapshot_or_empty(self) -> Tuple[SalesRecord, ...]:
        """Current snapshot, or an empty one when nothing is loaded yet"""
        return self._records if self._records is not None else ()

    def __len__(self) -> int:
        return len(self._records) if self._records is not None else 0

    def __iter__(self) -> Iterator[SalesRecord]:
        return iter(self.records)
