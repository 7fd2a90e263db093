"""
Loader Selection

Picks the record source from configuration. The query engine only ever sees
the resulting records, so switching backends needs no engine change.
"""

from typing import Iterable, Optional, Sequence

from src.config.settings import Settings, get_settings
from src.engine.records import SalesRecord
from src.engine.service import SalesLoader
from src.ingestion.batch_loader import CsvSalesLoader
from src.ingestion.db_loader import DatabaseSalesLoader


class InMemorySalesLoader:
    """Serves a fixed collection; used for embedding and tests"""

    name = "memory"

    def __init__(self, records: Iterable[SalesRecord]):
        self._records = tuple(records)

    async def load_all(self) -> Sequence[SalesRecord]:
        return self._records


def build_loader(settings: Optional[Settings] = None) -> SalesLoader:
    """
    Create the loader for the configured backend.

    The database loader expects init_database() to have been called.
    """
    settings = settings or get_settings()
    if settings.data_source.backend == "database":
        return DatabaseSalesLoader()
    return CsvSalesLoader(settings.data_source.csv_path)
