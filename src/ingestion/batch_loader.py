"""
Batch CSV Loader

Reads the sales CSV export into engine records.
Supports:
- Polars reading with every column kept as text
- Lossy normalization of numbers, dates, and tags
- Source column validation with a warning for missing columns
"""

import asyncio
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Union

import polars as pl
import structlog

from src.engine.records import SOURCE_COLUMNS, SalesRecord

logger = structlog.get_logger(__name__)


@dataclass
class CsvFileConfig:
    """Configuration for reading the sales CSV"""
    file_path: Union[str, Path]
    delimiter: str = ","
    encoding: str = "utf8"
    null_values: List[str] = field(default_factory=lambda: ["", "NULL", "null", "None", "NA", "N/A"])


class CsvSalesLoader:
    """
    File-based record loader.

    Example:
        loader = CsvSalesLoader("data/sales_data.csv")
        records = await loader.load_all()
    """

    name = "csv"

    def __init__(self, file_path: Union[str, Path, CsvFileConfig]):
        self.config = file_path if isinstance(file_path, CsvFileConfig) else CsvFileConfig(file_path)

    def _read_csv(self) -> pl.DataFrame:
        """Read CSV file with Polars, no type inference"""
        return pl.read_csv(
            self.config.file_path,
            separator=self.config.delimiter,
            encoding=self.config.encoding,
            null_values=self.config.null_values,
            infer_schema_length=0,
        )

    def _missing_columns(self, df: pl.DataFrame) -> List[str]:
        return [column for column in SOURCE_COLUMNS if column not in df.columns]

    def read_records(self) -> List[SalesRecord]:
        """Synchronously read and normalize every row"""
        path = Path(self.config.file_path)
        if not path.exists():
            raise FileNotFoundError(f"Sales data file not found: {path}")

        df = self._read_csv()

        missing = self._missing_columns(df)
        if missing:
            logger.warning("Sales CSV is missing columns", file=str(path), missing=missing)

        records = [SalesRecord.from_source_row(row) for row in df.iter_rows(named=True)]
        logger.info("Sales CSV read", file=str(path), rows=len(records))
        return records

    async def load_all(self) -> Sequence[SalesRecord]:
        """Read the file off the event loop"""
        return await asyncio.to_thread(self.read_records)
