"""
Database Seeding

Imports the sales CSV into the `sales` table, replacing existing rows.

Usage:
    python -m src.ingestion.seed_db --csv data/sales_data.csv
"""

import argparse
import asyncio
from typing import Any, Dict, List, Optional, Sequence

import structlog
from sqlalchemy import delete, insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config import configure_logging, get_settings
from src.database.connection import close_database, init_database, session_scope
from src.database.models import SaleRow
from src.engine.records import SalesRecord
from src.ingestion.batch_loader import CsvSalesLoader

logger = structlog.get_logger(__name__)

CHUNK_SIZE = 1000


async def execute_batch_insert(db: AsyncSession, rows: List[Dict[str, Any]]) -> None:
    """Insert rows in chunks using Core insert"""
    for i in range(0, len(rows), CHUNK_SIZE):
        await db.execute(insert(SaleRow), rows[i:i + CHUNK_SIZE])


async def seed_sales(
    records: Sequence[SalesRecord],
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
) -> int:
    """
    Replace the contents of the sales table with the given records.

    Both steps share one transaction, so a failed insert leaves the old
    rows in place.
    """
    rows = [SaleRow.values_from_record(record) for record in records]
    async with session_scope(session_factory) as db:
        await db.execute(delete(SaleRow))
        logger.info("Cleared existing sales rows")
        if rows:
            await execute_batch_insert(db, rows)
    logger.info("Seeded sales table", rows=len(rows))
    return len(rows)


async def seed_from_csv(csv_path: str) -> int:
    """Read the CSV and seed the configured database"""
    records = await CsvSalesLoader(csv_path).load_all()
    await init_database(create_tables=True)
    try:
        return await seed_sales(records)
    finally:
        await close_database()


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Import sales CSV into the database")
    parser.add_argument(
        "--csv",
        default=settings.data_source.csv_path,
        help=f"CSV file to import (default: {settings.data_source.csv_path})",
    )
    args = parser.parse_args()

    configure_logging(log_format="text")
    asyncio.run(seed_from_csv(args.csv))


if __name__ == "__main__":
    main()
