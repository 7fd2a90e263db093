"""
Database Record Loader

Reads the `sales` table into engine records in primary-key order.
"""

from typing import List, Optional, Sequence

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.database.connection import session_scope
from src.database.models import SaleRow
from src.engine.records import SalesRecord

logger = structlog.get_logger(__name__)


class DatabaseSalesLoader:
    """
    Database-backed record loader.

    Uses the global session factory unless one is injected.

    Example:
        await init_database()
        records = await DatabaseSalesLoader().load_all()
    """

    name = "database"

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ):
        self.session_factory = session_factory

    async def load_all(self) -> Sequence[SalesRecord]:
        records: List[SalesRecord] = []
        async with session_scope(self.session_factory) as db:
            result = await db.execute(select(SaleRow).order_by(SaleRow.id))
            for row in result.scalars():
                records.append(row.to_record())

        logger.info("Sales table read", rows=len(records))
        return records
