"""
Create the scheduling schema.

Enables btree_gist (needed by the exclusion constraint that mixes a DATE
equality with a range overlap) before creating the tables.
Can be run standalone: python -m database.init_db
"""

import asyncio
import logging

from sqlalchemy import text

from database.connection import engine
from database.models import Base

logger = logging.getLogger(__name__)


async def init_database(drop_existing: bool = False) -> None:
    """
    Create extensions and tables. Idempotent unless drop_existing is set.

    Args:
        drop_existing: Drop every table first (local development only)
    """
    async with engine.begin() as conn:
        if drop_existing:
            await conn.run_sync(Base.metadata.drop_all)

        await conn.execute(text('CREATE EXTENSION IF NOT EXISTS "btree_gist"'))
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema ready", extra={"tables": sorted(Base.metadata.tables)})


if __name__ == "__main__":
    asyncio.run(init_database())
