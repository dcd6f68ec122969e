"""
Database index initialization script

Creates the indexes the API relies on and reports what exists:
    python scripts/init_db.py

The API also runs this on startup; use the script to check a cluster
before deploying.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection, get_database
from app.db.indexes import create_indexes

setup_logging()
logger = get_logger("scripts.init_db")


async def main():
    await connect_to_mongo()
    try:
        db = await get_database()
        unique_years = await create_indexes(db)
        if not unique_years:
            logger.warning(
                f"⚠️ Duplicate years exist in '{settings.OVERALL_STATS_COLLECTION}'; "
                "remove them to enforce one document per year"
            )

        for name in (settings.OVERALL_STATS_COLLECTION, settings.TRANSACTIONS_COLLECTION):
            indexes = await db[name].index_information()
            logger.info(f"{name}: {', '.join(sorted(indexes))}")
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    asyncio.run(main())
