"""
app/db/indexes.py

Purpose: Database index management

- Unique index on overallstats.year (one yearly document per year)
- Recency index on transactions.createdAt for the dashboard feed
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, OperationFailure
from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(db: AsyncIOMotorDatabase) -> bool:
    """
    Creates the indexes the read paths rely on.
    This function is idempotent - safe to run multiple times.

    Returns:
        True if the yearly uniqueness index is in place, False if existing
        duplicate years prevented it (reads then fall back to the
        most-recently-updated tie-break).
    """
    overall_stats = db[settings.OVERALL_STATS_COLLECTION]
    transactions = db[settings.TRANSACTIONS_COLLECTION]

    logger.info("Creating database indexes...")

    # Newest-first scan for recent transactions
    await transactions.create_index(
        [("createdAt", DESCENDING)],
        name="transactions_created_at_idx"
    )
    logger.debug("Created index on transactions.createdAt")

    # Backs the year lookup even if uniqueness cannot be enforced
    await overall_stats.create_index(
        [("year", ASCENDING), ("updatedAt", DESCENDING)],
        name="overallstats_year_recency_idx"
    )
    logger.debug("Created compound index on overallstats.year + updatedAt")

    try:
        await overall_stats.create_index(
            [("year", ASCENDING)],
            unique=True,
            name="overallstats_year_unique"
        )
        logger.debug("Created unique index on overallstats.year")
    except (DuplicateKeyError, OperationFailure) as e:
        logger.warning(
            f"Could not enforce one statistics document per year: {e}. "
            "Lookups will prefer the most recently updated document.",
            extra={"collection": settings.OVERALL_STATS_COLLECTION}
        )
        return False

    logger.info("✅ All database indexes created successfully")
    return True
