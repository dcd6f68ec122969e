"""
app/services/stats_service.py

Purpose: Dashboard statistics read path

- Resolves the reference point (configured, requested or clock-derived)
- Fetches the yearly statistics document and recent transactions concurrently
- Picks the month and day entries matching the reference point
- Composes the flat dashboard snapshot
"""

import asyncio
from datetime import date
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.core.exceptions import ResourceNotFoundError
from app.core.logging import get_logger, LogContext
from app.db.mongo import database_errors, serialize_document
from utils.time_utils import ReferencePoint, reference_point_for, resolve_reference_day

logger = get_logger(__name__)

# Tie-break when more than one document exists for a year
YEARLY_STATS_SORT = [("updatedAt", DESCENDING), ("_id", DESCENDING)]


def find_entry(entries: Optional[List[Dict[str, Any]]], field: str, value: str) -> Optional[Dict[str, Any]]:
    """
    Returns the first entry whose `field` equals `value`, or None.
    """
    for entry in entries or []:
        if entry.get(field) == value:
            return entry
    return None


def resolve_reference_point(requested: Optional[date] = None) -> ReferencePoint:
    """
    Request parameter wins, then DASHBOARD_REFERENCE_DATE, then today (UTC).
    """
    day = resolve_reference_day(requested, settings.DASHBOARD_REFERENCE_DATE)
    return reference_point_for(day)


class StatsService:
    """Read access to yearly statistics and transactions."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.overall_stats = db[settings.OVERALL_STATS_COLLECTION]
        self.transactions = db[settings.TRANSACTIONS_COLLECTION]

    async def get_recent_transactions(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Fetches the most recent transactions, newest first.

        Args:
            limit: Maximum number of transactions (defaults to RECENT_TRANSACTIONS_LIMIT)

        Raises:
            ValueError: If limit is not positive; Mongo reads limit(0) as unbounded
        """
        if limit is None:
            limit = settings.RECENT_TRANSACTIONS_LIMIT
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        async with database_errors("fetch recent transactions"):
            cursor = (
                self.transactions
                .find({}, max_time_ms=settings.MONGODB_QUERY_TIMEOUT_MS)
                .sort("createdAt", DESCENDING)
                .limit(limit)
            )
            return await cursor.to_list(length=limit)

    async def find_yearly_stats(self, year: int) -> Optional[Dict[str, Any]]:
        """
        Fetches the statistics document for a year.

        If duplicates exist for the year, the most recently updated one wins.

        Returns:
            The raw document, or None if the year has no statistics
        """
        async with database_errors("fetch yearly statistics"):
            cursor = (
                self.overall_stats
                .find({"year": year}, max_time_ms=settings.MONGODB_QUERY_TIMEOUT_MS)
                .sort(YEARLY_STATS_SORT)
                .limit(1)
            )
            documents = await cursor.to_list(length=1)
        return documents[0] if documents else None

    async def get_overall_stat(self, year: Optional[int] = None) -> Dict[str, Any]:
        """
        Returns the full statistics document for a year.

        Args:
            year: Year to look up (defaults to the reference point's year)

        Raises:
            ResourceNotFoundError: If the year has no statistics document
        """
        if year is None:
            year = resolve_reference_point().year

        with LogContext(year=year):
            stats = await self.find_yearly_stats(year)
            if stats is None:
                logger.info("No statistics document for year")
                raise ResourceNotFoundError(
                    f"No statistics found for year {year}",
                    details={"year": year}
                )
            return serialize_document(stats)

    async def get_dashboard_stats(self, reference: ReferencePoint) -> Dict[str, Any]:
        """
        Builds the dashboard snapshot for a reference point.

        The transactions and yearly statistics queries are independent
        and run concurrently.

        Args:
            reference: Month, year and date selecting the current sub-views

        Returns:
            Dict matching the DashboardStats schema

        Raises:
            ResourceNotFoundError: If the reference year has no statistics document
        """
        with LogContext(year=reference.year, reference_date=reference.date):
            recent_transactions, stats = await asyncio.gather(
                self.get_recent_transactions(),
                self.find_yearly_stats(reference.year),
            )

            if stats is None:
                logger.info("No statistics document for dashboard year")
                raise ResourceNotFoundError(
                    f"No statistics found for year {reference.year}",
                    details={"year": reference.year}
                )

            this_month_stats = find_entry(stats.get("monthlyData"), "month", reference.month)
            today_stats = find_entry(stats.get("dailyData"), "date", reference.date)

            if this_month_stats is None:
                logger.warning(f"No monthly entry for {reference.month}")
            if today_stats is None:
                logger.debug(f"No daily entry for {reference.date}")

            return serialize_document({
                "totalCustomers": stats.get("totalCustomers"),
                "yearlyTotalSoldUnits": stats.get("yearlyTotalSoldUnits"),
                "yearlySalesTotal": stats.get("yearlySalesTotal"),
                "monthlyData": stats.get("monthlyData") or [],
                "salesByCategory": stats.get("salesByCategory") or {},
                "thisMonthStats": this_month_stats,
                "todayStats": today_stats,
                "recentTransactions": recent_transactions,
            })
