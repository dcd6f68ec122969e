"""
app/api/general.py

Purpose: General dashboard endpoints

- GET /general/user/{id}    single user document
- GET /general/dashboard    flat statistics snapshot
"""

from datetime import date
from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from typing import Any, Dict, Optional

from app.core.logging import get_logger
from app.db.mongo import get_database
from app.schemas.dashboard import DashboardStats
from app.schemas.response import ErrorResponse
from app.services.stats_service import StatsService, resolve_reference_point
from app.services.user_service import UserService

logger = get_logger(__name__)
router = APIRouter(prefix="/general")

ERROR_RESPONSES = {
    404: {"model": ErrorResponse, "description": "Document not found"},
    503: {"model": ErrorResponse, "description": "Database unavailable"},
    504: {"model": ErrorResponse, "description": "Database query timed out"},
}


def get_user_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> UserService:
    """Get UserService instance with database connection."""
    return UserService(db)


def get_stats_service(db: AsyncIOMotorDatabase = Depends(get_database)) -> StatsService:
    """Get StatsService instance with database connection."""
    return StatsService(db)


@router.get("/user/{user_id}", responses=ERROR_RESPONSES)
async def get_user(
    user_id: str,
    users: UserService = Depends(get_user_service),
) -> Dict[str, Any]:
    """
    Returns the user document with the given id.
    """
    return await users.get_user(user_id)


@router.get("/dashboard", response_model=DashboardStats, responses=ERROR_RESPONSES)
async def get_dashboard_stats(
    reference_date: Optional[date] = Query(
        None,
        alias="date",
        description="Day treated as 'today' (YYYY-MM-DD). Defaults to the configured date or the UTC clock."
    ),
    stats: StatsService = Depends(get_stats_service),
):
    """
    Dashboard snapshot for the reference point.

    Combines the year's totals, the full monthly breakdown, sales by
    category, the entries for the reference month and day, and the most
    recent transactions.
    """
    reference = resolve_reference_point(reference_date)
    logger.debug(f"Dashboard requested for {reference.date}")
    return await stats.get_dashboard_stats(reference)
