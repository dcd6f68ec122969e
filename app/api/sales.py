"""
app/api/sales.py

Purpose: Sales endpoints

- GET /sales/sales    full yearly statistics document
"""

from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, Optional

from app.api.general import ERROR_RESPONSES, get_stats_service
from app.services.stats_service import StatsService

router = APIRouter(prefix="/sales")


@router.get("/sales", responses=ERROR_RESPONSES)
async def get_overall_stat(
    year: Optional[int] = Query(None, ge=1900, le=9999, description="Statistics year. Defaults to the reference year."),
    stats: StatsService = Depends(get_stats_service),
) -> Dict[str, Any]:
    """
    Returns the yearly statistics document backing the sales views.
    """
    return await stats.get_overall_stat(year)
