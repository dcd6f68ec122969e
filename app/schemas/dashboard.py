"""
app/schemas/dashboard.py

Purpose: Response schemas for the statistics endpoints

- Flat dashboard snapshot returned by /general/dashboard
- Embedded month/day entries are passed through as stored
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional, Union


class DashboardStats(BaseModel):
    """Snapshot combining yearly, monthly, daily and recent-transaction views."""

    totalCustomers: Optional[int] = Field(default=None, description="Customers counted for the year")
    yearlyTotalSoldUnits: Optional[int] = Field(default=None, description="Units sold in the year")
    yearlySalesTotal: Optional[Union[int, float]] = Field(default=None, description="Sales total for the year")
    monthlyData: List[Dict[str, Any]] = Field(default_factory=list, description="Per-month breakdown")
    salesByCategory: Dict[str, Any] = Field(default_factory=dict, description="Category -> sales")
    thisMonthStats: Optional[Dict[str, Any]] = Field(
        default=None,
        description="monthlyData entry for the reference month, null when absent"
    )
    todayStats: Optional[Dict[str, Any]] = Field(
        default=None,
        description="dailyData entry for the reference date, null when absent"
    )
    recentTransactions: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Most recent transactions, newest first"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "totalCustomers": 9035,
                "yearlyTotalSoldUnits": 22436,
                "yearlySalesTotal": 3546523.0,
                "monthlyData": [{"month": "November", "totalSales": 28543, "totalUnits": 621}],
                "salesByCategory": {"shoes": 6515, "clothing": 22803},
                "thisMonthStats": {"month": "November", "totalSales": 28543, "totalUnits": 621},
                "todayStats": {"date": "2021-11-15", "totalSales": 1244, "totalUnits": 19},
                "recentTransactions": []
            }
        }
