"""
utils/time_utils.py

Purpose: Date helpers for the dashboard

- Reference point (month name, year, ISO date) derivation
- Clock access kept in one place so it can be pinned
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


# Fixed English names; strftime("%B") follows the process locale.
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class ReferencePoint:
    """The (month, year, date) triple that picks the 'current' sub-views."""
    month: str
    year: int
    date: str


def utc_today() -> date:
    """
    Returns today's date in UTC.
    """
    return datetime.utcnow().date()


def reference_point_for(day: date) -> ReferencePoint:
    """
    Builds the reference point for a calendar day.

    >>> reference_point_for(date(2021, 11, 15))
    ReferencePoint(month='November', year=2021, date='2021-11-15')
    """
    return ReferencePoint(
        month=MONTH_NAMES[day.month - 1],
        year=day.year,
        date=day.isoformat(),
    )


def resolve_reference_day(*candidates: Optional[date]) -> date:
    """
    Returns the first candidate that is set, else today's UTC date.
    """
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return utc_today()
