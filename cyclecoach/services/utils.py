"""
Shared utility functions for phase and catalog services.
"""
import math
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime]

def to_date(value: Optional[DateLike] = None) -> date:
    """
    Normalize a date or datetime to a calendar date.

    Args:
        value: Date, datetime or None for today

    Returns:
        Calendar date
    """
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value

def days_between(start: date, end: DateLike) -> int:
    """
    Whole days elapsed from start to end (negative if end is earlier).

    Example:
        >>> days_between(date(2024, 1, 1), date(2024, 1, 4))
        3
    """
    return (to_date(end) - start).days

def day_of_year(value: Optional[DateLike] = None) -> int:
    """1-based day of the year."""
    return to_date(value).timetuple().tm_yday

def floor_ratio(length: int, ratio: float) -> int:
    """Floor of a cycle length scaled by a ratio."""
    return math.floor(length * ratio)
