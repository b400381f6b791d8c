"""
Date utility functions.
"""

from datetime import date
from typing import Optional


def ordinal(day: int) -> str:
    """Return the day of month with its English suffix (1st, 2nd, 11th, 23rd)."""
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_long_date(value: Optional[date]) -> str:
    """
    Format a date for display, e.g. ``December 16th, 1775``.

    Args:
        value: Date to format

    Returns:
        The formatted date, or an empty string when the date is absent
    """
    if value is None:
        return ""
    return f"{value:%B} {ordinal(value.day)}, {value.year}"
