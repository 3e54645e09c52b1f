"""
Formatting utilities for display.

Shared by the hike map and the event pages.
"""
from datetime import datetime
from typing import Optional

MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

PLACEHOLDER = "--"


def format_distance_km(km: float) -> str:
    """
    Format distance.

    Args:
        km: Distance in kilometers

    Returns:
        Formatted string (e.g., '12.34 km')
    """
    return f"{km:.2f} km"


def format_elevation(meters: Optional[float]) -> str:
    """
    Format an ascent or descent total.

    Args:
        meters: Elevation in meters, None when unknown

    Returns:
        Formatted string (e.g., '850 m' or '--')
    """
    if meters is None:
        return PLACEHOLDER
    return f"{round(meters)} m"


def format_short_date(value: datetime) -> str:
    """'Jun 01, 2024'."""
    return f"{MONTH_ABBR[value.month - 1]} {value.day:02d}, {value.year}"


def format_clock_time(value: datetime) -> str:
    """'2:00 PM'."""
    hour = value.hour % 12 or 12
    period = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {period}"
