"""
Formatting utilities for display.

Used by the console report and the CSV export.
"""

from datetime import date


def format_distance_km(km: float) -> str:
    """
    Format distance with two decimals.

    Args:
        km: Distance in kilometers

    Returns:
        Formatted string (e.g., '12.50 km')
    """
    return f"{km:.2f} km"


def format_percent(value: float) -> str:
    """
    Format a percentage with one decimal.

    Args:
        value: Percentage (0 - 100)

    Returns:
        Formatted string (e.g., '28.0%')
    """
    return f"{value:.1f}%"


def format_day(day: date | None) -> str:
    """Format a calendar day as YYYY-MM-DD ('-' when missing)."""
    if day is None:
        return "-"
    return day.isoformat()


def format_inactive_days(count: int) -> str:
    """'In-active 1 day' / 'In-active 3 days'."""
    suffix = "" if count == 1 else "s"
    return f"In-active {count} day{suffix}"
