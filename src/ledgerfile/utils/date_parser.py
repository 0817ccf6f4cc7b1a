"""Date parsing utilities."""

from datetime import date, timedelta
from dateutil import parser as date_parser


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2025-01-15", "15 Jan 2025", "January 15, 2025", etc.
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
