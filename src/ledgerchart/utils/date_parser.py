"""Date parsing utilities."""

import re
from datetime import date, timedelta

from dateutil import parser as date_parser

_BUCKET_DATE_RE = re.compile(r"^(\d{1,4})\.(\d{3})$")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats:
    - Absolute dates: "2024-01-15", "2024/01/15", "January 15, 2024", etc.
    - Bucket keys: "2024.015" (year and zero-padded day of year)
    - Relative dates: "today", "yesterday", "tomorrow"

    Args:
        date_str: Date string in various formats

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

    match = _BUCKET_DATE_RE.match(date_str)
    if match:
        year, day = int(match.group(1)), int(match.group(2))
        start_of_year = date(year, 1, 1)
        result = start_of_year + timedelta(days=day - 1)
        if day < 1 or result.year != year:
            raise ValueError(f"Could not parse date '{date_str}': day {day} is outside year {year}")
        return result

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")

