"""Date parsing utilities."""

import re
from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from cashflow.domain.errors import ValidationError

_RELATIVE_OFFSET = re.compile(r"^(?:in\s+)?(\d+)\s+(day|week|month)s?(\s+ago)?$")


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates and dates relative to ``today``:
    - Absolute dates: "2025-01-15", "January 15, 2025", etc.
    - Relative words: "today", "yesterday", "tomorrow"
    - Offsets: "in 10 days", "3 weeks ago", "2 months"
    - Period starts: "this month", "next month", "next week", "last year"

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to the system date)

    Returns:
        Date object

    Raises:
        ValidationError: If date string cannot be parsed
    """
    if today is None:
        today = date.today()
    date_str = date_str.strip().lower()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if date_str in relative_dates:
        return relative_dates[date_str]

    match = _RELATIVE_OFFSET.match(date_str)
    if match:
        count, unit, ago = int(match.group(1)), match.group(2), match.group(3)
        if unit == "day":
            offset = relativedelta(days=count)
        elif unit == "week":
            offset = relativedelta(weeks=count)
        else:
            offset = relativedelta(months=count)
        return today - offset if ago else today + offset

    for prefix, step in (("last ", -1), ("this ", 0), ("next ", 1)):
        if date_str.startswith(prefix):
            period = date_str[len(prefix):]
            if period == "week":
                return today - timedelta(days=today.weekday()) + timedelta(weeks=step)
            if period == "month":
                return today.replace(day=1) + relativedelta(months=step)
            if period == "year":
                return today.replace(month=1, day=1) + relativedelta(years=step)

    # Try parsing as absolute date
    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValidationError(f"Could not parse date '{date_str}': {e}")
