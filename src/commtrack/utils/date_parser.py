"""Date parsing utilities."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    # Handle relative dates
    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Handle "last/this/next" + month/year
    for prefix, offset in (("last ", -1), ("this ", 0), ("next ", 1)):
        if date_str.startswith(prefix):
            period = date_str[len(prefix):]
            if period == "month":
                return (today + relativedelta(months=offset)).replace(day=1)
            if period == "year":
                return today.replace(month=1, day=1) + relativedelta(years=offset)

    # Try parsing as absolute date
    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_month(month_str: str) -> date:
    """Parse a month string into the first day of that month.

    Accepts "2024-04", "Apr 2024", "April/2024", "2024-04-17" or any
    relative date understood by parse_date.

    Raises:
        ValueError: If the month cannot be parsed
    """
    cleaned = month_str.strip().replace("/", " ")
    try:
        parsed = date_parser.parse(cleaned, default=datetime(date.today().year, 1, 1))
        return parsed.date().replace(day=1)
    except (ValueError, TypeError, OverflowError):
        pass
    return parse_date(month_str).replace(day=1)


def parse_iso_date(date_str: str) -> date:
    """Parse a strict ISO-8601 date (or datetime) string.

    Used at the HTTP boundary, where relative phrases are not accepted.

    Raises:
        ValueError: If the value is not an ISO-8601 date
    """
    try:
        return date_parser.isoparse(date_str.strip()).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Invalid ISO date '{date_str}': {e}")
