"""Date parsing utilities."""

from datetime import UTC, date, datetime, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", "2024-01-15T10:00:00Z"
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to the current day)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    elif date_str.startswith("next "):
        period = date_str[5:]
        if period == "month":
            return (today + relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) + relativedelta(years=1)
        elif period == "week":
            return today + timedelta(days=(7 - today.weekday()))

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, assuming UTC when no offset is given.

    Raises:
        ValueError: If the string is not a timestamp
    """
    try:
        parsed = date_parser.isoparse(value.strip())
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def month_key(day: date) -> str:
    """Return the ``YYYY-MM`` key of the month containing ``day``."""
    return day.strftime("%Y-%m")


def month_label(day: date) -> str:
    """Return a short display label such as ``Oct 2026``."""
    return day.strftime("%b %Y")


def months_in_range(start: date, end: date) -> list[date]:
    """Return the first day of every month from ``start`` to ``end``, inclusive."""
    current = start.replace(day=1)
    last = end.replace(day=1)
    months = []
    while current <= last:
        months.append(current)
        current += relativedelta(months=1)
    return months


def coerce_date(value) -> Optional[date]:
    """Normalize a record's date field to a ``date``.

    Timestamps are truncated to their day and strings are parsed. Returns
    None for anything that cannot be read as a date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.isoparse(value.strip()).date()
        except (ValueError, OverflowError):
            pass
        try:
            return parse_date(value)
        except ValueError:
            return None
    return None
