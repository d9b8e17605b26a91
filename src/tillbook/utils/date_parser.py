"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
PERIODS = ["today", "this-week", "this-month", "last-week", "last-month"]


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative days: "today", "yesterday", "tomorrow"
    - Previous weekday: "last monday", "last friday", etc.

    Args:
        date_str: Date string
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    relative_days = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if text in relative_days:
        return today + timedelta(days=relative_days[text])

    if text.startswith("last ") and text[5:] in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(text[5:])) % 7 or 7
        return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get inclusive start and end dates for a named period.

    Args:
        period: One of today, this-week, this-month, last-week, last-month
        today: Reference day (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date)

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()
    monday = today - timedelta(days=today.weekday())
    first_of_month = today.replace(day=1)

    if period == "today":
        return today, today
    if period == "this-week":
        return monday, today
    if period == "this-month":
        return first_of_month, today
    if period == "last-week":
        start = monday - timedelta(days=7)
        return start, start + timedelta(days=6)
    if period == "last-month":
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")
