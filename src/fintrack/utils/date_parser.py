"""Date parsing utilities."""

import re
from datetime import date, datetime, timedelta
from typing import Any, Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(date_str: str) -> date:
    """Parse a date typed on the command line.

    Supports:
    - Relative dates: "today", "yesterday"
    - ISO dates: "2024-01-15"
    - Day-first dates: "15/01/2024", "15 Jan 2024"

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    if date_str == "today":
        return today
    if date_str == "yesterday":
        return today - timedelta(days=1)

    if ISO_DATE.match(date_str):
        return date.fromisoformat(date_str)

    try:
        return date_parser.parse(date_str, dayfirst=True).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_import_date(value: Any, today: Optional[date] = None) -> date:
    """Parse the Date cell of an imported row.

    ``DD/MM/YYYY`` is converted, ``YYYY-MM-DD`` is passed through, date
    objects (spreadsheet cells) are used as they are, and anything else,
    including blanks, becomes today's date.

    Args:
        value: Cell value
        today: Date to fall back to (defaults to date.today())

    Returns:
        Date object
    """
    fallback = today or date.today()
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return fallback

    text = value.strip()
    try:
        if ISO_DATE.match(text):
            return date.fromisoformat(text)
        if "/" in text:
            parts = text.split("/")
            if len(parts) == 3:
                day, month, year = (int(part) for part in parts)
                return date(year, month, day)
    except ValueError:
        return fallback
    return fallback


def format_display_date(value: date) -> str:
    """Format a date as DD/MM/YYYY for exports and listings."""
    return value.strftime("%d/%m/%Y")


def get_date_range(period: str) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (this-month, this-year, last-month, last-year)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = date.today()

    if period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        # Day before the first of the current month
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. "
            "Supported periods: this-month, this-year, last-month, last-year"
        )
