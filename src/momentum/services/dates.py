"""Calendar helpers working on local calendar fields only.

All arithmetic here goes through ``datetime.date`` so day differences are
whole calendar days. Nothing is derived from epoch seconds, which keeps year
starts, leap days and chunk boundaries free of timezone and DST drift.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta


def local_today() -> date:
    """Return today's date in the local timezone."""
    return date.today()


def _as_date(value: date | datetime) -> date:
    # datetime is a date subclass; keep its own calendar fields, drop the time
    if isinstance(value, datetime):
        return value.date()
    return value


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def day_of_year(value: date | datetime) -> int:
    """Return the 1-based day of the year for ``value``."""

    day = _as_date(value)
    return (day - date(day.year, 1, 1)).days + 1


def date_from_day_of_year(year: int, day: int) -> date:
    """Return the date ``day`` days into ``year`` (January 1st is day 1).

    Days beyond the end of the year roll over into the following year;
    callers that need to reject those compare the resulting year.
    """

    return date(year, 1, 1) + timedelta(days=day - 1)


def format_local_date(value: date | datetime) -> str:
    """Format as ``YYYY-MM-DD`` using the value's own calendar fields."""

    day = _as_date(value)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_local_date(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a calendar date.

    The components are split and converted explicitly instead of going
    through a generic parser, so no timezone interpretation can shift the day.

    Raises:
        ValueError: if the text is not three numeric parts or names an
            impossible date (for example February 29th of a common year).
    """

    if not isinstance(text, str):
        raise ValueError(f"Expected a date string, got {type(text).__name__}")
    parts = text.strip().split("-")
    if len(parts) != 3 or not all(part.isascii() and part.isdigit() for part in parts):
        raise ValueError(f"Malformed date string: {text!r}")
    year, month, day = (int(part) for part in parts)
    return date(year, month, day)


def past_dates(count: int, *, today: date | None = None) -> list[date]:
    """Return the last ``count`` calendar days including today, oldest first."""

    today = today or local_today()
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


__all__ = [
    "date_from_day_of_year",
    "day_of_year",
    "days_in_year",
    "format_local_date",
    "is_leap_year",
    "local_today",
    "parse_local_date",
    "past_dates",
]
