"""Calendar helpers for Monday-start weeks and month arithmetic."""
from __future__ import annotations

from datetime import date, timedelta

DAY_FORMAT = "%Y%m%d"
MONTH_FORMAT = "%Y%m"


def week_bucket(d: date) -> date:
    """Return the Monday of the week containing the given date (local naive)."""

    weekday = d.weekday()  # Monday == 0
    return d - timedelta(days=weekday)


def week_end(d: date) -> date:
    """Return the Sunday closing the week containing ``d``."""

    return week_bucket(d) + timedelta(days=6)


def same_week(a: date, b: date) -> bool:
    return week_bucket(a) == week_bucket(b)


def same_month(a: date, b: date) -> bool:
    return (a.year, a.month) == (b.year, b.month)


def previous_month(d: date) -> date:
    """Return the first day of the month before ``d``."""

    first = d.replace(day=1)
    return (first - timedelta(days=1)).replace(day=1)


def format_day(d: date) -> str:
    return d.strftime(DAY_FORMAT)


def format_month(d: date) -> str:
    return d.strftime(MONTH_FORMAT)
