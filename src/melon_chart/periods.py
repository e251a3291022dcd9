"""Resolve a reference date into the date window the chart site expects.

Melon publishes no forward-looking charts and does not serve the chart of
the week or month still in progress, so each period kind adjusts the
caller's reference date before formatting it.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Union

from .errors import InvalidConfig, InvalidDate
from .logging_utils import get_logger
from .time_utils import (
    format_day,
    format_month,
    previous_month,
    same_month,
    same_week,
    week_bucket,
    week_end,
)

LOG = get_logger(__name__)

Clock = Callable[[], date]


class PeriodKind(str, Enum):
    """Chart granularity; the value is the provider's URL path segment."""

    DAILY = "day"
    WEEKLY = "week"
    MONTHLY = "month"

    @classmethod
    def parse(cls, value: Union["PeriodKind", str]) -> "PeriodKind":
        """Accept a member, its path segment, or its name (``weekly``)."""

        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for kind in cls:
            if text in (kind.value, kind.name.lower()):
                return kind
        raise InvalidConfig(f"Unknown period kind: {value!r}")


@dataclass(frozen=True)
class DateWindow:
    """Start/end pair in the provider's date-string format."""

    start: str
    end: str

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


def parse_reference_date(value: Union[str, date]) -> date:
    """Parse a caller-supplied reference date.

    Accepts ``YYYY-MM-DD`` and ``YYYYMMDD`` strings or a ``date``.
    """

    if isinstance(value, date):
        # datetime is a date subclass; only the calendar day matters here.
        return date(value.year, value.month, value.day)
    if not isinstance(value, str):
        raise InvalidDate(f"Reference date must be a string, got {type(value).__name__}")

    text = value.strip()
    try:
        if len(text) == 8 and text.isdigit():
            return date(int(text[:4]), int(text[4:6]), int(text[6:]))
        return date.fromisoformat(text)
    except ValueError as exc:
        raise InvalidDate(f"Invalid reference date {value!r}: {exc}") from exc


def daily_window(reference: date, today: date) -> DateWindow:
    day = today if reference > today else reference
    return DateWindow(format_day(day), format_day(day))


def weekly_window(reference: date, today: date) -> DateWindow:
    # The in-progress week has no finalized chart yet.
    if same_week(reference, today):
        reference = reference - timedelta(weeks=1)
    return DateWindow(format_day(week_bucket(reference)), format_day(week_end(reference)))


def monthly_window(reference: date, today: date) -> DateWindow:
    if same_month(reference, today) or reference > today:
        reference = previous_month(today)
    month = format_month(reference)
    return DateWindow(month, month)


_RESOLVERS = {
    PeriodKind.DAILY: daily_window,
    PeriodKind.WEEKLY: weekly_window,
    PeriodKind.MONTHLY: monthly_window,
}


def resolve_window(
    reference: Union[str, date],
    kind: Union[PeriodKind, str],
    today: Clock = date.today,
) -> DateWindow:
    """Return the date window to request for ``reference`` and ``kind``.

    ``today`` is the clock consulted for the future and current-period rules.
    """

    ref = parse_reference_date(reference)
    kind = PeriodKind.parse(kind)
    window = _RESOLVERS[kind](ref, today())
    LOG.debug("Resolved %s window for %s: %s..%s", kind.name.lower(), ref, window.start, window.end)
    return window
