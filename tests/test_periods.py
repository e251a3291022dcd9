"""Tests for reference-date parsing and period window resolution."""
from __future__ import annotations

from datetime import date, timedelta

import pytest

from melon_chart.errors import InvalidConfig, InvalidDate
from melon_chart.periods import (
    DateWindow,
    PeriodKind,
    parse_reference_date,
    resolve_window,
)

TODAY = date(2024, 1, 10)  # Wednesday


def clock():
    return TODAY


def _day(text: str) -> date:
    return date(int(text[:4]), int(text[4:6]), int(text[6:]))


class TestParseReferenceDate:
    def test_iso_string(self) -> None:
        assert parse_reference_date("2024-01-03") == date(2024, 1, 3)

    def test_compact_string(self) -> None:
        assert parse_reference_date("20240103") == date(2024, 1, 3)

    def test_date_passthrough(self) -> None:
        assert parse_reference_date(date(2023, 5, 6)) == date(2023, 5, 6)

    @pytest.mark.parametrize("value", ["", "not-a-date", "2024-02-30", "20241301", None, 20240103])
    def test_invalid(self, value) -> None:
        with pytest.raises(InvalidDate):
            parse_reference_date(value)

    def test_resolve_rejects_invalid_date(self) -> None:
        with pytest.raises(InvalidDate):
            resolve_window("yesterday", PeriodKind.DAILY, today=clock)


class TestDaily:
    def test_past_date_is_kept(self) -> None:
        assert resolve_window("2023-12-25", PeriodKind.DAILY, today=clock) == DateWindow(
            "20231225", "20231225"
        )

    def test_today_is_kept(self) -> None:
        assert resolve_window(TODAY, "daily", today=clock) == DateWindow("20240110", "20240110")

    @pytest.mark.parametrize("days_ahead", [1, 7, 40, 3650])
    def test_future_degrades_to_today(self, days_ahead: int) -> None:
        ref = TODAY + timedelta(days=days_ahead)
        assert resolve_window(ref, PeriodKind.DAILY, today=clock) == DateWindow(
            "20240110", "20240110"
        )


class TestWeekly:
    @pytest.mark.parametrize("ref", ["2024-01-08", "2024-01-10", "2024-01-14"])
    def test_current_week_shifts_back_one_week(self, ref: str) -> None:
        assert resolve_window(ref, PeriodKind.WEEKLY, today=clock) == DateWindow(
            "20240101", "20240107"
        )

    def test_previous_week_is_its_own_week(self) -> None:
        # Jan 3 is the Wednesday of the week before "today".
        assert resolve_window("2024-01-03", PeriodKind.WEEKLY, today=clock) == DateWindow(
            "20240101", "20240107"
        )

    def test_week_across_year_boundary(self) -> None:
        assert resolve_window("2023-12-29", PeriodKind.WEEKLY, today=clock) == DateWindow(
            "20231225", "20231231"
        )

    def test_sunday_belongs_to_preceding_monday(self) -> None:
        assert resolve_window("2023-12-17", PeriodKind.WEEKLY, today=clock) == DateWindow(
            "20231211", "20231217"
        )

    def test_monday_start_when_today_is_sunday(self) -> None:
        window = resolve_window("2024-01-08", PeriodKind.WEEKLY, today=lambda: date(2024, 1, 14))
        assert window == DateWindow("20240101", "20240107")

    @pytest.mark.parametrize("offset", range(-60, 30, 3))
    def test_window_is_monday_to_sunday(self, offset: int) -> None:
        window = resolve_window(TODAY + timedelta(days=offset), PeriodKind.WEEKLY, today=clock)
        start, end = _day(window.start), _day(window.end)
        assert start.weekday() == 0
        assert end - start == timedelta(days=6)
        assert window.start <= window.end


class TestMonthly:
    def test_past_month_is_kept(self) -> None:
        assert resolve_window("2023-11-15", PeriodKind.MONTHLY, today=clock) == DateWindow(
            "202311", "202311"
        )

    @pytest.mark.parametrize("ref", ["2024-01-01", "2024-01-10", "2024-01-31", "2024-02-01", "2030-07-04"])
    def test_current_or_future_uses_previous_month(self, ref: str) -> None:
        assert resolve_window(ref, PeriodKind.MONTHLY, today=clock) == DateWindow(
            "202312", "202312"
        )

    def test_anchor_is_clock_not_reference(self) -> None:
        window = resolve_window("2025-09-30", PeriodKind.MONTHLY, today=lambda: date(2024, 3, 31))
        assert window == DateWindow("202402", "202402")

    @pytest.mark.parametrize("ref", ["2020-02-29", "2023-12-31", "2024-01-05", "2099-01-01"])
    def test_start_equals_end(self, ref: str) -> None:
        window = resolve_window(ref, PeriodKind.MONTHLY, today=clock)
        assert window.start == window.end
        assert len(window.start) == 6


class TestPeriodKind:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("daily", PeriodKind.DAILY),
            ("day", PeriodKind.DAILY),
            ("Weekly", PeriodKind.WEEKLY),
            ("month", PeriodKind.MONTHLY),
            (PeriodKind.MONTHLY, PeriodKind.MONTHLY),
        ],
    )
    def test_parse(self, value, expected) -> None:
        assert PeriodKind.parse(value) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(InvalidConfig):
            PeriodKind.parse("yearly")

    def test_unknown_kind_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            PeriodKind.parse("fortnightly")


def test_weekly_future_week_keeps_its_own_week() -> None:
    assert resolve_window("2024-01-17", PeriodKind.WEEKLY, today=clock) == DateWindow(
        "20240115", "20240121"
    )
