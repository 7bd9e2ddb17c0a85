"""Tests for calendar helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from momentum.services.dates import (
    date_from_day_of_year,
    day_of_year,
    days_in_year,
    format_local_date,
    is_leap_year,
    parse_local_date,
    past_dates,
)


class TestDayOfYear:
    def test_january_first_is_day_one(self):
        assert day_of_year(date(2025, 1, 1)) == 1

    def test_december_31_leap_and_common_years(self):
        assert day_of_year(date(2024, 12, 31)) == 366
        assert day_of_year(date(2025, 12, 31)) == 365

    def test_leap_day(self):
        assert day_of_year(date(2024, 2, 29)) == 60
        assert day_of_year(date(2024, 3, 1)) == 61
        assert day_of_year(date(2025, 3, 1)) == 60

    def test_across_dst_transition(self):
        """Days around the March and November transitions are whole days apart."""
        assert day_of_year(date(2025, 3, 10)) - day_of_year(date(2025, 3, 9)) == 1
        assert day_of_year(date(2025, 11, 3)) - day_of_year(date(2025, 11, 2)) == 1

    def test_datetime_uses_its_own_calendar_fields(self):
        late = datetime(2025, 2, 1, 23, 59, tzinfo=timezone(timedelta(hours=-10)))
        assert day_of_year(late) == 32


class TestDateFromDayOfYear:
    @pytest.mark.parametrize("year", [1900, 2000, 2023, 2024, 2025])
    def test_inverse_of_day_of_year(self, year):
        for day in range(1, days_in_year(year) + 1):
            assert day_of_year(date_from_day_of_year(year, day)) == day

    def test_overflow_rolls_into_next_year(self):
        assert date_from_day_of_year(2025, 366) == date(2026, 1, 1)


class TestLeapYears:
    @pytest.mark.parametrize(
        "year,expected",
        [(2024, True), (2025, False), (1900, False), (2000, True), (2100, False)],
    )
    def test_gregorian_rule(self, year, expected):
        assert is_leap_year(year) is expected


class TestFormatting:
    def test_zero_padded(self):
        assert format_local_date(date(2025, 3, 7)) == "2025-03-07"

    def test_datetime_near_midnight_keeps_local_day(self):
        ahead = datetime(2025, 1, 1, 0, 30, tzinfo=timezone(timedelta(hours=9)))
        assert format_local_date(ahead) == "2025-01-01"

    def test_parse_round_trip(self):
        assert parse_local_date("2024-02-29") == date(2024, 2, 29)
        assert format_local_date(parse_local_date("2025-09-20")) == "2025-09-20"

    @pytest.mark.parametrize(
        "text",
        ["", "2025-13-01", "2025-02-29", "2025/01/01", "abcd-01-01", "2025-01", "２０２５-01-01"],
    )
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(ValueError):
            parse_local_date(text)


class TestPastDates:
    def test_oldest_first_ending_today(self):
        today = date(2025, 3, 2)
        days = past_dates(3, today=today)
        assert days == [date(2025, 2, 28), date(2025, 3, 1), date(2025, 3, 2)]

    def test_zero_days(self):
        assert past_dates(0, today=date(2025, 1, 1)) == []

    def test_defaults_to_local_today(self):
        days = past_dates(7)
        assert len(days) == 7
        assert days[-1] == date.today()
