"""Tests for month grid enumeration and navigation."""
from monthplan.grid import (
    DayGrid,
    WeekStart,
    days_in_month,
    days_in_view,
    format_day,
    is_padding,
    month_end,
    month_start,
    shift_month,
    weekday_headers,
)
from monthplan.schema import Day


def test_days_in_month_lengths():
    assert len(days_in_month(Day.of(2025, 3, 17))) == 31
    assert len(days_in_month(Day.of(2025, 4, 1))) == 30
    assert len(days_in_month(Day.of(2024, 2, 10))) == 29
    assert len(days_in_month(Day.of(2025, 2, 10))) == 28


def test_month_bounds():
    assert month_start(Day.of(2025, 3, 17)) == Day.of(2025, 3, 1)
    assert month_end(Day.of(2025, 3, 17)) == Day.of(2025, 3, 31)
    assert month_end(Day.of(2024, 12, 5)) == Day.of(2024, 12, 31)


def test_shift_month_crosses_years():
    assert shift_month(Day.of(2024, 12, 15), 1) == Day.of(2025, 1, 1)
    assert shift_month(Day.of(2025, 1, 31), -1) == Day.of(2024, 12, 1)
    assert shift_month(Day.of(2025, 3, 1), 12) == Day.of(2026, 3, 1)


def test_padded_view_starts_on_sunday():
    """March 2025 starts on a Saturday: six leading February days"""
    days = days_in_view(Day.of(2025, 3, 1))
    assert days[0] == Day.of(2025, 2, 23)
    assert days[-1] == Day.of(2025, 4, 5)
    assert len(days) == 42
    assert all(b - a == 1 for a, b in zip(days, days[1:]))


def test_padded_view_starts_on_monday():
    days = days_in_view(Day.of(2025, 3, 1), week_start=WeekStart.MONDAY)
    assert days[0] == Day.of(2025, 2, 24)
    assert days[-1] == Day.of(2025, 4, 6)
    assert len(days) % 7 == 0


def test_month_that_fills_whole_weeks_gets_no_padding():
    """February 2026 begins on a Sunday and has exactly four weeks"""
    days = days_in_view(Day.of(2026, 2, 14))
    assert days == days_in_month(Day.of(2026, 2, 1))
    assert len(days) == 28


def test_unpadded_view_is_the_month():
    assert days_in_view(Day.of(2025, 3, 9), pad=False) == days_in_month(Day.of(2025, 3, 1))


def test_is_padding():
    ref = Day.of(2025, 3, 1)
    assert is_padding(Day.of(2025, 2, 28), ref)
    assert is_padding(Day.of(2025, 4, 1), ref)
    assert not is_padding(Day.of(2025, 3, 31), ref)


def test_headers_and_format():
    assert weekday_headers()[0] == "Sun"
    assert weekday_headers(WeekStart.MONDAY)[0] == "Mon"
    assert weekday_headers(WeekStart.MONDAY)[-1] == "Sun"
    assert format_day(Day.of(2025, 3, 5)) == "5"
    assert format_day(Day.of(2025, 3, 5), "%b %d") == "Mar 05"


def test_day_grid_provider():
    grid = DayGrid(WeekStart.from_str("monday"), pad=True)
    assert grid.week_start is WeekStart.MONDAY
    assert grid.days_in_view(Day.of(2025, 3, 1))[0] == Day.of(2025, 2, 24)
    assert grid.compare(Day.of(2025, 3, 1), Day.of(2025, 3, 2)) == -1
    assert grid.format(Day.of(2025, 3, 9)) == "9"
    assert WeekStart.from_str("fortnight") is WeekStart.SUNDAY
