"""
Day grid provider: turns a reference month into the sequence of day cells.

The padded view starts on the configured first weekday and is filled out
with days from the neighbouring months so it always spans whole weeks.
"""
from enum import Enum
from typing import List, Optional

from .schema import Day, compare


class WeekStart(Enum):
    """First column of the calendar grid."""
    SUNDAY = "sunday"
    MONDAY = "monday"

    @classmethod
    def from_str(cls, value: str) -> "WeekStart":
        try:
            return cls[value.upper()]
        except (KeyError, AttributeError):
            return cls.SUNDAY


_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def weekday_headers(week_start: WeekStart = WeekStart.SUNDAY) -> List[str]:
    if week_start == WeekStart.MONDAY:
        return _HEADERS[1:] + _HEADERS[:1]
    return list(_HEADERS)


def month_start(reference: Day) -> Day:
    return Day.of(reference.year, reference.month, 1)


def month_end(reference: Day) -> Day:
    return shift_month(month_start(reference), 1) - 1


def shift_month(reference: Day, delta: int) -> Day:
    """First day of the month `delta` months away from the reference month."""
    index = reference.year * 12 + (reference.month - 1) + delta
    return Day.of(index // 12, index % 12 + 1, 1)


def days_in_month(reference: Day) -> List[Day]:
    """Every day of the reference month, in order."""
    first = month_start(reference)
    count = month_end(reference) - first + 1
    return [first + offset for offset in range(count)]


def _column(day: Day, week_start: WeekStart) -> int:
    # Day.weekday is Monday=0
    if week_start == WeekStart.MONDAY:
        return day.weekday
    return (day.weekday + 1) % 7


def days_in_view(
    reference: Day,
    pad: bool = True,
    week_start: WeekStart = WeekStart.SUNDAY,
) -> List[Day]:
    """
    Ordered day cells for the month containing `reference`.

    With pad=True the list begins with trailing days of the previous month
    and ends with leading days of the next month, so that its first day
    falls on `week_start` and its length is a multiple of 7.
    """
    days = days_in_month(reference)
    if not pad:
        return days

    lead = _column(days[0], week_start)
    trail = (7 - (len(days) + lead) % 7) % 7
    first = days[0] - lead
    total = lead + len(days) + trail
    return [first + offset for offset in range(total)]


def is_padding(day: Day, reference: Day) -> bool:
    """True for cells that belong to a neighbouring month."""
    return (day.year, day.month) != (reference.year, reference.month)


def format_day(day: Day, fmt: Optional[str] = None) -> str:
    """Display label for a cell; defaults to the bare day number."""
    if fmt is None:
        return str(day.day_of_month)
    return day.value.strftime(fmt)


class DayGrid:
    """Grid provider bound to a week layout, as consumed by the planner."""

    def __init__(self, week_start: WeekStart = WeekStart.SUNDAY, pad: bool = True):
        self.week_start = week_start
        self.pad = pad

    def days_in_view(self, reference: Day) -> List[Day]:
        return days_in_view(reference, pad=self.pad, week_start=self.week_start)

    def headers(self) -> List[str]:
        return weekday_headers(self.week_start)

    compare = staticmethod(compare)
    format = staticmethod(format_day)
