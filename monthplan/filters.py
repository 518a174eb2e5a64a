"""
Filter engine: which tasks are visible for the current filter settings.

A task is visible when it passes all three checks:
  category  - no categories selected, or the task's category is selected
  time      - ALL_TIME, or the day-of-month of the task's start is within
              the window threshold (7 / 14 / 21)
  search    - empty search, or the title contains it (case-insensitive)

The time check looks only at the day number of the start date, not at
elapsed time, so it ignores which month the task is in.
"""
from enum import Enum
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Union

from .schema import Task, Category


class TimeFilter(Enum):
    """Time window selector, valued by its day-of-month threshold."""
    WITHIN_1_WEEK = 7
    WITHIN_2_WEEKS = 14
    WITHIN_3_WEEKS = 21
    ALL_TIME = None

    @property
    def threshold(self) -> Optional[int]:
        return self.value

    @classmethod
    def from_weeks(cls, weeks: Optional[int]) -> "TimeFilter":
        """Map 1/2/3 to the week windows; None or 0 means all time."""
        if not weeks:
            return cls.ALL_TIME
        for member in cls:
            if member.value == weeks * 7:
                return member
        raise ValueError(f"Unsupported time window: {weeks} weeks")


def matches(
    task: Task,
    categories: Optional[Set[Category]] = None,
    time_filter: TimeFilter = TimeFilter.ALL_TIME,
    search: str = "",
) -> bool:
    if categories and task.category not in categories:
        return False
    threshold = time_filter.threshold
    if threshold is not None and task.start.day_of_month > threshold:
        return False
    if search and search.lower() not in task.title.lower():
        return False
    return True


def filter_tasks(
    tasks: Iterable[Task],
    categories: Optional[Iterable[Category]] = None,
    time_filter: TimeFilter = TimeFilter.ALL_TIME,
    search: str = "",
) -> List[Task]:
    """Return the visible subset of `tasks`, preserving order. Pure."""
    selected = set(categories) if categories else set()
    return [t for t in tasks if matches(t, selected, time_filter, search or "")]


@dataclass
class FilterState:
    """Ephemeral filter settings driven by the sidebar controls."""

    categories: Set[Category] = field(default_factory=set)
    time_filter: TimeFilter = TimeFilter.ALL_TIME
    search: str = ""

    def toggle_category(self, category: Union[Category, str], enabled: bool) -> None:
        category = Category.from_label(category)
        if enabled:
            self.categories.add(category)
        else:
            self.categories.discard(category)

    def set_categories(self, categories: Iterable[Union[Category, str]]) -> None:
        self.categories = {Category.from_label(c) for c in categories}

    def set_time_filter(self, time_filter: Union[TimeFilter, int, None]) -> None:
        if not isinstance(time_filter, TimeFilter):
            time_filter = TimeFilter.from_weeks(time_filter)
        self.time_filter = time_filter

    def set_search(self, text: Optional[str]) -> None:
        self.search = text or ""

    def clear(self) -> None:
        self.categories = set()
        self.time_filter = TimeFilter.ALL_TIME
        self.search = ""

    def apply(self, tasks: Iterable[Task]) -> List[Task]:
        return filter_tasks(tasks, self.categories, self.time_filter, self.search)
