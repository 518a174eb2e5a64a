"""
Month planner schema: calendar days, categories and tasks.

A task is a titled, categorized, inclusive range of days:

  start ≤ end   (start == end is a single-day task)

Days carry no time-of-day; two days compare purely by calendar date.
"""
from enum import Enum
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import total_ordering
from typing import Optional, Dict, Any, Union


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Day
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@total_ordering
@dataclass(frozen=True)
class Day:
    """A calendar date with total order and equality (no time component)."""

    value: date

    @classmethod
    def of(cls, year: int, month: int, day: int) -> "Day":
        return cls(date(year, month, day))

    @classmethod
    def from_date(cls, value: Union[date, datetime]) -> "Day":
        """Wrap a date or datetime, dropping any time-of-day."""
        if isinstance(value, datetime):
            value = value.date()
        return cls(value)

    @classmethod
    def from_iso(cls, text: str) -> "Day":
        """Parse YYYY-MM-DD. A trailing time component is accepted and discarded."""
        if not isinstance(text, str):
            raise ValueError(f"Expected a date string, got {type(text).__name__}")
        head = text.strip().split("T", 1)[0]
        return cls(date.fromisoformat(head))

    @classmethod
    def today(cls) -> "Day":
        return cls(date.today())

    def isoformat(self) -> str:
        return self.value.isoformat()

    @property
    def year(self) -> int:
        return self.value.year

    @property
    def month(self) -> int:
        return self.value.month

    @property
    def day_of_month(self) -> int:
        return self.value.day

    @property
    def weekday(self) -> int:
        """Monday is 0, Sunday is 6."""
        return self.value.weekday()

    def __lt__(self, other: "Day") -> bool:
        if not isinstance(other, Day):
            return NotImplemented
        return self.value < other.value

    def __add__(self, days: int) -> "Day":
        if not isinstance(days, int):
            return NotImplemented
        return Day(date.fromordinal(self.value.toordinal() + days))

    def __sub__(self, other):
        """Day - Day → number of days between them; Day - int → earlier Day."""
        if isinstance(other, Day):
            return self.value.toordinal() - other.value.toordinal()
        if isinstance(other, int):
            return self + (-other)
        return NotImplemented

    def __str__(self) -> str:
        return self.isoformat()


def compare(a: Day, b: Day) -> int:
    """Three-way comparison: -1 if a < b, 0 if equal, 1 if a > b."""
    if a < b:
        return -1
    if a == b:
        return 0
    return 1


def ordered(a: Day, b: Day) -> tuple:
    """Return (min, max) of two days."""
    return (a, b) if a <= b else (b, a)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Category
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class Category(Enum):
    """The four task categories, valued by their display label."""
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "Review"
    COMPLETED = "Completed"

    @property
    def label(self) -> str:
        return self.value

    @property
    def color(self) -> str:
        return CATEGORY_COLORS[self]

    @classmethod
    def from_label(cls, value: str) -> "Category":
        """Accept a display label ("In Progress") or member name ("in_progress")."""
        if isinstance(value, Category):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid category: {value!r}")
        try:
            return cls(value)
        except ValueError:
            pass
        try:
            return cls[value.strip().upper().replace(" ", "_")]
        except KeyError:
            raise ValueError(f"Invalid category: {value!r}") from None


CATEGORY_COLORS: Dict[Category, str] = {
    Category.TODO: "#2196f3",
    Category.IN_PROGRESS: "#ff9800",
    Category.REVIEW: "#9c27b0",
    Category.COMPLETED: "#4caf50",
}

DEFAULT_CATEGORY = Category.TODO

# Overlay shown while a new range is being selected
PREVIEW_COLOR = "#aaa"
PREVIEW_TITLE = "New Task"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Task
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@dataclass(frozen=True)
class Task:
    """A titled, categorized date range on the calendar.

    Tasks are immutable values; the store replaces a task wholesale
    (see ``replace``) instead of editing fields in place.
    """

    id: int
    title: str
    category: Category = DEFAULT_CATEGORY
    start: Day = field(default_factory=Day.today)
    end: Day = field(default_factory=Day.today)

    @property
    def duration(self) -> int:
        """Days between start and end (0 for a single-day task)."""
        return self.end - self.start

    def covers(self, day: Day) -> bool:
        return self.start <= day <= self.end

    def is_single_day(self) -> bool:
        return self.start == self.end

    def replace(self, **fields: Any) -> "Task":
        data = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "start": self.start,
            "end": self.end,
        }
        data.update(fields)
        return Task(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted shape."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category.label,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Deserialize one persisted task.

        Raises ValueError on any malformed field. There are no per-field
        defaults: a bad entry invalidates the whole payload.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Task entry must be an object, got {type(data).__name__}")
        try:
            task_id = data["id"]
            title = data["title"]
            category = Category.from_label(data["category"])
            start = Day.from_iso(data["start"])
            end = Day.from_iso(data["end"])
        except KeyError as e:
            raise ValueError(f"Task entry missing field {e}") from None

        # bool is an int subclass
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise ValueError(f"Task id must be an integer, got {task_id!r}")
        if not isinstance(title, str):
            raise ValueError(f"Task {task_id} title must be a string")
        if not title.strip() or title != title.strip():
            raise ValueError(f"Task {task_id} title must be non-empty and trimmed, got {title!r}")
        if start > end:
            raise ValueError(f"Task {task_id} starts after it ends ({start} > {end})")

        return cls(id=task_id, title=title, category=category, start=start, end=end)


def coerce_day(value: Optional[Union[Day, date, datetime, str]]) -> Optional[Day]:
    """Normalize the day-like values accepted at the public API into Day."""
    if value is None or isinstance(value, Day):
        return value
    if isinstance(value, (date, datetime)):
        return Day.from_date(value)
    if isinstance(value, str):
        return Day.from_iso(value)
    raise TypeError(f"Cannot interpret {value!r} as a Day")
