"""
Tests for the data model: Day arithmetic, categories, task serialization.
"""
from datetime import date, datetime

import pytest

from monthplan.schema import Day, Category, Task, compare, ordered, coerce_day, CATEGORY_COLORS


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Day
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_day_ordering_and_equality():
    """Days compare by calendar date only"""
    a = Day.of(2025, 3, 5)
    b = Day.of(2025, 3, 7)
    assert a < b
    assert b > a
    assert a <= Day.of(2025, 3, 5)
    assert a == Day.from_date(datetime(2025, 3, 5, 23, 59))
    assert len({a, Day.of(2025, 3, 5), b}) == 2


def test_day_arithmetic_crosses_month_boundaries():
    """Adding days rolls over months and years"""
    assert Day.of(2025, 3, 30) + 3 == Day.of(2025, 4, 2)
    assert Day.of(2025, 1, 1) - 1 == Day.of(2024, 12, 31)
    assert Day.of(2025, 3, 12) - Day.of(2025, 3, 10) == 2
    assert Day.of(2025, 3, 1) - Day.of(2025, 2, 1) == 28


def test_compare_and_ordered():
    a, b = Day.of(2025, 3, 1), Day.of(2025, 3, 2)
    assert compare(a, b) == -1
    assert compare(b, a) == 1
    assert compare(a, a) == 0
    assert ordered(b, a) == (a, b)
    assert ordered(a, b) == (a, b)


def test_day_from_iso_drops_time():
    """A timestamp string keeps only its calendar date"""
    assert Day.from_iso("2025-03-05") == Day.of(2025, 3, 5)
    assert Day.from_iso("2025-03-05T18:30:00.000Z") == Day.of(2025, 3, 5)
    assert Day.of(2025, 3, 5).isoformat() == "2025-03-05"


def test_day_from_iso_rejects_garbage():
    with pytest.raises(ValueError):
        Day.from_iso("not a date")
    with pytest.raises(ValueError):
        Day.from_iso(20250305)


def test_coerce_day_accepts_date_like_values():
    assert coerce_day(date(2025, 3, 5)) == Day.of(2025, 3, 5)
    assert coerce_day("2025-03-05") == Day.of(2025, 3, 5)
    assert coerce_day(None) is None
    with pytest.raises(TypeError):
        coerce_day(3.5)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Category
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_category_from_label_and_name():
    assert Category.from_label("In Progress") is Category.IN_PROGRESS
    assert Category.from_label("in_progress") is Category.IN_PROGRESS
    assert Category.from_label("review") is Category.REVIEW
    assert Category.from_label(Category.TODO) is Category.TODO


def test_category_from_label_rejects_unknown():
    with pytest.raises(ValueError):
        Category.from_label("Blocked")
    with pytest.raises(ValueError):
        Category.from_label(None)


def test_every_category_has_a_color():
    assert set(CATEGORY_COLORS) == set(Category)
    assert Category.COMPLETED.color == "#4caf50"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Task
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_task_duration_and_coverage():
    task = Task(id=1, title="Sprint", start=Day.of(2025, 3, 10), end=Day.of(2025, 3, 12))
    assert task.duration == 2
    assert task.covers(Day.of(2025, 3, 11))
    assert not task.covers(Day.of(2025, 3, 13))
    assert not task.is_single_day()


def test_task_serialization():
    """to_dict uses labels and ISO dates; from_dict restores the same value"""
    task = Task(id=4, title="Draft spec", category=Category.REVIEW,
                start=Day.of(2025, 3, 5), end=Day.of(2025, 3, 7))
    data = task.to_dict()
    assert data == {
        "id": 4,
        "title": "Draft spec",
        "category": "Review",
        "start": "2025-03-05",
        "end": "2025-03-07",
    }
    assert Task.from_dict(data) == task


@pytest.mark.parametrize("broken", [
    {"title": "x", "category": "To Do", "start": "2025-03-01", "end": "2025-03-01"},
    {"id": "1", "title": "x", "category": "To Do", "start": "2025-03-01", "end": "2025-03-01"},
    {"id": True, "title": "x", "category": "To Do", "start": "2025-03-01", "end": "2025-03-01"},
    {"id": 1, "title": "x", "category": "Someday", "start": "2025-03-01", "end": "2025-03-01"},
    {"id": 1, "title": "x", "category": "To Do", "start": "yesterday", "end": "2025-03-01"},
    {"id": 1, "title": "x", "category": "To Do", "start": "2025-03-05", "end": "2025-03-01"},
    {"id": 1, "title": None, "category": "To Do", "start": "2025-03-01", "end": "2025-03-01"},
    {"id": 1, "title": "", "category": "To Do", "start": "2025-03-01", "end": "2025-03-01"},
    {"id": 1, "title": "x ", "category": "To Do", "start": "2025-03-01", "end": "2025-03-01"},
    ["not", "a", "dict"],
])
def test_task_from_dict_rejects_malformed(broken):
    with pytest.raises(ValueError):
        Task.from_dict(broken)
