"""
Planner facade: everything the rendering layer needs in one object.

  tasks / visible_tasks()     current store contents, filtered
  days() / segments_for(day)  grid cells and the task bars drawn in them
  preview_range               selection overlay while dragging a new range
  handle_pointer_*            pointer events from day cells
  filter setters, form input/submit/cancel, month navigation
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union

from .config import Config, setup_logging
from .events import EventHub
from .filters import FilterState, TimeFilter
from .form import TaskFormController
from .grid import DayGrid, WeekStart, month_start, shift_month, is_padding
from .pointer import PointerStateMachine
from .schema import Task, Category, Day, DEFAULT_CATEGORY, coerce_day
from .storage import build_storage
from .store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """One task's bar inside one day cell."""
    task: Task
    is_start: bool  # draw left resize handle
    is_end: bool    # draw right resize handle

    @property
    def color(self) -> str:
        return self.task.category.color


class CalendarPlanner:
    """Month view task planner state, independent of any UI toolkit."""

    def __init__(
        self,
        store: Optional[TaskStore] = None,
        reference: Any = None,
        grid: Optional[DayGrid] = None,
        default_category: Category = DEFAULT_CATEGORY,
    ):
        self.store = store if store is not None else TaskStore()
        self.events: EventHub = self.store.events
        self.grid = grid or DayGrid()
        self.reference = month_start(coerce_day(reference) or Day.today())
        self.filters = FilterState()
        self.form = TaskFormController(self.store, self.events, default_category)
        self.pointer = PointerStateMachine(self.store, self.form, self.events)

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None, reference: Any = None) -> "CalendarPlanner":
        """Build storage from config and load persisted tasks."""
        cfg = cfg or Config.load()
        setup_logging(cfg.log_level)
        store = TaskStore(build_storage(cfg))
        store.load()
        grid = DayGrid(WeekStart.from_str(cfg.week_start), pad=bool(cfg.pad_grid))
        try:
            default_category = Category.from_label(cfg.default_category)
        except ValueError:
            logger.warning(f"Unknown default_category {cfg.default_category!r}, using {DEFAULT_CATEGORY.label}")
            default_category = DEFAULT_CATEGORY
        return cls(store, reference, grid, default_category)

    def subscribe(self, event_type: str, callback: Callable) -> None:
        self.events.subscribe(event_type, callback)

    # ──────────────────────────────────────────
    # Rendering queries
    # ──────────────────────────────────────────

    @property
    def tasks(self) -> List[Task]:
        return self.store.tasks

    def visible_tasks(self) -> List[Task]:
        """Recomputed on every call; filtering never touches the store."""
        return self.filters.apply(self.store.tasks)

    def days(self) -> List[Day]:
        return self.grid.days_in_view(self.reference)

    def headers(self) -> List[str]:
        return self.grid.headers()

    def is_padding(self, day: Day) -> bool:
        return is_padding(day, self.reference)

    def segments_for(self, day: Any) -> List[Segment]:
        day = coerce_day(day)
        return [
            Segment(task=t, is_start=(t.start == day), is_end=(t.end == day))
            for t in self.visible_tasks()
            if t.covers(day)
        ]

    @property
    def preview_range(self) -> Optional[Tuple[Day, Day]]:
        return self.pointer.preview_range

    def is_previewed(self, day: Any) -> bool:
        preview = self.preview_range
        if preview is None:
            return False
        day = coerce_day(day)
        return preview[0] <= day <= preview[1]

    @property
    def preview_title(self) -> str:
        return self.form.preview_title

    # ──────────────────────────────────────────
    # Pointer events
    # ──────────────────────────────────────────

    def handle_pointer_down(self, day: Any, task_id: Optional[int] = None, click_offset: float = 0.0) -> None:
        self.pointer.handle_pointer_down(day, task_id, click_offset)

    def handle_pointer_enter(self, day: Any) -> None:
        self.pointer.handle_pointer_enter(day)

    def handle_pointer_up(self) -> None:
        self.pointer.handle_pointer_up()

    # ──────────────────────────────────────────
    # Filters
    # ──────────────────────────────────────────

    def toggle_category(self, category: Union[Category, str], enabled: bool) -> None:
        self.filters.toggle_category(category, enabled)

    def set_time_filter(self, time_filter: Union[TimeFilter, int, None]) -> None:
        self.filters.set_time_filter(time_filter)

    def set_search(self, text: Optional[str]) -> None:
        self.filters.set_search(text)

    def clear_filters(self) -> None:
        self.filters.clear()

    # ──────────────────────────────────────────
    # Form
    # ──────────────────────────────────────────

    def open_edit(self, task_id: int) -> bool:
        return self.form.begin_edit(task_id)

    def set_form_title(self, text: Optional[str]) -> None:
        self.form.set_title(text)

    def set_form_category(self, value: Union[Category, str]) -> None:
        self.form.set_category(value)

    def submit_form(self) -> Optional[Task]:
        return self.form.submit()

    def cancel_form(self) -> None:
        self.form.cancel()

    # ──────────────────────────────────────────
    # Month navigation
    # ──────────────────────────────────────────

    def next_month(self) -> Day:
        self.reference = shift_month(self.reference, 1)
        return self.reference

    def previous_month(self) -> Day:
        self.reference = shift_month(self.reference, -1)
        return self.reference

    def go_to_today(self) -> Day:
        self.reference = month_start(Day.today())
        return self.reference
