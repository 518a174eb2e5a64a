"""
Pointer interaction state machine.

Turns the stream of pointer events coming from day cells into one of four
interactions:

  Idle ──down on empty cell──▶ SelectingRange ──up──▶ create form, Idle
  Idle ──down on task start/end──▶ ResizingTask ──up──▶ Idle
  Idle ──down inside task──▶ MovingTask ──up──▶ Idle

Moves and resizes are written to the store on every pointer-enter, so the
task itself is the drag feedback. A new selection has no task yet and is
exposed as preview_range instead.

A press on a task that is released without any pointer-enter in between
is a click: nothing is written and the edit form opens for that task.

There is no cancel transition; only pointer-up returns to Idle, so the UI
must deliver pointer-up even when it happens outside the grid.
"""
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple, Union, Any

from .events import EventHub, PREVIEW_CHANGED
from .form import TaskFormController
from .schema import Task, Day, coerce_day, ordered
from .store import TaskStore, TaskStoreError

logger = logging.getLogger(__name__)


class Edge(Enum):
    """Which endpoint of a task a resize is adjusting."""
    LEFT = "left"
    RIGHT = "right"


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# States
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class SelectingRange:
    anchor: Day
    current: Day

    @property
    def range(self) -> Tuple[Day, Day]:
        return ordered(self.anchor, self.current)


@dataclass(frozen=True)
class MovingTask:
    task_id: int
    anchor: Day
    moved: bool = False  # any pointer-enter since the press


@dataclass(frozen=True)
class ResizingTask:
    task_id: int
    edge: Edge
    anchor: Day
    moved: bool = False


InteractionState = Union[Idle, SelectingRange, MovingTask, ResizingTask]

IDLE = Idle()

# Fraction of the cell width separating the left and right half
EDGE_SPLIT = 0.5


def classify_task_press(task: Task, day: Day, click_offset: float = 0.0) -> Optional[InteractionState]:
    """
    Decide what a press on `task`'s segment in `day` starts.

    Single-day task: left or right edge by which half of the cell was hit.
    Start day: left edge. End day: right edge. Strictly inside: move.
    A day outside the task's range returns None.
    """
    if not task.covers(day):
        return None
    if task.start == day and task.end == day:
        edge = Edge.LEFT if click_offset < EDGE_SPLIT else Edge.RIGHT
        return ResizingTask(task_id=task.id, edge=edge, anchor=day)
    if task.start == day:
        return ResizingTask(task_id=task.id, edge=Edge.LEFT, anchor=day)
    if task.end == day:
        return ResizingTask(task_id=task.id, edge=Edge.RIGHT, anchor=day)
    return MovingTask(task_id=task.id, anchor=day)


class PointerStateMachine:
    """Single current interaction; events are handled strictly in order."""

    def __init__(self, store: TaskStore, form: TaskFormController, events: Optional[EventHub] = None):
        self.store = store
        self.form = form
        self.events = events if events is not None else store.events
        self.state: InteractionState = IDLE

    # ──────────────────────────────────────────
    # Exposed to rendering
    # ──────────────────────────────────────────

    @property
    def is_idle(self) -> bool:
        return isinstance(self.state, Idle)

    @property
    def preview_range(self) -> Optional[Tuple[Day, Day]]:
        """Inclusive range of an in-progress selection, else None."""
        if isinstance(self.state, SelectingRange):
            return self.state.range
        return None

    @property
    def active_task_id(self) -> Optional[int]:
        """Task being moved or resized, else None."""
        if isinstance(self.state, (MovingTask, ResizingTask)):
            return self.state.task_id
        return None

    # ──────────────────────────────────────────
    # Event handlers
    # ──────────────────────────────────────────

    def handle_pointer_down(self, day: Any, task_id: Optional[int] = None, click_offset: float = 0.0) -> None:
        """
        Press on a day cell, or on a task's segment in that cell when task_id
        is given. click_offset is the horizontal hit position as a fraction
        of the cell width. A task press never also starts a selection.
        """
        day = coerce_day(day)
        if not self.is_idle:
            logger.debug(f"Ignoring pointer-down on {day} while {type(self.state).__name__}")
            return

        if task_id is None:
            self._set_state(SelectingRange(anchor=day, current=day))
            return

        task = self.store.get(task_id)
        if task is None:
            logger.warning(f"Pointer-down on unknown task {task_id}")
            return
        next_state = classify_task_press(task, day, click_offset)
        if next_state is None:
            logger.warning(f"Pointer-down on task {task_id} at {day}, outside {task.start}..{task.end}")
            return
        self._set_state(next_state)

    def handle_pointer_enter(self, day: Any) -> None:
        day = coerce_day(day)
        state = self.state

        if isinstance(state, SelectingRange):
            if state.current != day:
                self._set_state(SelectingRange(anchor=state.anchor, current=day))
        elif isinstance(state, MovingTask):
            self.state = MovingTask(task_id=state.task_id, anchor=state.anchor, moved=True)
            self._move(state.task_id, day)
        elif isinstance(state, ResizingTask):
            self.state = ResizingTask(task_id=state.task_id, edge=state.edge, anchor=state.anchor, moved=True)
            self._resize(state.task_id, state.edge, day)

    def handle_pointer_up(self) -> None:
        state = self.state
        self._set_state(IDLE)

        if isinstance(state, SelectingRange):
            start, end = state.range
            self.form.begin_create(start, end)
        elif isinstance(state, (MovingTask, ResizingTask)) and not state.moved:
            self.form.begin_edit(state.task_id)

    # ──────────────────────────────────────────
    # Store writes
    # ──────────────────────────────────────────

    def _move(self, task_id: int, day: Day) -> None:
        """Put the task's start on `day`, keeping its duration. Not clamped to the view."""
        task = self.store.get(task_id)
        if task is None:
            logger.warning(f"Task {task_id} disappeared during move")
            return
        try:
            new_start, new_end = day, day + task.duration
        except (OverflowError, ValueError) as e:
            logger.warning(f"Cannot move task {task_id} to {day}: {e}")
            return
        if (new_start, new_end) == (task.start, task.end):
            return
        self._write(task_id, start=new_start, end=new_end)

    def _resize(self, task_id: int, edge: Edge, day: Day) -> None:
        """Move one edge to `day` unless that would cross the other edge."""
        task = self.store.get(task_id)
        if task is None:
            logger.warning(f"Task {task_id} disappeared during resize")
            return
        if edge == Edge.LEFT:
            if day > task.end:
                logger.debug(f"Left edge of task {task_id} cannot pass its end {task.end}")
                return
            if day != task.start:
                self._write(task_id, start=day)
        else:
            if day < task.start:
                logger.debug(f"Right edge of task {task_id} cannot pass its start {task.start}")
                return
            if day != task.end:
                self._write(task_id, end=day)

    def _write(self, task_id: int, **fields: Day) -> None:
        try:
            self.store.update(task_id, **fields)
        except TaskStoreError as e:
            logger.warning(f"Drag update for task {task_id} rejected: {e}")

    def _set_state(self, state: InteractionState) -> None:
        before = self.preview_range
        self.state = state
        after = self.preview_range
        if before != after:
            self.events.emit(PREVIEW_CHANGED, range=after)
