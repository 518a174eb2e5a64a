"""
Create/edit form controller.

Create mode is opened with the range produced by a finished selection;
edit mode is opened for an existing task and only ever changes its title
and category. Invalid input never raises: submit() returns None and the
form stays open.
"""
import logging
from enum import Enum
from typing import Optional, Tuple, Union, Any

from .events import EventHub, FORM_OPENED, FORM_CLOSED
from .schema import Task, Category, Day, DEFAULT_CATEGORY, PREVIEW_TITLE, coerce_day, ordered
from .store import TaskStore, TaskStoreError

logger = logging.getLogger(__name__)


class FormMode(Enum):
    CREATE = "create"
    EDIT = "edit"


class TaskFormController:
    """Holds the transient form state and commits it to the store."""

    def __init__(
        self,
        store: TaskStore,
        events: Optional[EventHub] = None,
        default_category: Category = DEFAULT_CATEGORY,
    ):
        self.store = store
        self.events = events if events is not None else store.events
        self.default_category = default_category
        self._reset()

    def _reset(self) -> None:
        self.mode: Optional[FormMode] = None
        self.pending_range: Optional[Tuple[Day, Day]] = None
        self.editing_task_id: Optional[int] = None
        self.title = ""
        self.category: Category = self.default_category
        self._rejected_category: Optional[Any] = None

    @property
    def is_open(self) -> bool:
        return self.mode is not None

    @property
    def preview_title(self) -> str:
        """Label for the selection overlay while the form is being filled in."""
        return self.title.strip() or PREVIEW_TITLE

    # ──────────────────────────────────────────
    # Opening
    # ──────────────────────────────────────────

    def begin_create(self, start: Any, end: Any) -> None:
        """Open in create mode for the inclusive range [start, end]."""
        start, end = ordered(coerce_day(start), coerce_day(end))
        self._reset()
        self.mode = FormMode.CREATE
        self.pending_range = (start, end)
        self.events.emit(FORM_OPENED, mode=self.mode, task_id=None, range=self.pending_range)

    def begin_edit(self, task_id: int) -> bool:
        """Open in edit mode prefilled from the stored task. Unknown ids are ignored."""
        task = self.store.get(task_id)
        if task is None:
            logger.debug(f"Edit requested for unknown task {task_id}")
            return False
        self._reset()
        self.mode = FormMode.EDIT
        self.editing_task_id = task.id
        self.title = task.title
        self.category = task.category
        self.events.emit(FORM_OPENED, mode=self.mode, task_id=task.id, range=None)
        return True

    # ──────────────────────────────────────────
    # Field input
    # ──────────────────────────────────────────

    def set_title(self, text: Optional[str]) -> None:
        self.title = text or ""

    def set_category(self, value: Union[Category, str]) -> None:
        """Accept a Category or its label. Unknown labels are held and fail submit."""
        try:
            self.category = Category.from_label(value)
            self._rejected_category = None
        except ValueError:
            self._rejected_category = value

    def validation_error(self) -> Optional[str]:
        """Why submit() would refuse right now, or None."""
        if not self.is_open:
            return "form is not open"
        if not self.title.strip():
            return "title is empty"
        if self._rejected_category is not None:
            return f"invalid category {self._rejected_category!r}"
        return None

    # ──────────────────────────────────────────
    # Closing
    # ──────────────────────────────────────────

    def submit(self) -> Optional[Task]:
        """Commit the form. Returns the stored task, or None if rejected."""
        error = self.validation_error()
        if error:
            logger.debug(f"Form submit rejected: {error}")
            return None

        title = self.title.strip()
        try:
            if self.mode == FormMode.EDIT:
                task = self.store.update(self.editing_task_id, title=title, category=self.category)
            else:
                start, end = self.pending_range
                task = self.store.create(title, self.category, start, end)
        except TaskStoreError as e:
            logger.warning(f"Form submit rejected by store: {e}")
            return None

        self._close(submitted=True)
        return task

    def cancel(self) -> None:
        if self.is_open:
            self._close(submitted=False)

    def _close(self, submitted: bool) -> None:
        self._reset()
        self.events.emit(FORM_CLOSED, submitted=submitted)
