"""
Task store: owns the task list and keeps persistence in sync.

Every mutation builds a complete new list in which exactly one task differs
and swaps it in with replace_all(). Either the swap happens or the store is
untouched. After a successful swap the list is written to the persistence
collaborator (best-effort) and subscribers are notified.
"""
import logging
from typing import List, Optional, Iterator, Any, Callable, Union

from .events import EventHub, TASKS_CHANGED
from .schema import Task, Category, Day, DEFAULT_CATEGORY, coerce_day
from .storage import TaskStorage, MemoryStorage

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "category", "start", "end")


class TaskStoreError(Exception):
    """Base class for rejected store operations."""
    pass


class TaskNotFound(TaskStoreError):
    """Raised when an operation references an unknown task id."""
    pass


class InvalidTask(TaskStoreError, ValueError):
    """Raised when a mutation would break a task invariant."""
    pass


def _clean_title(title: Any) -> str:
    if not isinstance(title, str) or not title.strip():
        raise InvalidTask("Task title must be non-empty")
    return title.strip()


def _clean_category(category: Union[Category, str]) -> Category:
    try:
        return Category.from_label(category)
    except ValueError as e:
        raise InvalidTask(str(e)) from None


def _clean_day(value: Any, name: str) -> Day:
    try:
        day = coerce_day(value)
    except (TypeError, ValueError) as e:
        raise InvalidTask(f"Invalid {name}: {e}") from None
    if day is None:
        raise InvalidTask(f"Task {name} is required")
    return day


class TaskStore:
    """In-memory task list mirrored to a TaskStorage backend."""

    def __init__(self, storage: Optional[TaskStorage] = None, events: Optional[EventHub] = None):
        self.storage = storage if storage is not None else MemoryStorage()
        self.events = events if events is not None else EventHub()
        self._tasks: List[Task] = []
        self._next_id = 0

    # ──────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of the current tasks in insertion order."""
        return list(self._tasks)

    def get(self, task_id: int) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def subscribe(self, callback: Callable) -> None:
        """Shorthand for subscribing to tasks_changed."""
        self.events.subscribe(TASKS_CHANGED, callback)

    # ──────────────────────────────────────────
    # Loading
    # ──────────────────────────────────────────

    def load(self) -> int:
        """
        Replace the in-memory list with the persisted one.

        Nothing stored, an unreadable payload, or any malformed entry leaves
        the store empty. Never raises. Returns the number of tasks loaded.
        """
        tasks: List[Task] = []
        try:
            payload = self.storage.load_tasks()
            if payload is not None:
                tasks = self._decode(payload)
        except Exception as e:
            logger.warning(f"Discarding stored tasks: {e}")
            tasks = []

        self._tasks = tasks
        self._next_id = max(self._next_id, max((t.id for t in tasks), default=-1) + 1)
        logger.info(f"Loaded {len(tasks)} tasks")
        self.events.emit(TASKS_CHANGED, tasks=self.tasks)
        return len(tasks)

    @staticmethod
    def _decode(payload: Any) -> List[Task]:
        if not isinstance(payload, list):
            raise ValueError(f"Expected a list of tasks, got {type(payload).__name__}")
        tasks = [Task.from_dict(entry) for entry in payload]
        seen = set()
        for task in tasks:
            if task.id in seen:
                raise ValueError(f"Duplicate task id {task.id}")
            seen.add(task.id)
        return tasks

    # ──────────────────────────────────────────
    # Mutations
    # ──────────────────────────────────────────

    def next_id(self) -> int:
        """Allocate an id. Ids are never handed out twice."""
        nid = self._next_id
        self._next_id += 1
        return nid

    def replace_all(self, tasks: List[Task]) -> None:
        """Swap in a complete task list, then persist and notify."""
        seen = set()
        for task in tasks:
            if task.start > task.end:
                raise InvalidTask(f"Task {task.id} starts after it ends ({task.start} > {task.end})")
            if task.id in seen:
                raise InvalidTask(f"Duplicate task id {task.id}")
            seen.add(task.id)

        self._tasks = list(tasks)
        if self._tasks:
            self._next_id = max(self._next_id, max(t.id for t in self._tasks) + 1)
        self._persist()
        self.events.emit(TASKS_CHANGED, tasks=self.tasks)

    def create(
        self,
        title: str,
        category: Union[Category, str] = DEFAULT_CATEGORY,
        start: Any = None,
        end: Any = None,
    ) -> Task:
        """Append a new task. Raises InvalidTask without touching the store."""
        title = _clean_title(title)
        category = _clean_category(category)
        start = _clean_day(start, "start")
        end = _clean_day(end, "end")
        if start > end:
            raise InvalidTask(f"Task starts after it ends ({start} > {end})")

        task = Task(id=self.next_id(), title=title, category=category, start=start, end=end)
        self.replace_all(self._tasks + [task])
        logger.debug(f"Created task {task.id}: {task.title} [{task.start}..{task.end}]")
        return task

    def update(self, task_id: int, **fields: Any) -> Task:
        """
        Replace task `task_id` with a copy carrying the supplied fields.

        Accepts title, category, start and end. Raises TaskNotFound or
        InvalidTask and leaves the store unchanged on rejection.
        """
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise InvalidTask(f"Cannot update fields: {sorted(unknown)}")

        current = self.get(task_id)
        if current is None:
            raise TaskNotFound(f"Task {task_id} not found")

        changes = {}
        if "title" in fields:
            changes["title"] = _clean_title(fields["title"])
        if "category" in fields:
            changes["category"] = _clean_category(fields["category"])
        for name in ("start", "end"):
            if name in fields:
                changes[name] = _clean_day(fields[name], name)

        updated = current.replace(**changes)
        if updated.start > updated.end:
            raise InvalidTask(f"Task {task_id} would start after it ends ({updated.start} > {updated.end})")

        self.replace_all([updated if t.id == task_id else t for t in self._tasks])
        return updated

    def _persist(self) -> None:
        """Write the whole list out. Failures are logged, never raised."""
        try:
            self.storage.save_tasks([t.to_dict() for t in self._tasks])
        except Exception as e:
            logger.warning(f"Failed to persist {len(self._tasks)} tasks: {e}")
