"""
Persistence collaborators for the task store.

Every backend stores the whole serialized task list under one key:

  load_tasks() -> list of task dicts, or None when nothing is stored
  save_tasks(list of task dicts)

Backends do not validate payloads; decoding errors propagate to the
store, which decides how to degrade.
"""
import contextlib
import copy
import json
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Dict, Any

TaskPayload = List[Dict[str, Any]]


class TaskStorage(ABC):
    """Key/value persistence for the serialized task list."""

    @abstractmethod
    def load_tasks(self) -> Optional[TaskPayload]:
        pass

    @abstractmethod
    def save_tasks(self, tasks: TaskPayload) -> None:
        pass


class MemoryStorage(TaskStorage):
    """In-process storage. Keeps a deep copy so callers cannot alias it."""

    def __init__(self, initial: Optional[Any] = None):
        self._payload = copy.deepcopy(initial)
        self.save_count = 0

    def load_tasks(self) -> Optional[TaskPayload]:
        return copy.deepcopy(self._payload)

    def save_tasks(self, tasks: TaskPayload) -> None:
        self._payload = copy.deepcopy(tasks)
        self.save_count += 1


class JsonFileStorage(TaskStorage):
    """Single JSON document on disk."""

    def __init__(self, path: str):
        self.path = Path(path)

    def load_tasks(self) -> Optional[TaskPayload]:
        """Missing or empty file -> None. Invalid JSON raises ValueError."""
        if not self.path.exists():
            return None
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return None
        return json.loads(text)

    def save_tasks(self, tasks: TaskPayload) -> None:
        """Persist tasks to disk (pretty-printed)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(tasks, f, indent=4)


def _connect(db_path: str) -> sqlite3.Connection:
    """Open a connection in WAL mode."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode = WAL")
    return conn


class SQLiteStorage(TaskStorage):
    """SQLite key/value table holding the JSON task payload."""

    def __init__(self, db_path: str, key: str = "tasks"):
        self.db_path = db_path
        self.key = key
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _init_schema(self):
        """Create the key/value table if it doesn't exist."""
        with contextlib.closing(_connect(self.db_path)) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS system_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()

    def load_tasks(self) -> Optional[TaskPayload]:
        with contextlib.closing(_connect(self.db_path)) as conn:
            row = conn.execute(
                "SELECT value FROM system_state WHERE key = ? LIMIT 1",
                (self.key,)
            ).fetchone()
        if not row:
            return None
        return json.loads(row["value"])

    def save_tasks(self, tasks: TaskPayload) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with contextlib.closing(_connect(self.db_path)) as conn:
            conn.execute("""
                INSERT INTO system_state (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
            """, (self.key, json.dumps(tasks), now))
            conn.commit()


def build_storage(cfg) -> TaskStorage:
    """Pick the backend named by a Config's storage_backend."""
    backend = (cfg.storage_backend or "memory").lower()
    if backend == "json":
        return JsonFileStorage(cfg.storage_path)
    if backend == "sqlite":
        return SQLiteStorage(cfg.storage_path, key=cfg.storage_key)
    if backend == "memory":
        return MemoryStorage()
    raise ValueError(f"Unknown storage backend: {cfg.storage_backend}")
