# Month planner: configuration
# Override storage location and grid layout via monthplan.yaml or MONTHPLAN_CONFIG.

import logging
import os
import sys
import yaml
from pathlib import Path
from dataclasses import dataclass, fields
from typing import Optional

CONFIG_PATH = Path(__file__).parent / "monthplan.yaml"
CONFIG_ENV = "MONTHPLAN_CONFIG"


@dataclass
class Config:
    """Runtime configuration for the month planner."""

    # Persistence
    storage_backend: str = "json"          # "json" | "sqlite" | "memory"
    storage_path: str = "~/.local/share/monthplan/tasks.json"
    storage_key: str = "tasks"             # key in the sqlite system_state table

    # Grid layout
    week_start: str = "sunday"             # "sunday" | "monday"
    pad_grid: bool = True                  # include neighbouring-month days

    # Form defaults
    default_category: str = "To Do"

    log_level: str = "INFO"

    def resolve_paths(self):
        """Expand ~ in storage_path."""
        if self.storage_path:
            self.storage_path = str(Path(self.storage_path).expanduser())

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load config from YAML file, falling back to defaults."""
        if path is None:
            path = os.environ.get(CONFIG_ENV)
        cfg_path = Path(path) if path else CONFIG_PATH
        known = {f.name for f in fields(cls)}
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**{k: v for k, v in data.items() if k in known})
            except Exception as e:
                logging.getLogger(__name__).warning(f"Ignoring config {cfg_path}: {e}")
                cfg = cls()
        else:
            cfg = cls()
        cfg.resolve_paths()
        return cfg


def setup_logging(level: str = "INFO") -> None:
    """Route package logs to stdout."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [monthplan] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
