"""Shared fixtures for month planner tests."""

import sys
from pathlib import Path

import pytest

# Ensure the package is importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from monthplan.events import EventHub
from monthplan.form import TaskFormController
from monthplan.pointer import PointerStateMachine
from monthplan.schema import Day
from monthplan.storage import MemoryStorage
from monthplan.store import TaskStore


def march(n: int) -> Day:
    """Day n of March 2025 (the 1st is a Saturday)."""
    return Day.of(2025, 3, 1) + (n - 1)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return TaskStore(storage, EventHub())


@pytest.fixture
def form(store):
    return TaskFormController(store)


@pytest.fixture
def machine(store, form):
    return PointerStateMachine(store, form)
