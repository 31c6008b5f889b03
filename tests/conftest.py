# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from duke_tasks.core.state import AppState
from duke_tasks.tasks.task_list import TaskList
from duke_tasks.tasks.task_models import Task

from .fakes import FakeStorage, FakeUi

# Fixed reference instant for anything date-related.
NOW = datetime(2026, 10, 18, 12, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We use a SimpleNamespace rather than importing real config, so unit tests
    never read the developer's environment or .env.
    """
    return SimpleNamespace(
        app_name="duke",
        log_level="DEBUG",
        console_timestamps=False,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        log_dir=tmp_path,
    )


@pytest.fixture()
def ui() -> FakeUi:
    return FakeUi()


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def tasks() -> TaskList:
    """milk run / milk shake / bread, all pending."""
    return TaskList([Task.todo("milk run"), Task.todo("milk shake"), Task.todo("bread")])


@pytest.fixture()
def state(settings: SimpleNamespace, tasks: TaskList, ui: FakeUi, storage: FakeStorage) -> AppState:
    return AppState(settings=settings, tasks=tasks, ui=ui, storage=storage)
