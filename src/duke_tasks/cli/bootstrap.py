# src/duke_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- seeds the TaskList from the SQLite store,
- wires console Ui + store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import ConsoleUi
from ..core.ports import Storage, Ui
from ..core.state import AppState
from ..tasks.task_list import TaskList
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    ui: Ui | None = None,
    storage: Storage | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Ui and storage are injectable for tests; by default the console Ui and a
    TaskStore at settings.tasks_db_path are used. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if storage is None:
        storage = TaskStore(settings.tasks_db_path)
    if ui is None:
        ui = ConsoleUi(timestamps=bool(getattr(settings, "console_timestamps", False)))

    tasks = TaskList(storage.load_tasks())
    logger.info("Task list seeded with %d tasks", tasks.size())

    return AppState(settings=settings, tasks=tasks, ui=ui, storage=storage)
