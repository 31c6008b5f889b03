# src/duke_tasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_list import TaskList
from .ports import Storage, Ui


@dataclass
class AppState:
    # Settings object (config.Settings in the app, SimpleNamespace in tests).
    settings: object

    tasks: TaskList
    ui: Ui
    storage: Storage
