# src/duke_tasks/core/ports.py

"""
Ports (interfaces) used by the core.

Commands depend on these Protocols instead of concrete implementations,
which keeps the console/SQLite pieces swappable and makes testing easier.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from ..tasks.task_models import Task


class Ui(Protocol):
    """Renders output for the user."""

    def echo(self, lines: Sequence[str]) -> None: ...
    def error(self, message: str) -> None: ...


class Storage(Protocol):
    """Durable persistence of the whole task list."""

    def load_tasks(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...
