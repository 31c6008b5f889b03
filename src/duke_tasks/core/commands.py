# src/duke_tasks/core/commands.py

"""
Command family.

Each command is an immutable value built from one parsed input line and
executed exactly once against (TaskList, Ui, Storage), which are passed in and never kept.

Ordering of side effects is always: mutate -> echo -> persist.
Mutating commands persist immediately after they report.
Argument validation happens in __post_init__, so an invalid command never
reaches execute() and never touches the list.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import ClassVar, Protocol

from ..errors import InvalidArgumentError
from ..tasks.task_list import TaskList
from ..tasks.task_models import Task
from .ports import Storage, Ui

logger = logging.getLogger(__name__)

LIST_HEADER = "Here are the tasks in your list:"
FIND_HEADER = "Here are the matching tasks in your list:"
BYE_MESSAGE = "Bye. Hope to see you again soon!"


class Command(Protocol):
    is_exit: ClassVar[bool]

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None: ...


def _numbered(tasks: list[Task]) -> list[str]:
    return [f"{i}. {task}" for i, task in enumerate(tasks, start=1)]


def _tasks(n: int, adjective: str = "") -> str:
    noun = "task" if n == 1 else "tasks"
    return f"{n} {adjective} {noun}" if adjective else f"{n} {noun}"


def _count_line(tasks: TaskList) -> str:
    return f"Now you have {_tasks(tasks.size())} in the list."


def _persist(tasks: TaskList, storage: Storage) -> None:
    storage.save(tasks)
    logger.debug("Persisted %d tasks", tasks.size())


def _validate_task_num(task_num: object) -> None:
    if isinstance(task_num, bool) or not isinstance(task_num, int):
        raise InvalidArgumentError("Task number must be a whole number.")
    if task_num < 1:
        raise InvalidArgumentError("Task number must be 1 or greater.")


@dataclass(frozen=True, slots=True)
class ListCommand:
    is_exit: ClassVar[bool] = False

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        ui.echo([LIST_HEADER, *_numbered(tasks.tasks())])


@dataclass(frozen=True, slots=True)
class FindCommand:
    """Search by case-sensitive substring; results are re-numbered 1..k by rank."""

    keyword: str
    is_exit: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if not isinstance(self.keyword, str) or not self.keyword.strip():
            raise InvalidArgumentError("keyword must be non-empty")

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        found = tasks.find_tasks_by_keyword(self.keyword)
        ui.echo([FIND_HEADER, *_numbered(found)])


@dataclass(frozen=True, slots=True)
class AddCommand:
    task: Task
    is_exit: ClassVar[bool] = False

    def __post_init__(self) -> None:
        if not isinstance(self.task, Task):
            raise InvalidArgumentError("Nothing to add: a task is required.")

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        added = tasks.add_task(self.task)
        ui.echo(["Got it. I've added this task:", f"  {added}", _count_line(tasks)])
        _persist(tasks, storage)


@dataclass(frozen=True, slots=True)
class DeleteCommand:
    task_num: int
    is_exit: ClassVar[bool] = False

    def __post_init__(self) -> None:
        _validate_task_num(self.task_num)

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        removed = tasks.delete_task(self.task_num)
        ui.echo(["Noted. I've removed this task:", f"  {removed}", _count_line(tasks)])
        _persist(tasks, storage)


@dataclass(frozen=True, slots=True)
class DoneCommand:
    task_num: int
    is_exit: ClassVar[bool] = False

    def __post_init__(self) -> None:
        _validate_task_num(self.task_num)

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        finished = tasks.finish_task(self.task_num)
        ui.echo(["Nice! I've marked this task as done:", f"  {finished}"])
        _persist(tasks, storage)


@dataclass(frozen=True, slots=True)
class ClearCommand:
    is_exit: ClassVar[bool] = False

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        removed = tasks.clear_all()
        if not removed:
            ui.echo(["There are no tasks to clear."])
            return
        ui.echo([f"Removed {_tasks(len(removed))} from your list."])
        _persist(tasks, storage)


@dataclass(frozen=True, slots=True)
class CleanCommand:
    """Drop every completed task."""

    is_exit: ClassVar[bool] = False

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        removed = tasks.remove_completed_tasks()
        if not removed:
            ui.echo(["There are no completed tasks to remove."])
            return
        ui.echo([f"Removed {_tasks(len(removed), 'completed')}:", *_numbered(removed)])
        _persist(tasks, storage)


@dataclass(frozen=True, slots=True)
class PruneCommand:
    """Drop every deadline/event whose date has passed."""

    is_exit: ClassVar[bool] = False

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        removed = tasks.remove_expired_tasks()
        if not removed:
            ui.echo(["There are no expired tasks to remove."])
            return
        ui.echo([f"Removed {_tasks(len(removed), 'expired')}:", *_numbered(removed)])
        _persist(tasks, storage)


@dataclass(frozen=True, slots=True)
class HelpCommand:
    lines: tuple[str, ...]
    is_exit: ClassVar[bool] = False

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        ui.echo(["Available commands:", *self.lines])


@dataclass(frozen=True, slots=True)
class ExitCommand:
    is_exit: ClassVar[bool] = True

    def execute(self, tasks: TaskList, ui: Ui, storage: Storage) -> None:
        ui.echo([BYE_MESSAGE])
