# src/duke_tasks/tasks/task_list.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import datetime

from ..errors import IndexOutOfRangeError, InvalidArgumentError
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskList:
    """
    Ordered, append-only container that owns every Task of the session.

    Indexing is 1-based: valid task numbers are [1, size()]. Anything else
    (0, negatives, non-ints, bools) raises IndexOutOfRangeError before any mutation.

    Iteration walks a snapshot taken when iteration starts, so mutating the list
    inside a `for task in tasks:` loop is well-defined (the loop sees the old contents).

    Not thread-safe: the console loop is the only caller.
    """

    def __init__(self, existing: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = []
        if existing is not None:
            for task in existing:
                self.add_task(task)

    # ---- helpers ----

    def _check_index(self, task_num: object) -> int:
        # bool is an int subclass; True must not silently mean task #1.
        if isinstance(task_num, bool) or not isinstance(task_num, int):
            raise IndexOutOfRangeError(task_num, len(self._tasks))
        if task_num < 1 or task_num > len(self._tasks):
            raise IndexOutOfRangeError(task_num, len(self._tasks))
        return task_num - 1

    # ---- CRUD ----

    def add_task(self, task: Task) -> Task:
        if task is None:
            raise InvalidArgumentError("Cannot add an empty task.")
        if not isinstance(task, Task):
            raise InvalidArgumentError(f"Expected a Task, got {type(task).__name__}.")
        self._tasks.append(task)
        logger.debug("Task added at #%d: %s", len(self._tasks), task)
        return task

    def delete_task(self, task_num: int) -> Task:
        idx = self._check_index(task_num)
        removed = self._tasks.pop(idx)
        logger.debug("Task #%d deleted: %s", task_num, removed)
        return removed

    def finish_task(self, task_num: int) -> Task:
        task = self._tasks[self._check_index(task_num)]
        task.finish()
        logger.debug("Task #%d marked done", task_num)
        return task

    def get_task(self, task_id: int) -> Task:
        return self._tasks[self._check_index(task_id)]

    def size(self) -> int:
        return len(self._tasks)

    def clear_all(self) -> list[Task]:
        """Remove every task; returns what was removed (in order)."""
        removed = self._tasks
        self._tasks = []
        logger.debug("Cleared %d tasks", len(removed))
        return removed

    def tasks(self) -> list[Task]:
        """Snapshot copy of the current contents."""
        return list(self._tasks)

    # ---- queries / bulk removal ----

    def find_tasks_by_keyword(self, keyword: str) -> list[Task]:
        return [task for task in self._tasks if task.contains_keyword(keyword)]

    def remove_where(self, predicate: Callable[[Task], bool]) -> list[Task]:
        """
        Stable partition: drop every task matching `predicate`, return them in order.

        Works by position, never by equality, so two tasks that compare equal
        cannot be confused with each other.
        """
        removed: list[Task] = []
        kept: list[Task] = []
        for task in self._tasks:
            (removed if predicate(task) else kept).append(task)
        self._tasks = kept
        return removed

    def remove_completed_tasks(self) -> list[Task]:
        removed = self.remove_where(lambda task: task.is_complete)
        logger.debug("Removed %d completed tasks", len(removed))
        return removed

    def remove_expired_tasks(self, now: datetime | None = None) -> list[Task]:
        # One clock reading per call: every task is judged against the same instant.
        if now is None:
            now = datetime.now()
        removed = self.remove_where(lambda task: task.is_expired(now))
        logger.debug("Removed %d expired tasks (now=%s)", len(removed), now.isoformat())
        return removed

    # ---- dunder ----

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def __repr__(self) -> str:
        return f"TaskList(size={len(self._tasks)})"
