# src/duke_tasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from ..errors import InvalidArgumentError

DISPLAY_DATETIME_FORMAT = "%b %d %Y %H:%M"


class TaskKind(StrEnum):
    """
    Task variant tag.

    The values double as the storage representation (see task_store.py).
    """

    TODO = "todo"
    DEADLINE = "deadline"
    EVENT = "event"

    @property
    def marker(self) -> str:
        return _MARKERS[self]

    @classmethod
    def from_db(cls, raw: str | None) -> TaskKind | None:
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


_MARKERS = {
    TaskKind.TODO: "T",
    TaskKind.DEADLINE: "D",
    TaskKind.EVENT: "E",
}


def format_when(value: datetime) -> str:
    return value.strftime(DISPLAY_DATETIME_FORMAT)


@dataclass(slots=True)
class Task:
    """
    One trackable item of work.

    A single tagged record instead of a class per variant:
    - TODO: no temporal fields
    - DEADLINE: due_at
    - EVENT: start_at / end_at

    Tasks have no stored id; a task is identified by its position in a TaskList.
    """

    kind: TaskKind
    description: str
    is_complete: bool = False

    due_at: datetime | None = None
    start_at: datetime | None = None
    end_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.description, str) or not self.description.strip():
            raise InvalidArgumentError("The description of a task cannot be empty.")
        self.description = self.description.strip()

        if self.kind is TaskKind.TODO:
            if self.due_at is not None or self.start_at is not None or self.end_at is not None:
                raise InvalidArgumentError("A todo cannot carry dates.")
        elif self.kind is TaskKind.DEADLINE:
            if self.due_at is None:
                raise InvalidArgumentError("A deadline needs a due date.")
            if self.start_at is not None or self.end_at is not None:
                raise InvalidArgumentError("A deadline cannot carry an event period.")
        elif self.kind is TaskKind.EVENT:
            if self.start_at is None or self.end_at is None:
                raise InvalidArgumentError("An event needs both a start and an end.")
            if self.due_at is not None:
                raise InvalidArgumentError("An event cannot carry a due date.")
            if self.end_at < self.start_at:
                raise InvalidArgumentError("An event cannot end before it starts.")
        else:
            raise InvalidArgumentError(f"Unknown task kind: {self.kind!r}")

    # ---- constructors ----

    @classmethod
    def todo(cls, description: str) -> Task:
        return cls(kind=TaskKind.TODO, description=description)

    @classmethod
    def deadline(cls, description: str, due_at: datetime) -> Task:
        return cls(kind=TaskKind.DEADLINE, description=description, due_at=due_at)

    @classmethod
    def event(cls, description: str, start_at: datetime, end_at: datetime) -> Task:
        return cls(kind=TaskKind.EVENT, description=description, start_at=start_at, end_at=end_at)

    # ---- behaviour ----

    def finish(self) -> None:
        """Mark the task as done. Calling it again is a no-op."""
        self.is_complete = True

    def contains_keyword(self, keyword: str) -> bool:
        """Case-sensitive substring match against the description."""
        return keyword in self.description

    def is_expired(self, now: datetime | None = None) -> bool:
        """True if the task's relevant date is strictly before `now`. Undated tasks never expire."""
        if now is None:
            now = datetime.now()
        if self.kind is TaskKind.DEADLINE:
            return self.due_at is not None and self.due_at < now
        if self.kind is TaskKind.EVENT:
            return self.end_at is not None and self.end_at < now
        return False

    def render(self) -> str:
        status = "X" if self.is_complete else " "
        return f"[{self.kind.marker}][{status}] {self.description}{self._annotation()}"

    def _annotation(self) -> str:
        if self.kind is TaskKind.DEADLINE and self.due_at is not None:
            return f" (by: {format_when(self.due_at)})"
        if self.kind is TaskKind.EVENT and self.start_at is not None and self.end_at is not None:
            return f" (from: {format_when(self.start_at)} to: {format_when(self.end_at)})"
        return ""

    def __str__(self) -> str:
        return self.render()
