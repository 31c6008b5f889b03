# src/duke_tasks/errors.py

"""
User-facing error hierarchy.

Everything derived from DukeError is recoverable at the command-loop level:
the loop reports the message and keeps going with the task list unchanged.
"""

from __future__ import annotations


class DukeError(Exception):
    """Base class for errors that are safe to show to the user."""


class InvalidArgumentError(DukeError, ValueError):
    """A task or command was constructed with semantically invalid input."""


class IndexOutOfRangeError(DukeError, IndexError):
    """A 1-based task number fell outside [1, size]."""

    def __init__(self, task_num: object, size: int) -> None:
        self.task_num = task_num
        self.size = size
        if size == 0:
            msg = "There are no tasks in your list."
        else:
            msg = f"Task number {task_num} is out of range (valid: 1..{size})."
        super().__init__(msg)


class ParseError(DukeError):
    """Raw input could not be turned into a command."""
