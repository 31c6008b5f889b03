# src/duke_tasks/cli/parser.py

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime

from ..core.commands import (
    AddCommand,
    CleanCommand,
    ClearCommand,
    Command,
    DeleteCommand,
    DoneCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    PruneCommand,
)
from ..errors import ParseError
from ..tasks.task_models import Task

CommandFactory = Callable[[str], Command]

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H%M"
# A bare date means "by the end of that day".
DATE_ONLY_TIME = (23, 59)


class CommandRegistry:
    """Maps a command word (plus aliases) to a factory that builds the Command from its argument text."""

    def __init__(self) -> None:
        self._factories: dict[str, CommandFactory] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        factory: CommandFactory,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._factories[key] = factory
        self._help[key] = help_text
        for alias in aliases:
            self._factories[alias.lower()] = factory

    def parse(self, line: str) -> Command:
        """
        Turn one raw input line into a Command.
        Raises ParseError for unknown/malformed input, InvalidArgumentError for bad arguments.
        """
        text = (line or "").strip()
        if not text:
            raise ParseError("Empty command. Type 'help' to list available commands.")

        parts = text.split(maxsplit=1)
        word = parts[0]
        rest = parts[1].strip() if len(parts) > 1 else ""

        factory = self._factories.get(word.lower())
        if factory is None:
            raise ParseError(f"Unknown command: {word}. Type 'help' to list available commands.")
        return factory(rest)

    def build_help(self) -> list[str]:
        return [f"  {name} - {help_text}" for name, help_text in self._help.items()]


# ---- argument helpers ----


def parse_when(raw: str) -> datetime:
    """Accept 'YYYY-MM-DD HHMM' or 'YYYY-MM-DD' (end of that day)."""
    raw = raw.strip()
    try:
        return datetime.strptime(raw, DATETIME_FORMAT)
    except ValueError:
        pass
    try:
        day = datetime.strptime(raw, DATE_FORMAT)
    except ValueError:
        raise ParseError(
            f"Cannot understand the date '{raw}'. Use YYYY-MM-DD or YYYY-MM-DD HHMM."
        ) from None
    hour, minute = DATE_ONLY_TIME
    return day.replace(hour=hour, minute=minute)


def parse_task_num(raw: str, usage: str) -> int:
    if not raw:
        raise ParseError(f"Please give a task number. Usage: {usage}")
    try:
        return int(raw)
    except ValueError:
        raise ParseError(f"'{raw}' is not a task number. Usage: {usage}") from None


def _split_once(marker: str, text: str, usage: str) -> tuple[str, str]:
    # Pad so that a marker right at the start ("/by x") still counts as "missing description".
    parts = re.split(rf"\s{re.escape(marker)}\s", f" {text} ", maxsplit=1)
    if len(parts) != 2:
        raise ParseError(f"Missing '{marker}'. Usage: {usage}")
    return parts[0].strip(), parts[1].strip()


def _no_args(name: str, command: Command) -> CommandFactory:
    def factory(rest: str) -> Command:
        if rest:
            raise ParseError(f"'{name}' does not take any arguments.")
        return command

    return factory


# ---- factories ----

TODO_USAGE = "todo <description>"
DEADLINE_USAGE = "deadline <description> /by <date>"
EVENT_USAGE = "event <description> /from <date> /to <date>"
DONE_USAGE = "done <task number>"
DELETE_USAGE = "delete <task number>"


def _make_todo(rest: str) -> Command:
    if not rest:
        raise ParseError(f"The description of a todo cannot be empty. Usage: {TODO_USAGE}")
    return AddCommand(Task.todo(rest))


def _make_deadline(rest: str) -> Command:
    description, when = _split_once("/by", rest, DEADLINE_USAGE)
    if not description:
        raise ParseError(f"The description of a deadline cannot be empty. Usage: {DEADLINE_USAGE}")
    return AddCommand(Task.deadline(description, parse_when(when)))


def _make_event(rest: str) -> Command:
    description, period = _split_once("/from", rest, EVENT_USAGE)
    if not description:
        raise ParseError(f"The description of an event cannot be empty. Usage: {EVENT_USAGE}")
    start_raw, end_raw = _split_once("/to", period, EVENT_USAGE)
    return AddCommand(Task.event(description, parse_when(start_raw), parse_when(end_raw)))


def _make_find(rest: str) -> Command:
    if not rest:
        raise ParseError("Please enter a keyword to find! Usage: find <keyword>")
    return FindCommand(rest)


def _make_done(rest: str) -> Command:
    return DoneCommand(parse_task_num(rest, DONE_USAGE))


def _make_delete(rest: str) -> Command:
    return DeleteCommand(parse_task_num(rest, DELETE_USAGE))


def _make_help(rest: str) -> Command:
    return HelpCommand(tuple(registry.build_help()))


registry = CommandRegistry()

registry.register("list", _no_args("list", ListCommand()), help_text="Show all tasks.", aliases=["ls"])
registry.register("find", _make_find, help_text="Find tasks containing a keyword: find <keyword>.")
registry.register("todo", _make_todo, help_text=f"Add a todo: {TODO_USAGE}.")
registry.register("deadline", _make_deadline, help_text=f"Add a deadline: {DEADLINE_USAGE}.")
registry.register("event", _make_event, help_text=f"Add an event: {EVENT_USAGE}.")
registry.register("done", _make_done, help_text=f"Mark a task as done: {DONE_USAGE}.", aliases=["mark"])
registry.register("delete", _make_delete, help_text=f"Delete a task: {DELETE_USAGE}.", aliases=["rm"])
registry.register("clear", _no_args("clear", ClearCommand()), help_text="Delete every task.")
registry.register("clean", _no_args("clean", CleanCommand()), help_text="Delete all completed tasks.")
registry.register("prune", _no_args("prune", PruneCommand()), help_text="Delete all expired deadlines/events.")
registry.register("help", _make_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("bye", _no_args("bye", ExitCommand()), help_text="Save and quit.", aliases=["exit", "quit"])


def parse_command(line: str) -> Command:
    return registry.parse(line)
