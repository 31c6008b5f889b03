# tests/test_parser.py

from __future__ import annotations

from datetime import datetime

import pytest

from duke_tasks.cli.parser import CommandRegistry, parse_command, parse_when
from duke_tasks.core.commands import (
    AddCommand,
    CleanCommand,
    ClearCommand,
    DeleteCommand,
    DoneCommand,
    ExitCommand,
    FindCommand,
    HelpCommand,
    ListCommand,
    PruneCommand,
)
from duke_tasks.errors import InvalidArgumentError, ParseError
from duke_tasks.tasks.task_models import TaskKind


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("list", ListCommand),
        ("LS", ListCommand),
        ("clear", ClearCommand),
        ("clean", CleanCommand),
        ("prune", PruneCommand),
        ("help", HelpCommand),
        ("?", HelpCommand),
        ("bye", ExitCommand),
        ("quit", ExitCommand),
    ],
)
def test_simple_commands(line: str, expected: type) -> None:
    assert isinstance(parse_command(line), expected)


def test_todo() -> None:
    cmd = parse_command("todo   read book ")
    assert isinstance(cmd, AddCommand)
    assert cmd.task.kind is TaskKind.TODO
    assert cmd.task.description == "read book"


def test_deadline_with_time() -> None:
    cmd = parse_command("deadline return book /by 2026-10-20 1800")
    assert isinstance(cmd, AddCommand)
    assert cmd.task.kind is TaskKind.DEADLINE
    assert cmd.task.description == "return book"
    assert cmd.task.due_at == datetime(2026, 10, 20, 18, 0)


def test_event() -> None:
    cmd = parse_command("event team sync /from 2026-10-21 1400 /to 2026-10-21 1530")
    assert isinstance(cmd, AddCommand)
    assert cmd.task.start_at == datetime(2026, 10, 21, 14, 0)
    assert cmd.task.end_at == datetime(2026, 10, 21, 15, 30)


def test_date_only_means_end_of_day() -> None:
    assert parse_when("2026-10-20") == datetime(2026, 10, 20, 23, 59)


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        "fly to the moon",
        "todo",
        "deadline return book",
        "deadline /by 2026-10-20",
        "deadline return book /by tomorrow",
        "event party /from 2026-10-20",
        "event /from 2026-10-20 /to 2026-10-21",
        "done",
        "done two",
        "delete 1.5",
        "find",
        "list everything",
    ],
)
def test_parse_errors(line: str) -> None:
    with pytest.raises(ParseError):
        parse_command(line)


def test_invalid_arguments_surface_from_constructors() -> None:
    with pytest.raises(InvalidArgumentError):
        parse_command("delete 0")
    with pytest.raises(InvalidArgumentError):
        parse_command("event backwards /from 2026-10-21 1200 /to 2026-10-21 1100")


def test_index_commands() -> None:
    done = parse_command("done 3")
    assert isinstance(done, DoneCommand) and done.task_num == 3
    rm = parse_command("rm 2")
    assert isinstance(rm, DeleteCommand) and rm.task_num == 2


def test_find_keeps_inner_spaces() -> None:
    cmd = parse_command("find milk shake")
    assert isinstance(cmd, FindCommand)
    assert cmd.keyword == "milk shake"


def test_help_lists_every_registered_command() -> None:
    cmd = parse_command("help")
    assert isinstance(cmd, HelpCommand)
    names = [line.split(" - ")[0].strip() for line in cmd.lines]
    assert names == [
        "list", "find", "todo", "deadline", "event", "done",
        "delete", "clear", "clean", "prune", "help", "bye",
    ]


def test_registry_routes_aliases_and_unknown() -> None:
    reg = CommandRegistry()
    reg.register("ping", lambda rest: ListCommand(), "ping", aliases=["p"])

    assert isinstance(reg.parse("P"), ListCommand)
    with pytest.raises(ParseError, match="Unknown command"):
        reg.parse("pong")
    assert reg.build_help() == ["  ping - ping"]
