# src/duke_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
import sqlite3
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import TextIO

from ..cli.parser import parse_command
from ..core.state import AppState
from ..errors import DukeError

logger = logging.getLogger(__name__)

DIVIDER = "    " + "_" * 60
INDENT = "     "
PROMPT = "> "


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleUi:
    """Prints blocks of output lines framed by dividers (optionally timestamped)."""

    def __init__(self, *, timestamps: bool = False, out: TextIO | None = None) -> None:
        self._timestamps = timestamps
        self._out = out

    def _print(self, text: str) -> None:
        print(text, file=self._out if self._out is not None else sys.stdout, flush=True)

    def _prefix(self) -> str:
        return f"[{_ts_local()}] " if self._timestamps else ""

    def echo(self, lines: Sequence[str]) -> None:
        prefix = self._prefix()
        self._print(DIVIDER)
        for line in lines:
            self._print(f"{INDENT}{prefix}{line}")
        self._print(DIVIDER)

    def error(self, message: str) -> None:
        self.echo([f"OOPS!!! {message}"])

    def greet(self, app_name: str) -> None:
        self.echo([f"Hello! I'm {app_name}.", "What can I do for you? (type 'help' for commands)"])


def run_console_loop(state: AppState, input_fn: Callable[[str], str] = input) -> None:
    """
    Read -> parse -> execute until an exit command, EOF or Ctrl+C.

    Any DukeError is reported to the user as one message and the loop continues.
    Unexpected errors are logged with a traceback and reported generically.
    """
    logger.info("Console connector started (tasks=%d).", state.tasks.size())

    while True:
        try:
            line = input_fn(PROMPT)
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line.strip():
            continue

        try:
            command = parse_command(line)
            command.execute(state.tasks, state.ui, state.storage)
        except DukeError as e:
            logger.debug("Rejected input %r: %s", line, e)
            state.ui.error(str(e))
            continue
        except sqlite3.Error:
            logger.exception("Failed to persist tasks.")
            state.ui.error("Could not save your tasks. Changes are kept in memory for now.")
            continue
        except Exception:
            logger.exception("Command handler crashed.")
            state.ui.error("Internal error while handling the command.")
            continue

        if command.is_exit:
            logger.info("Console exit command received.")
            break

    logger.info("Console connector finished.")
