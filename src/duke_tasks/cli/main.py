# src/duke_tasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (seeded from storage), runs the console
REPL, and writes one final snapshot on the way out.
"""

from __future__ import annotations

import logging
import sqlite3

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleUi, run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Final persist. Every mutating command already saved; this covers a failed save earlier on."""
    try:
        state.storage.save(state.tasks)
    except sqlite3.Error:
        logger.exception("Final save failed.")


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    # INFO on the console would interleave with REPL output; keep it in the file.
    setup_logging(log_dir=settings.log_dir, console_level=max(console_level, logging.WARNING))

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    if isinstance(state.ui, ConsoleUi):
        state.ui.greet(settings.app_name)

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
