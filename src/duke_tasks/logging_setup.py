# src/duke_tasks/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "duke.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable:
    - allow duke_tasks logs at the configured console level
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    - suppress any other third-party logger unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "duke_tasks" or name.startswith("duke_tasks."):
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.ERROR


def _reset_root(root: logging.Logger) -> None:
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()


def setup_logging(
    *,
    log_dir: str | Path = ".local/duke",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send duke_tasks records to stderr (filtered, at `console_level`) and
    everything at `file_level` to <log_dir>/duke.log. Returns the log file path.

    Replaces any handlers already on the root logger, so calling it twice is harmless.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    _reset_root(root)
    root.setLevel(min(console_level, file_level))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleNoiseFilter())

    logfile = logging.FileHandler(str(log_file), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(logfile)
    logging.captureWarnings(True)

    return log_file
