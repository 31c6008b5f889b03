# src/duke_tasks/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from ..errors import InvalidArgumentError
from .task_models import Task, TaskKind

logger = logging.getLogger(__name__)


class TaskStore:
    """
    SQLite task store.

    The whole list is persisted as rows ordered by `position` (1-based, same as
    the numbers shown to the user). Saving rewrites the table in one transaction,
    so a crash mid-save leaves the previous snapshot intact.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Unreadable rows are moved to `rejected_tasks` on load, never dropped.

    Each method opens its own short-lived SQLite connection.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        # WAL is unavailable on some filesystems; the default journal works too.
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    position INTEGER PRIMARY KEY,
                    kind TEXT NOT NULL,
                    description TEXT NOT NULL,
                    is_complete INTEGER NOT NULL DEFAULT 0,
                    due_at TEXT,
                    start_at TEXT,
                    end_at TEXT
                )
                """
            )

            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("is_complete", "INTEGER NOT NULL DEFAULT 0")
            add_col("due_at", "TEXT")
            add_col("start_at", "TEXT")
            add_col("end_at", "TEXT")

            # Rows that could not be turned into a Task are parked here instead of being
            # overwritten by the next save().
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS rejected_tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    rejected_at REAL NOT NULL,
                    reason TEXT NOT NULL,
                    position INTEGER,
                    kind TEXT,
                    description TEXT,
                    is_complete INTEGER,
                    due_at TEXT,
                    start_at TEXT,
                    end_at TEXT
                )
                """
            )

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _dt_to_str(value: datetime | None) -> str | None:
        return value.isoformat(timespec="minutes") if value is not None else None

    @staticmethod
    def _str_to_dt(raw: str | None) -> datetime | None:
        if not raw:
            return None
        return datetime.fromisoformat(raw)

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        """Raises ValueError (incl. InvalidArgumentError) or TypeError when the row cannot be a Task."""
        kind = TaskKind.from_db(row["kind"])
        if kind is None:
            raise InvalidArgumentError(f"unknown kind {row['kind']!r}")
        return Task(
            kind=kind,
            description=str(row["description"] or ""),
            is_complete=bool(row["is_complete"]),
            due_at=self._str_to_dt(row["due_at"]),
            start_at=self._str_to_dt(row["start_at"]),
            end_at=self._str_to_dt(row["end_at"]),
        )

    def _task_to_row(self, position: int, task: Task) -> tuple[object, ...]:
        return (
            position,
            task.kind.value,
            task.description,
            1 if task.is_complete else 0,
            self._dt_to_str(task.due_at),
            self._dt_to_str(task.start_at),
            self._dt_to_str(task.end_at),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def count_rejected(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM rejected_tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def load_tasks(self) -> list[Task]:
        """
        Return the persisted tasks in list order.

        Rows that cannot be loaded are moved to `rejected_tasks` (kept verbatim,
        with the reason) in the same transaction, so the next save() cannot lose them.
        """
        out: list[Task] = []
        rejected: list[tuple[sqlite3.Row, str]] = []

        conn = self._get_conn()
        try:
            with conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    SELECT position, kind, description, is_complete, due_at, start_at, end_at
                    FROM tasks
                    ORDER BY position ASC
                    """
                )
                rows = cur.fetchall()

                for row in rows:
                    try:
                        out.append(self._row_to_task(row))
                    except (ValueError, TypeError) as e:
                        logger.warning("Rejecting row position=%s: %s", row["position"], e)
                        rejected.append((row, str(e)))

                if rejected:
                    now = time.time()
                    cur.executemany(
                        """
                        INSERT INTO rejected_tasks
                            (rejected_at, reason, position, kind, description, is_complete, due_at, start_at, end_at)
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        [
                            (
                                now,
                                reason,
                                row["position"],
                                row["kind"],
                                row["description"],
                                row["is_complete"],
                                row["due_at"],
                                row["start_at"],
                                row["end_at"],
                            )
                            for row, reason in rejected
                        ],
                    )
                    cur.executemany(
                        "DELETE FROM tasks WHERE position = ?",
                        [(row["position"],) for row, _ in rejected],
                    )
        finally:
            conn.close()

        logger.info(
            "Loaded %d tasks from %s (%d rows, %d moved to rejected_tasks)",
            len(out),
            self._db_path,
            len(rows),
            len(rejected),
        )
        return out

    def save(self, tasks: Iterable[Task]) -> None:
        """Replace the stored list with `tasks` (TaskList or any iterable of Task)."""
        rows = [self._task_to_row(i, task) for i, task in enumerate(tasks, start=1)]

        conn = self._get_conn()
        try:
            with conn:
                conn.execute("DELETE FROM tasks")
                conn.executemany(
                    """
                    INSERT INTO tasks (position, kind, description, is_complete, due_at, start_at, end_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    rows,
                )
        finally:
            conn.close()
        logger.debug("Saved %d tasks to %s", len(rows), self._db_path)
