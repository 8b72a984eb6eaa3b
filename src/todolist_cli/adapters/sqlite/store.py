"""Task store: a thin facade over SQLite connections.

A :class:`TaskStore` hands out :class:`StoreContext` objects. The main
context is shared by all foreground reads and writes; background contexts
are independent connections for batch work on other threads. Writes
committed through any context are visible to the others on their next
fetch, so the last committed writer wins.

A context is not safe for direct concurrent use. Work from other threads
must be submitted through :meth:`StoreContext.perform` or
:meth:`StoreContext.perform_and_wait`, which serialize it.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, TypeVar

from todolist_cli.adapters.sqlite.connection import (
    MEMORY,
    default_db_path,
    memory_uri,
    open_connection,
)
from todolist_cli.adapters.sqlite.utils import (
    generate_uuid,
    parse_datetime,
    row_to_dict,
    to_iso,
    utc_now,
)
from todolist_cli.errors import StoreOpenError
from todolist_cli.models import Task, TaskCreate, TaskFilters, TaskUpdate

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _row_to_task(row: sqlite3.Row) -> Task:
    data = row_to_dict(row)
    return Task(
        id=data["id"],
        title=data["title"] or "",
        details=data["details"],
        created_at=parse_datetime(data["created_at"]),
        is_completed=bool(data["is_completed"]),
    )


class StoreContext:
    """One connection plus the machinery that serializes work on it."""

    def __init__(self, connection: sqlite3.Connection, *, name: str) -> None:
        self.name = name
        self._connection = connection
        self._lock = threading.RLock()
        self._executor: ThreadPoolExecutor | None = None
        self._closed = False

    def __repr__(self) -> str:
        return f"StoreContext(name={self.name!r}, closed={self._closed})"

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_changes(self) -> bool:
        """True while writes are pending that have not been committed."""
        return not self._closed and self._connection.in_transaction

    # ------------------------------------------------------------------
    # Work submission
    # ------------------------------------------------------------------

    def perform_and_wait(self, block: Callable[[StoreContext], T]) -> T:
        """Run *block* on the calling thread, serialized with all other work."""
        with self._lock:
            return block(self)

    def perform(self, block: Callable[[StoreContext], T]) -> Future[T]:
        """Queue *block* on this context's own worker thread."""
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix=f"store-{self.name}"
                )
            return self._executor.submit(self.perform_and_wait, block)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def fetch(self, filters: TaskFilters | None = None) -> list[Task]:
        """Tasks matching *filters*, newest first unless asked otherwise."""
        query, params = self._select("SELECT * FROM tasks", filters or TaskFilters())
        rows = self._connection.execute(query, params).fetchall()
        return [_row_to_task(row) for row in rows]

    def count(self, filters: TaskFilters | None = None) -> int:
        query, params = self._select(
            "SELECT COUNT(*) FROM tasks", filters or TaskFilters(), ordered=False
        )
        return int(self._connection.execute(query, params).fetchone()[0])

    def get(self, task_id: str) -> Task | None:
        row = self._connection.execute(
            "SELECT * FROM tasks WHERE id = ?", (task_id,)
        ).fetchone()
        return _row_to_task(row) if row else None

    @staticmethod
    def _select(
        base: str, filters: TaskFilters, *, ordered: bool = True
    ) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []

        if filters.title is not None:
            clauses.append("title = ?")
            params.append(filters.title)

        if filters.search:
            clauses.append(
                "(instr(fold(title), fold(?)) > 0 OR instr(fold(details), fold(?)) > 0)"
            )
            params.extend([filters.search, filters.search])

        query = base
        if clauses:
            query += " WHERE " + " AND ".join(clauses)

        if ordered:
            direction = "DESC" if filters.newest_first else "ASC"
            query += f" ORDER BY created_at {direction}, rowid {direction}"

        if filters.limit is not None:
            query += " LIMIT ?"
            params.append(filters.limit)

        return query, params

    # ------------------------------------------------------------------
    # Mutations (pending until commit)
    # ------------------------------------------------------------------

    def insert(self, data: TaskCreate) -> Task:
        task = Task(
            id=generate_uuid(),
            title=data.title,
            details=data.details,
            created_at=data.created_at or utc_now(),
            is_completed=data.is_completed,
        )
        self._connection.execute(
            """INSERT INTO tasks (id, title, details, created_at, is_completed)
               VALUES (?, ?, ?, ?, ?)""",
            (
                task.id,
                task.title,
                task.details,
                to_iso(task.created_at),
                1 if task.is_completed else 0,
            ),
        )
        return task

    def update(self, task_id: str, updates: TaskUpdate) -> Task | None:
        """Write the explicitly set fields of *updates*; None if the task is gone."""
        update_dict = updates.model_dump(exclude_unset=True)
        if "is_completed" in update_dict:
            update_dict["is_completed"] = 1 if update_dict["is_completed"] else 0

        if update_dict:
            set_clause = ", ".join(f"{key} = ?" for key in update_dict)
            cursor = self._connection.execute(
                f"UPDATE tasks SET {set_clause} WHERE id = ?",
                [*update_dict.values(), task_id],
            )
            if cursor.rowcount == 0:
                return None

        return self.get(task_id)

    def toggle_completed(self, task_id: str) -> Task | None:
        cursor = self._connection.execute(
            "UPDATE tasks SET is_completed = NOT is_completed WHERE id = ?",
            (task_id,),
        )
        if cursor.rowcount == 0:
            return None
        return self.get(task_id)

    def delete(self, task_id: str) -> bool:
        """Delete a task; False when it was not there."""
        cursor = self._connection.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        return cursor.rowcount > 0

    # ------------------------------------------------------------------
    # Transaction control
    # ------------------------------------------------------------------

    def commit(self) -> None:
        self._connection.commit()

    def rollback(self) -> None:
        self._connection.rollback()

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)
        self._connection.close()


class TaskStore:
    """Owns the task database and the contexts opened on it.

    Args:
        db_path: Database file path; ``None`` for the per-user default
            location, or ``":memory:"`` for a private in-memory database.
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        if db_path is None:
            db_path = default_db_path()

        self._in_memory = str(db_path) == MEMORY
        self._target: str | Path = memory_uri() if self._in_memory else Path(db_path)
        self._main: StoreContext | None = None
        self._background: list[StoreContext] = []
        self._lock = threading.Lock()

    @property
    def location(self) -> str:
        return str(self._target)

    @property
    def is_open(self) -> bool:
        return self._main is not None and not self._main.closed

    def main_context(self) -> StoreContext:
        """The shared foreground context, opened on first use.

        Raises:
            StoreOpenError: If the database cannot be opened. There is no
                degraded mode; callers are expected to terminate.
        """
        if self._main is None:
            with self._lock:
                if self._main is None:
                    self._main = StoreContext(self._open(migrate=True), name="main")
                    logger.info("task store opened at %s", self.location)
        return self._main

    def new_background_context(self) -> StoreContext:
        """An independent context for batch work off the foreground thread.

        The caller owns the context and should close it when done; any
        still open are closed with the store.
        """
        self.main_context()
        context = StoreContext(self._open(migrate=False), name="background")
        with self._lock:
            self._background = [c for c in self._background if not c.closed]
            self._background.append(context)
        return context

    def save(self, context: StoreContext) -> bool:
        """Commit pending changes of *context*, if there are any.

        A failed commit is logged and reported through the return value.
        Nothing is rolled back, so the pending changes stay visible to
        the context until a later save succeeds.
        """
        if not context.has_changes:
            return True
        try:
            context.perform_and_wait(lambda ctx: ctx.commit())
        except sqlite3.Error as e:
            logger.error("save failed on %s context: %s", context.name, e)
            return False
        return True

    def close(self) -> None:
        """Close every context opened by this store."""
        with self._lock:
            contexts, self._background = self._background, []
            main, self._main = self._main, None
        for context in contexts:
            context.close()
        if main is not None:
            main.close()
            logger.info("task store closed at %s", self.location)

    def _open(self, *, migrate: bool) -> sqlite3.Connection:
        try:
            return open_connection(self._target, uri=self._in_memory, migrate=migrate)
        except (sqlite3.Error, OSError, RuntimeError) as e:
            logger.critical("cannot open task store at %s: %s", self.location, e)
            raise StoreOpenError(f"Cannot open task store at {self.location}: {e}") from e
