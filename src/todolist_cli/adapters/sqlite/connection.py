"""Connection setup for the local SQLite task store.

Every connection handed out by this module is configured the same way:
dict-like rows, the ``fold`` search function, WAL journaling for file
databases, owner-only permissions on first creation, and an up-to-date
schema.
"""

from __future__ import annotations

import logging
import os
import sqlite3
import uuid
from pathlib import Path

from platformdirs import user_data_dir

from todolist_cli.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from todolist_cli.adapters.sqlite.utils import fold_text

logger = logging.getLogger(__name__)

MEMORY = ":memory:"
_APP_NAME = "todolist-cli"
_DB_FILE = "tasks.db"


def default_db_path() -> Path:
    """Location of the task database when none is configured."""
    return Path(user_data_dir(_APP_NAME)) / _DB_FILE


def memory_uri() -> str:
    """URI of a fresh named in-memory database.

    Named shared-cache databases let several connections (main and
    background contexts) see the same data for as long as one of them
    stays open.
    """
    return f"file:todolist-{uuid.uuid4().hex}?mode=memory&cache=shared"


def open_connection(
    target: str | Path,
    *,
    uri: bool = False,
    migrate: bool = True,
) -> sqlite3.Connection:
    """Open and configure a connection to the task database.

    Args:
        target: Database file path, or a ``file:`` URI when *uri* is true
        uri: Interpret *target* as an SQLite URI
        migrate: Apply pending schema migrations

    Returns:
        Configured sqlite3.Connection

    Raises:
        sqlite3.Error, OSError: If the database cannot be opened
        RuntimeError: If a migration fails
    """
    is_new_database = False
    if not uri:
        db_path = Path(target)
        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

    connection = sqlite3.connect(
        str(target),
        uri=uri,
        check_same_thread=False,  # access is serialized by StoreContext
        timeout=30.0,  # Wait up to 30s for locks
    )
    try:
        connection.row_factory = sqlite3.Row
        connection.create_function("fold", 1, fold_text, deterministic=True)

        if not uri:
            connection.execute("PRAGMA journal_mode = WAL")
            if is_new_database:
                os.chmod(target, 0o600)

        if migrate:
            applied = MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
            if applied:
                logger.info("task store at %s migrated (%d step(s))", target, applied)
    except Exception:
        connection.close()
        raise

    return connection
