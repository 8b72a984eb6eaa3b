"""Database schema definitions for the local task store.

One entity, one table. ``title``, ``details`` and ``created_at`` are
nullable at the storage level; the repository guarantees non-empty titles
and a creation timestamp for everything it writes.
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT,
    details TEXT,
    created_at DATETIME,
    is_completed BOOLEAN NOT NULL DEFAULT 0
)
"""

CREATE_TASKS_CREATED_AT_INDEX = (
    "CREATE INDEX IF NOT EXISTS idx_tasks_created_at ON tasks(created_at)"
)
CREATE_TASKS_TITLE_INDEX = "CREATE INDEX IF NOT EXISTS idx_tasks_title ON tasks(title)"

ALL_TABLES = [
    CREATE_TASKS_TABLE,
]

ALL_INDEXES = [
    CREATE_TASKS_CREATED_AT_INDEX,
    CREATE_TASKS_TITLE_INDEX,
]
