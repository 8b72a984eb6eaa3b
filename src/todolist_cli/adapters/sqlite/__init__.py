"""SQLite adapter module - Local task storage implementation."""

from todolist_cli.adapters.sqlite.connection import default_db_path, open_connection
from todolist_cli.adapters.sqlite.store import StoreContext, TaskStore

__all__ = [
    "StoreContext",
    "TaskStore",
    "default_db_path",
    "open_connection",
]
