"""Repositories for the todolist-cli presentation layer.

The task repository sits between the controllers and the storage and
network adapters:
- todolist_cli.adapters.sqlite (local task store)
- todolist_cli.services.remote (remote todo source)
"""

from .task_repository import TaskRepository

__all__ = [
    "TaskRepository",
]
