"""todolist-cli domain models.

Pydantic models for the single persisted entity (Task) and the inputs
used to create, update and query it.
"""

from .core import Task, TaskCreate, TaskFilters, TaskUpdate

__all__ = [
    "Task",
    "TaskCreate",
    "TaskFilters",
    "TaskUpdate",
]
