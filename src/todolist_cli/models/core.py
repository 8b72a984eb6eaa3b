"""Task data models."""

from datetime import datetime

from pydantic import BaseModel, Field


class Task(BaseModel):
    """Task model representing a persisted to-do item.

    Attributes:
        id: Identifier generated by the task store (UUID string)
        title: Short task title
        details: Optional longer description
        created_at: Creation timestamp (UTC), never changed after creation
        is_completed: Completion status
    """

    id: str
    title: str = ""
    details: str | None = None
    created_at: datetime | None = None
    is_completed: bool = False


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Attributes:
        title: Task title (required)
        details: Optional description
        is_completed: Initial completion status
        created_at: Creation timestamp; the store stamps "now" when omitted
    """

    title: str
    details: str | None = None
    is_completed: bool = False
    created_at: datetime | None = None


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    Only fields that were explicitly set are written, so ``details=None``
    clears the description while an omitted ``details`` leaves it alone.
    """

    title: str | None = None
    details: str | None = None
    is_completed: bool | None = None


class TaskFilters(BaseModel):
    """Filters for querying tasks.

    Attributes:
        search: Case- and accent-insensitive substring over title or details
        title: Exact (case-sensitive) title match
        newest_first: Sort by creation time descending (default) or ascending
        limit: Maximum number of results
    """

    search: str | None = None
    title: str | None = None
    newest_first: bool = True
    limit: int | None = Field(default=None, ge=1)
