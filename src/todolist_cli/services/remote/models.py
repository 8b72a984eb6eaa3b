"""Pydantic models for the remote todo endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RemoteTodoItem(BaseModel):
    """A todo as published by the remote endpoint.

    Used only as merge input; never persisted as-is.
    """

    model_config = ConfigDict(populate_by_name=True)

    external_id: int = Field(alias="id")
    text: str = Field(alias="todo")
    completed: bool
    owner_id: int = Field(alias="userId")


class TodoResponse(BaseModel):
    """Envelope returned by ``GET /todos``."""

    todos: list[RemoteTodoItem]
    total: int | None = None
    skip: int | None = None
    limit: int | None = None


class MergeResult(BaseModel):
    """Summary of one network-to-local merge."""

    created: int = 0
    skipped: int = 0

    @property
    def received(self) -> int:
        return self.created + self.skipped
