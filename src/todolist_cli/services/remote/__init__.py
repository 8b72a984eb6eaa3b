"""Remote todo source package."""

from .client import DEFAULT_ENDPOINT, DummyJsonTodoSource, RemoteTodoSourceProtocol
from .models import MergeResult, RemoteTodoItem, TodoResponse

__all__ = [
    "DEFAULT_ENDPOINT",
    "DummyJsonTodoSource",
    "MergeResult",
    "RemoteTodoItem",
    "RemoteTodoSourceProtocol",
    "TodoResponse",
]
