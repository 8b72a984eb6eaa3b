"""Unit tests for resolve_task_reference."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from todolist_cli.errors import TaskNotFoundError
from todolist_cli.models import Task
from todolist_cli.utils.task_helpers import resolve_task_reference


def _repository(*ids: str) -> MagicMock:
    tasks = [Task(id=id_, title=f"task {id_}") for id_ in ids]
    repository = MagicMock()
    repository.active_tasks = tasks
    repository.task_at.side_effect = lambda i: tasks[i] if 0 <= i < len(tasks) else None
    return repository


class TestResolveTaskReference:
    def test_row_number(self):
        repository = _repository("aaa", "bbb")
        assert resolve_task_reference(repository, "2").id == "bbb"

    def test_full_id(self):
        repository = _repository("aaa", "bbb")
        assert resolve_task_reference(repository, "aaa").id == "aaa"

    def test_unique_suffix(self):
        repository = _repository("abc-111", "abc-222")
        assert resolve_task_reference(repository, "22").id == "abc-222"

    def test_out_of_range_number_falls_back_to_suffix(self):
        repository = _repository("abc-7", "abc-8")
        assert resolve_task_reference(repository, "7").id == "abc-7"

    def test_ambiguous_suffix(self):
        repository = _repository("x-11", "y-11")

        with pytest.raises(TaskNotFoundError, match="Ambiguous"):
            resolve_task_reference(repository, "-11")

    def test_no_match(self):
        with pytest.raises(TaskNotFoundError):
            resolve_task_reference(_repository("aaa"), "zzz")

    def test_blank_reference(self):
        with pytest.raises(TaskNotFoundError):
            resolve_task_reference(_repository("aaa"), "  ")
