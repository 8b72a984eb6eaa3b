"""Unit tests for utils/ui/formatters.py."""

from __future__ import annotations

import io
from datetime import UTC, datetime

from rich.console import Console

from todolist_cli.models import Task
from todolist_cli.utils.ui.formatters import (
    build_task_table,
    calculate_unique_suffixes,
    format_date,
    format_task_cell,
)


def _render(renderable) -> str:
    buffer = io.StringIO()
    Console(file=buffer, width=120, no_color=True).print(renderable)
    return buffer.getvalue()


class TestCalculateUniqueSuffixes:
    def test_empty(self):
        assert calculate_unique_suffixes([]) == {}

    def test_grows_until_unique(self):
        result = calculate_unique_suffixes(["abc1", "xyz1", "def2"])
        assert result == {"abc1": 2, "xyz1": 2, "def2": 1}


class TestFormatDate:
    def test_none(self):
        assert format_date(None) == ""

    def test_default_format(self):
        value = datetime(2024, 3, 5, 12, 0, tzinfo=UTC)
        assert format_date(value) == value.astimezone().strftime("%d/%m/%y")


class TestTaskCell:
    def test_open_task(self):
        cell = format_task_cell(Task(id="1", title="Buy milk", details="2 litres"))

        assert cell.plain == "Buy milk\n2 litres"
        assert "strike" not in str(cell.style)

    def test_completed_task_is_struck_through(self):
        cell = format_task_cell(Task(id="1", title="Buy milk", is_completed=True))

        assert cell.plain == "Buy milk"
        assert "strike" in str(cell.style)


class TestBuildTaskTable:
    def test_rows_numbered_from_one(self):
        tasks = [
            Task(id="aaaa-1", title="first", created_at=datetime.now(UTC)),
            Task(id="bbbb-2", title="second", created_at=datetime.now(UTC)),
        ]

        table = build_task_table(tasks, title="Tasks")
        output = _render(table)

        assert table.row_count == 2
        assert "first" in output and "second" in output
        assert "Tasks" in output
