"""Fixtures for CLI command tests.

Commands get an AppContext over a temporary database file and a mocked
remote source, so every invocation sees the tasks earlier ones wrote.
"""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from todolist_cli.config import Config
from todolist_cli.main import app
from todolist_cli.services.app_context import AppContext

runner = CliRunner()


@pytest.fixture()
def cli(tmp_path):
    config = Config()
    config.storage.db_path = str(tmp_path / "tasks.db")
    config.sync.seed_on_launch = False
    source = AsyncMock()
    source.fetch_todos.return_value = []

    def build_context(profile: str = "default") -> AppContext:
        return AppContext(config, source=source)

    def invoke(args: list[str], **kwargs):
        return runner.invoke(app, args, **kwargs)

    with patch("todolist_cli.commands.session.get_app_context", side_effect=build_context):
        yield SimpleNamespace(config=config, source=source, invoke=invoke)
