"""Shared test fixtures and configuration.

Keeps tests away from the real per-user config, data and log directories.
"""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from todolist_cli.adapters.sqlite import TaskStore
from todolist_cli.repositories import TaskRepository


# ---------------------------------------------------------------------------
# Isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logger(tmp_path):
    """Point the application log file at a temporary directory."""
    import todolist_cli.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None
    logging.getLogger("todolist_cli").handlers.clear()

    with patch("todolist_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield

    for handler in logging.getLogger("todolist_cli").handlers:
        handler.close()
    logging.getLogger("todolist_cli").handlers.clear()
    logger_mod._logger = original


# ---------------------------------------------------------------------------
# Store and repository
# ---------------------------------------------------------------------------


@pytest.fixture()
def store():
    """A fresh in-memory task store."""
    task_store = TaskStore(":memory:")
    yield task_store
    task_store.close()


@pytest.fixture()
def repository(store):
    """A repository over the in-memory store with no remote source."""
    return TaskRepository(store)
