"""Application context - wires config, store, remote source and repository."""

from __future__ import annotations

import logging
from pathlib import Path

from todolist_cli.adapters.sqlite import TaskStore
from todolist_cli.config import Config, get_config_manager
from todolist_cli.repositories import TaskRepository
from todolist_cli.services.notifications import ForegroundDispatcher
from todolist_cli.services.remote import DummyJsonTodoSource, RemoteTodoSourceProtocol

logger = logging.getLogger(__name__)


class AppContext:
    """Owns the long-lived objects of one CLI invocation.

    The store is opened eagerly by :meth:`open` so that an unusable
    database fails the command before any work is done.
    """

    def __init__(
        self,
        config: Config,
        store: TaskStore | None = None,
        source: RemoteTodoSourceProtocol | None = None,
    ) -> None:
        self.config = config
        db_path = Path(config.storage.db_path).expanduser() if config.storage.db_path else None
        self.store = store or TaskStore(db_path)
        self.source = source or DummyJsonTodoSource(
            config.remote.endpoint, timeout=config.remote.timeout
        )
        self.repository = TaskRepository(
            self.store, self.source, dispatcher=ForegroundDispatcher()
        )

    def open(self) -> AppContext:
        """Open the main store context.

        Raises:
            StoreOpenError: If the database cannot be opened
        """
        self.store.main_context()
        return self

    def close(self) -> None:
        self.store.close()

    def __enter__(self) -> AppContext:
        return self.open()

    def __exit__(self, *exc_info) -> None:
        self.close()


def get_app_context(profile: str = "default") -> AppContext:
    """Build an application context from the profile's configuration."""
    config = get_config_manager(profile).config
    logger.debug("building app context for profile %s", profile)
    return AppContext(config)
