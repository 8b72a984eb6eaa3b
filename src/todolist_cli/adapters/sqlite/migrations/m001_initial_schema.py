"""Initial database schema migration: the ``tasks`` table and its indexes."""

import sqlite3

from todolist_cli.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create initial database schema."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Create tasks table"

    def up(self, connection: sqlite3.Connection) -> None:
        for statement in schema.ALL_TABLES:
            connection.execute(statement)
        for statement in schema.ALL_INDEXES:
            connection.execute(statement)


initial_migration = InitialSchemaMigration()
