"""Schema migrations for the local task store."""

from .m001_initial_schema import initial_migration
from .runner import Migration, MigrationRunner, get_current_version, run_migrations

ALL_MIGRATIONS: list[Migration] = [
    initial_migration,
]

__all__ = [
    "ALL_MIGRATIONS",
    "Migration",
    "MigrationRunner",
    "get_current_version",
    "run_migrations",
]
