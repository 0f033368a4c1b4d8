"""Schema migrations for the SQLite store."""

from .m001_initial_schema import initial_migration
from .runner import Migration, migrate, schema_version

# All migrations in order
ALL_MIGRATIONS: list[Migration] = [
    initial_migration,
]

__all__ = ["ALL_MIGRATIONS", "Migration", "initial_migration", "migrate", "schema_version"]
