"""Schema upgrades for the todorecur store.

The applied schema version lives in SQLite's ``PRAGMA user_version``, so a
database carries its version without a bookkeeping table. Opening a store
brings it up to ``schema.SCHEMA_VERSION``; a store written by a newer
todorecur is refused rather than guessed at.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from todorecur.adapters.sqlite.schema import SCHEMA_VERSION


@dataclass(frozen=True)
class Migration:
    """One schema step: the statements that take the store to ``version``."""

    version: int
    description: str
    statements: Sequence[str]

    def up(self, connection: sqlite3.Connection) -> None:
        for statement in self.statements:
            connection.execute(statement)


def schema_version(connection: sqlite3.Connection) -> int:
    """Schema version recorded in the database (0 for an empty file)."""
    return connection.execute("PRAGMA user_version").fetchone()[0]


def migrate(
    connection: sqlite3.Connection,
    migrations: Iterable[Migration],
    target: int = SCHEMA_VERSION,
) -> int:
    """Apply every migration above the stored version, up to ``target``.

    Returns:
        Number of migrations applied

    Raises:
        RuntimeError: If the store is newer than ``target``, if a step fails
            (the store stays at the last good version), or if no migration
            reaches ``target``
    """
    current = schema_version(connection)
    if current > target:
        raise RuntimeError(
            f"Database schema version {current} is newer than supported version {target}"
        )

    applied = 0
    for migration in sorted(migrations, key=lambda m: m.version):
        if not current < migration.version <= target:
            continue
        try:
            migration.up(connection)
            # PRAGMA does not take parameters; version is an int from code
            connection.execute(f"PRAGMA user_version = {int(migration.version)}")
            connection.commit()
        except sqlite3.Error as e:
            connection.rollback()
            raise RuntimeError(
                f"Migration {migration.version} ({migration.description}) failed: {e}"
            ) from e
        current = migration.version
        applied += 1

    if current != target:
        raise RuntimeError(f"No migration brings the database to schema version {target}")
    return applied
