"""Initial database schema: users, tasks and recurrence_patterns with indexes."""

from todorecur.adapters.sqlite import schema

from .runner import Migration

initial_migration = Migration(
    version=1,
    description="Initial database schema",
    statements=[*schema.ALL_TABLES, *schema.ALL_INDEXES],
)
