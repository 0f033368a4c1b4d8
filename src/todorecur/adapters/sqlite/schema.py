"""Database schema definitions for the local SQLite store.

Only the fields the recurrence engine reads or writes are modelled: the
template/instance task attributes and the recurrence pattern rule plus its
generation progress.
"""

from __future__ import annotations

# Schema version tracking
SCHEMA_VERSION = 1

# Users table - local user profile
CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    name TEXT,
    timezone TEXT DEFAULT 'UTC',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

# Tasks table - templates and generated instances
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    description TEXT NOT NULL,
    priority TEXT NOT NULL DEFAULT 'MEDIUM',
    category TEXT,
    user_id TEXT NOT NULL,
    is_completed BOOLEAN DEFAULT 0,
    due_date DATETIME,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    completed_at DATETIME,
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE
)
"""

# Recurrence patterns - one rule per template task
CREATE_RECURRENCE_PATTERNS_TABLE = """
CREATE TABLE IF NOT EXISTS recurrence_patterns (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL UNIQUE,
    user_id TEXT,
    frequency TEXT NOT NULL CHECK (frequency IN ('DAILY', 'WEEKLY', 'MONTHLY')),
    interval_value INTEGER NOT NULL DEFAULT 1 CHECK (interval_value >= 1),
    start_date DATE NOT NULL,
    end_date DATE,
    days_of_week TEXT,
    day_of_month INTEGER CHECK (day_of_month BETWEEN 1 AND 31),
    max_occurrences INTEGER CHECK (max_occurrences >= 1),
    generated_count INTEGER NOT NULL DEFAULT 0,
    last_generated_date DATE,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
)
"""

# Indexes for performance

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_user ON tasks(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(is_completed)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_user_completed ON tasks(user_id, is_completed)",
]

CREATE_RECURRENCE_PATTERN_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_recurrence_patterns_user ON recurrence_patterns(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_recurrence_patterns_frequency ON recurrence_patterns(frequency)",
    "CREATE INDEX IF NOT EXISTS idx_recurrence_patterns_start ON recurrence_patterns(start_date)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_USERS_TABLE,
    CREATE_TASKS_TABLE,
    CREATE_RECURRENCE_PATTERNS_TABLE,
]

# All index creation statements
ALL_INDEXES = CREATE_TASK_INDEXES + CREATE_RECURRENCE_PATTERN_INDEXES
