"""todorecur domain models.

Pydantic models for tasks, recurrence patterns and configuration, used
throughout the package for validation, serialization and type safety.
"""

from .config_models import AppConfig, DatabaseConfig, OutputConfig, SchedulerConfig
from .core import (
    Frequency,
    Priority,
    RecurrencePattern,
    RecurrencePatternFilters,
    Task,
    TaskCreate,
    TaskFilters,
    TaskSnapshot,
    Weekday,
)

__all__ = [
    # Task models
    "Task",
    "TaskCreate",
    "TaskFilters",
    "TaskSnapshot",
    "Priority",
    # Recurrence models
    "Frequency",
    "Weekday",
    "RecurrencePattern",
    "RecurrencePatternFilters",
    # Config models
    "AppConfig",
    "DatabaseConfig",
    "SchedulerConfig",
    "OutputConfig",
]
