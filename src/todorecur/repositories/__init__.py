"""Repository interfaces for todorecur.

This package contains abstract base classes (ABCs) that define the contracts
for data persistence operations. These are the "Ports" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- todorecur.adapters.sqlite (local storage)
"""

from .repository import RecurrencePatternRepository, TaskRepository

__all__ = [
    "TaskRepository",
    "RecurrencePatternRepository",
]
