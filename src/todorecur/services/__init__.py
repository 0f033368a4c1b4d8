"""Services module for todorecur - Business logic layer."""

from .batch_runner import BatchReport, BatchRunner, PatternFailure
from .instance_generator import InstanceGenerator, PlannedInstance
from .pattern_service import PatternService
from .task_service import TaskService

__all__ = [
    "BatchReport",
    "BatchRunner",
    "InstanceGenerator",
    "PatternFailure",
    "PatternService",
    "PlannedInstance",
    "TaskService",
]
