"""Exception hierarchy for todorecur."""


class TodorecurError(Exception):
    """Base exception for todorecur errors."""


class PatternNotFoundError(TodorecurError, LookupError):
    """Raised when a recurrence pattern does not exist."""

    def __init__(self, pattern_id: str):
        super().__init__(f"Recurrence pattern not found: {pattern_id}")
        self.pattern_id = pattern_id


class TaskNotFoundError(TodorecurError, LookupError):
    """Raised when a task (template or instance) does not exist."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class PatternExistsError(TodorecurError, ValueError):
    """Raised when a task already has a recurrence pattern attached."""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} already has a recurrence pattern")
        self.task_id = task_id
