"""
Tasks module exceptions.
"""

from shared.exceptions import NotFoundError, ValidationError


class TaskNotFoundError(NotFoundError):
    """Raised when no task has the given id."""

    def __init__(self, task_id: str):
        super().__init__(
            "Task not found",
            code="TASK_NOT_FOUND",
            details={"task_id": task_id},
        )


class TaskValidationError(ValidationError):
    """Raised when a task payload is rejected."""

    def __init__(self, message: str, field: str):
        super().__init__(
            message,
            code="TASK_INVALID",
            details={"field": field},
        )
