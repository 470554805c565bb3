"""
Tasks module interface.

The REST routes and the realtime channel both depend on ITaskBoard.
"""

from typing import Protocol, runtime_checkable

from .models import CreateTaskRequest, Task, UpdateTaskRequest


@runtime_checkable
class ITaskBoard(Protocol):
    """
    Interface for the authoritative in-memory task list.

    All methods are synchronous: on a single event loop each call runs to
    completion without interleaving.
    """

    def list_tasks(self) -> list[Task]:
        """Return every task in board order."""
        ...

    def create_task(self, request: CreateTaskRequest) -> Task:
        """
        Append a new task.

        Raises:
            TaskValidationError: If the title is missing
        """
        ...

    def patch_task(self, task_id: str, request: UpdateTaskRequest) -> Task:
        """
        Merge the fields present in the request into a task.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        ...

    def replace_all(self, tasks: list[Task]) -> None:
        """Adopt a full task list wholesale (last write wins)."""
        ...
