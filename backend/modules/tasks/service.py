"""
Task board service.

Holds the authoritative task list for this process. Nothing is persisted;
the board starts from the demo seed (or empty) on every start.
"""

import logging
from typing import Iterable

from modules.auth.store import Clock, utc_now

from .exceptions import TaskNotFoundError, TaskValidationError
from .interfaces import ITaskBoard
from .models import (
    CreateTaskRequest,
    Task,
    TaskPriority,
    TaskStatus,
    UpdateTaskRequest,
)

logger = logging.getLogger(__name__)

# (title, status, priority, participant)
DEMO_TASKS: tuple[tuple[str, TaskStatus, TaskPriority, str], ...] = (
    ("Design login screen", TaskStatus.TODO, TaskPriority.MEDIUM, "You"),
    ("Wireframe dashboard", TaskStatus.IN_PROGRESS, TaskPriority.HIGH, "Team"),
    ("Sync task board", TaskStatus.CLOSED, TaskPriority.LOW, "You"),
)


class TaskBoard(ITaskBoard):
    """In-memory, ordered task collection."""

    def __init__(self, tasks: Iterable[Task] = (), clock: Clock = utc_now):
        self._tasks: list[Task] = list(tasks)
        self._clock = clock

    @classmethod
    def with_demo_tasks(cls, clock: Clock = utc_now) -> "TaskBoard":
        now = clock()
        return cls(
            [
                Task(
                    title=title,
                    status=status,
                    priority=priority,
                    participant=participant,
                    date_added=now,
                )
                for title, status, priority, participant in DEMO_TASKS
            ],
            clock=clock,
        )

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def get_task(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def create_task(self, request: CreateTaskRequest) -> Task:
        if not request.title or not request.title.strip():
            raise TaskValidationError("Title is required", field="title")

        task = Task(
            title=request.title,
            status=request.status,
            priority=request.priority,
            participant=request.participant,
            date_added=self._clock(),
            deadline=request.deadline,
        )
        self._tasks.append(task)
        logger.debug(f"Created task {task.id}")
        return task

    def patch_task(self, task_id: str, request: UpdateTaskRequest) -> Task:
        for index, task in enumerate(self._tasks):
            if task.id != task_id:
                continue
            changes = request.changes()
            if "title" in changes and not changes["title"].strip():
                raise TaskValidationError("Title cannot be empty", field="title")
            updated = task.model_copy(update=changes)
            self._tasks[index] = updated
            return updated
        raise TaskNotFoundError(task_id)

    def replace_all(self, tasks: list[Task]) -> None:
        self._tasks = list(tasks)
        logger.debug(f"Board replaced with {len(self._tasks)} tasks")
