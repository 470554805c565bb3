"""
Tasks module.

Handles the kanban task board: REST create/patch, the realtime move channel
and the client-side board state.

Public API:
- ITaskBoard: Interface for board operations
- TaskBoard: In-memory implementation
- BoardBroadcaster: Realtime fan-out of board events
- BoardClient: Client-side optimistic board state
- Task, TaskStatus, TaskPriority: Core models
"""

from .interfaces import ITaskBoard
from .models import (
    BoardEvent,
    BoardEventType,
    CreateTaskRequest,
    Task,
    TaskPriority,
    TaskStatus,
    UpdateTaskRequest,
)
from .service import TaskBoard
from .realtime import BoardBroadcaster
from .client import BoardClient
from .exceptions import TaskNotFoundError, TaskValidationError

__all__ = [
    # Interface
    "ITaskBoard",
    # Implementations
    "TaskBoard",
    "BoardBroadcaster",
    "BoardClient",
    # Models
    "BoardEvent",
    "BoardEventType",
    "CreateTaskRequest",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "UpdateTaskRequest",
    # Exceptions
    "TaskNotFoundError",
    "TaskValidationError",
]
