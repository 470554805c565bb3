"""
Tasks module data models.

These models define the task board payloads shared by the REST surface and
the realtime channel.
"""

import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, ValidationInfo, field_validator

from shared.models import CamelModel


class TaskStatus(str, Enum):
    """Board columns."""

    TODO = "To do"
    IN_PROGRESS = "In progress"
    CLOSED = "Closed"
    FROZEN = "Frozen"


class TaskPriority(str, Enum):
    """Task priority levels."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def new_task_id() -> str:
    return str(uuid.uuid4())


class Task(CamelModel):
    """
    A task on the board.

    The id is assigned on creation and never changes. `_id` is accepted as an
    input alias for clients that use document-store style ids.
    """

    id: str = Field(
        default_factory=new_task_id,
        validation_alias=AliasChoices("id", "_id"),
    )
    title: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.LOW
    participant: str = ""
    date_added: datetime
    deadline: Optional[date] = None


class CreateTaskRequest(CamelModel):
    """
    Request to add a task. Title is checked by the service.

    Omitted, null or empty optional fields fall back to their defaults.
    """

    title: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.LOW
    participant: str = ""
    deadline: Optional[date] = None

    @field_validator("status", "priority", "participant", "deadline", mode="before")
    @classmethod
    def _blank_to_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or value == "":
            return cls.model_fields[info.field_name].default
        return value


class UpdateTaskRequest(CamelModel):
    """
    Partial task update.

    Only fields present in the request are applied. An explicit null clears
    the deadline and is ignored for every other field.
    """

    title: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    participant: Optional[str] = None
    deadline: Optional[date] = None

    def changes(self) -> dict[str, Any]:
        """Fields to merge into the stored task."""
        present = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in present.items()
            if value is not None or name == "deadline"
        }


class BoardEventType(str, Enum):
    """Realtime channel event names."""

    # client -> server
    TASK_MOVED = "task_moved"
    SYNC_BOARD = "sync_board"
    PING = "ping"

    # server -> client
    RECEIVE_TASK_MOVE = "receive_task_move"
    BOARD_SYNC = "board_sync"
    PONG = "pong"


class BoardEvent(BaseModel):
    """A frame on the realtime channel: {"event": ..., "data": ...}."""

    event: BoardEventType
    data: Any = None
