"""
Board client.

Client-side state logic of the kanban view: optimistic drag-and-drop moves,
the `task_moved` broadcast, the best-effort REST patch and adoption of lists
moved by other clients.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .models import BoardEvent, BoardEventType, Task, TaskStatus
from .realtime import Connection, task_list_adapter, dump_tasks, encode_event

logger = logging.getLogger(__name__)


class BoardClient:
    """
    Local copy of the board for one connected client.

    Args:
        channel: Realtime connection used to emit `task_moved`
        http: Client for the REST API (base URL already set)
    """

    def __init__(
        self,
        channel: Connection,
        http: httpx.AsyncClient,
        tasks: Optional[list[Task]] = None,
    ):
        self._channel = channel
        self._http = http
        self._tasks: list[Task] = list(tasks or [])
        self._pending: set[asyncio.Task] = set()

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def column(self, status: TaskStatus) -> list[Task]:
        """Tasks shown in one board column, in board order."""
        return [t for t in self._tasks if t.status == status]

    async def refresh(self) -> list[Task]:
        """Replace the local list with the server's."""
        response = await self._http.get("/api/tasks")
        response.raise_for_status()
        self._tasks = task_list_adapter.validate_python(response.json())
        return self.tasks

    async def move(
        self,
        source_index: int,
        destination_index: int,
        destination_status: TaskStatus,
    ) -> Task:
        """
        Move a task optimistically.

        The local list is reordered and the task takes the destination status
        before anything is sent. The full list is then emitted and a status
        patch is fired in the background. Neither failure rolls back the move.
        """
        items = list(self._tasks)
        moved = items.pop(source_index)
        moved = moved.model_copy(update={"status": TaskStatus(destination_status)})
        items.insert(destination_index, moved)
        self._tasks = items

        try:
            await self._channel.send_text(
                encode_event(BoardEventType.TASK_MOVED, dump_tasks(items))
            )
        except Exception:
            logger.warning("Failed to broadcast task move", exc_info=True)

        patch = asyncio.create_task(self._patch_status(moved))
        self._pending.add(patch)
        patch.add_done_callback(self._pending.discard)
        return moved

    async def _patch_status(self, task: Task) -> None:
        try:
            response = await self._http.patch(
                f"/api/tasks/{task.id}",
                json={"status": task.status.value},
            )
            response.raise_for_status()
        except httpx.HTTPError:
            logger.warning(f"Status patch for task {task.id} failed", exc_info=True)

    async def wait_pending(self) -> None:
        """Wait for in-flight background patches."""
        if self._pending:
            await asyncio.gather(*self._pending)

    def apply_remote(self, payload: Any) -> bool:
        """
        Adopt a list moved by another client, discarding local state.

        Returns:
            False if the payload was not a task list and was ignored
        """
        if not isinstance(payload, list):
            return False
        try:
            self._tasks = task_list_adapter.validate_python(payload)
        except ValidationError:
            logger.warning("Ignoring remote board payload that is not a task list")
            return False
        return True

    def handle_frame(self, raw: str) -> bool:
        """Process one frame received on the channel."""
        try:
            event = BoardEvent.model_validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring malformed board frame")
            return False

        if event.event in (BoardEventType.RECEIVE_TASK_MOVE, BoardEventType.BOARD_SYNC):
            return self.apply_remote(event.data)
        return False
