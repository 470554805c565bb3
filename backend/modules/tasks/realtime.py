"""
Realtime board synchronization.

Every connected client joins one board group. A `task_moved` frame from one
client is relayed as `receive_task_move` to every other client, never back to
the sender. Concurrent moves are last-write-wins: whichever full list is
relayed last is what everybody ends up holding.

Two modes:
- replace: a payload that parses as a task list also replaces the server board
- relay: the server keeps no shared state and only retransmits
"""

import json
import logging
from typing import Any, Literal, Protocol

from pydantic import TypeAdapter, ValidationError

from .interfaces import ITaskBoard
from .models import BoardEvent, BoardEventType, Task

logger = logging.getLogger(__name__)

SyncMode = Literal["replace", "relay"]

task_list_adapter = TypeAdapter(list[Task])


class Connection(Protocol):
    """The slice of a WebSocket the broadcaster needs."""

    async def send_text(self, data: str) -> None:
        ...


def encode_event(event: BoardEventType, data: Any = None) -> str:
    return BoardEvent(event=event, data=data).model_dump_json()


def dump_tasks(tasks: list[Task]) -> list[dict[str, Any]]:
    return task_list_adapter.dump_python(tasks, mode="json", by_alias=True)


class BoardBroadcaster:
    """Tracks connected clients and fans out board events."""

    def __init__(self, board: ITaskBoard, mode: SyncMode = "replace"):
        self._board = board
        self._mode = mode
        self._connections: list[Connection] = []

    @property
    def mode(self) -> SyncMode:
        return self._mode

    @property
    def connection_count(self) -> int:
        return len(self._connections)

    def connect(self, connection: Connection) -> None:
        self._connections.append(connection)
        logger.info(f"Board client connected ({len(self._connections)} online)")

    def disconnect(self, connection: Connection) -> None:
        if connection in self._connections:
            self._connections.remove(connection)
        logger.info(f"Board client disconnected ({len(self._connections)} online)")

    async def handle_message(self, sender: Connection, raw: str) -> None:
        """Dispatch one frame received from `sender`. Bad frames are dropped."""
        try:
            frame = json.loads(raw)
            event = BoardEvent.model_validate(frame)
        except (ValueError, ValidationError):
            logger.warning("Ignoring malformed board frame")
            return

        if event.event == BoardEventType.TASK_MOVED:
            await self.task_moved(sender, event.data)
        elif event.event == BoardEventType.SYNC_BOARD:
            await sender.send_text(
                encode_event(BoardEventType.BOARD_SYNC, dump_tasks(self._board.list_tasks()))
            )
        elif event.event == BoardEventType.PING:
            await sender.send_text(encode_event(BoardEventType.PONG))
        else:
            logger.warning(f"Ignoring unexpected board event {event.event.value}")

    async def task_moved(self, sender: Connection, payload: Any) -> int:
        """
        Apply (in replace mode) and relay a moved task list.

        The payload is relayed verbatim even when it does not parse.

        Returns:
            Number of clients the payload was relayed to
        """
        if self._mode == "replace":
            self._apply(payload)
        return await self.broadcast(
            encode_event(BoardEventType.RECEIVE_TASK_MOVE, payload),
            exclude=sender,
        )

    def _apply(self, payload: Any) -> None:
        if not isinstance(payload, list):
            logger.warning("task_moved payload is not a list, board left unchanged")
            return
        try:
            tasks = task_list_adapter.validate_python(payload)
        except ValidationError:
            logger.warning("task_moved payload is not a valid task list, board left unchanged")
            return
        self._board.replace_all(tasks)

    async def broadcast(self, message: str, exclude: Connection | None = None) -> int:
        """Send to every client except `exclude`. Dead clients are dropped."""
        sent = 0
        for connection in list(self._connections):
            if connection is exclude:
                continue
            try:
                await connection.send_text(message)
                sent += 1
            except Exception:
                logger.warning("Dropping board client after failed send", exc_info=True)
                self.disconnect(connection)
        logger.debug(f"Relayed board event to {sent} clients")
        return sent
