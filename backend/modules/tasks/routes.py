"""
Task board endpoints.

REST routes for listing, creating and patching tasks, plus the realtime
board WebSocket.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect

from api.dependencies import get_board_broadcaster, get_task_board

from .exceptions import TaskNotFoundError, TaskValidationError
from .interfaces import ITaskBoard
from .models import CreateTaskRequest, Task, UpdateTaskRequest
from .realtime import BoardBroadcaster

logger = logging.getLogger(__name__)

router = APIRouter()
ws_router = APIRouter()


@router.get("", response_model=list[Task])
async def list_tasks(
    board: ITaskBoard = Depends(get_task_board),
) -> list[Task]:
    """
    List every task in board order.
    """
    return board.list_tasks()


@router.post("", response_model=Task, status_code=201)
async def create_task(
    request: CreateTaskRequest,
    board: ITaskBoard = Depends(get_task_board),
) -> Task:
    """
    Add a task. Status defaults to "To do" and priority to "Low".
    """
    try:
        return board.create_task(request)
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@router.patch("/{task_id}", response_model=Task)
async def patch_task(
    task_id: str,
    request: UpdateTaskRequest,
    board: ITaskBoard = Depends(get_task_board),
) -> Task:
    """
    Update only the fields present in the body.
    """
    try:
        return board.patch_task(task_id, request)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except TaskValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)


@ws_router.websocket("/ws/board")
async def board_socket(
    websocket: WebSocket,
    broadcaster: BoardBroadcaster = Depends(get_board_broadcaster),
):
    """
    Realtime board channel.

    Frames are JSON objects `{"event": <name>, "data": <payload>}`.

    Client -> server:
    - task_moved: full reordered task list, relayed to everybody else
    - sync_board: ask for the current server list
    - ping: heartbeat

    Server -> client:
    - receive_task_move: a list moved by another client
    - board_sync: reply to sync_board
    - pong: reply to ping
    """
    await websocket.accept()
    broadcaster.connect(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            if raw is None:
                logger.warning("Ignoring non-text board frame")
                continue
            await broadcaster.handle_message(websocket, raw)
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
