"""
Canal temps réel: un WebSocket par client, des canaux par board.

Frames client: {"event": "join-board" | "leave-board", "boardId": "..."} et {"event": "ping"}.
Frames serveur: {"event": ..., "data": {...}}.
"""

import asyncio
import json
import logging
from typing import Optional
from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status
from fastapi.concurrency import run_in_threadpool
from kanban.core import database
from kanban.core.security import decode_token
from kanban.routers.deps import bearer_token
from kanban.services.access_service import NOT_A_MEMBER, find_membership
from kanban.services.broadcast_service import BoardSession, SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


def _is_member(board_id: str, user_id: str) -> bool:
    # session courte, ouverte dans le threadpool
    db = database.SessionLocal()
    try:
        return find_membership(db, board_id, user_id) is not None
    finally:
        db.close()


async def _pump(websocket: WebSocket, session: BoardSession, registry: SessionRegistry):
    # unique écrivain sur la socket
    try:
        while True:
            message = await session.queue.get()
            await websocket.send_json(message)
    except Exception:
        logger.warning(f"Send failed for user {session.user_id}, dropping session {session.id}", exc_info=True)
        registry.disconnect(session)


def _reply(session: BoardSession, event: str, data: dict):
    session.offer({"event": event, "data": data})


@router.websocket("/ws")
async def board_channel(websocket: WebSocket, token: Optional[str] = Query(None)):
    token = token or bearer_token(websocket.headers.get("authorization"))
    user_id = decode_token(token) if token else None
    if not user_id:
        logger.warning("Rejected board channel connection: invalid or missing token")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Authentication required")
        return

    await websocket.accept()
    registry = websocket.app.state.broadcaster.registry
    session = BoardSession(user_id, asyncio.get_running_loop())
    sender = asyncio.create_task(_pump(websocket, session, registry))
    logger.info(f"User {user_id} connected via WebSocket")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                frame = json.loads(raw)
            except ValueError:
                _reply(session, "error", {"message": "Invalid message"})
                continue
            if not isinstance(frame, dict):
                _reply(session, "error", {"message": "Invalid message"})
                continue

            event = frame.get("event")
            board_id = frame.get("boardId")

            if event == "ping":
                _reply(session, "pong", {})
            elif event in ("join-board", "leave-board") and not isinstance(board_id, str):
                _reply(session, "error", {"message": "boardId is required"})
            elif event == "join-board":
                if not await run_in_threadpool(_is_member, board_id, user_id):
                    logger.warning(f"User {user_id} refused on board:{board_id}")
                    _reply(session, "error", {"message": NOT_A_MEMBER, "boardId": board_id})
                    continue
                registry.join(session, board_id)
                _reply(session, "board:joined", {"boardId": board_id})
                logger.info(f"User {user_id} joined board:{board_id}")
            elif event == "leave-board":
                registry.leave(session, board_id)
                _reply(session, "board:left", {"boardId": board_id})
                logger.info(f"User {user_id} left board:{board_id}")
            else:
                _reply(session, "error", {"message": f"Unknown event: {event}"})
    except WebSocketDisconnect:
        pass
    finally:
        registry.disconnect(session)
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
        logger.info(f"User {user_id} disconnected")
