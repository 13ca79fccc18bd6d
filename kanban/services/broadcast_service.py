"""
Board channels: session registry and event broadcaster.

One ``Broadcaster`` is built at startup (``app.state.broadcaster``) and passed
to the mutation services. Delivery is at-most-once: only sessions joined to a
board channel at emit time receive the event, and a late joiner re-fetches the
board instead of replaying missed events.
"""

import asyncio
import logging
import threading
import uuid
from typing import Dict, List, Optional, Set

logger = logging.getLogger(__name__)

LIST_CREATED = "list:created"
LIST_DELETED = "list:deleted"
TASK_CREATED = "task:created"
TASK_UPDATED = "task:updated"
TASK_DELETED = "task:deleted"
TASK_MOVED = "task:moved"

# frames en attente par session au-delà desquelles on jette
QUEUE_MAXSIZE = 256


def channel_name(board_id: str) -> str:
    return f"board:{board_id}"


class BoardSession:
    """One connected client. Outgoing frames wait in ``queue`` for the sender task."""

    def __init__(self, user_id: str, loop: Optional[asyncio.AbstractEventLoop] = None, maxsize: int = QUEUE_MAXSIZE):
        self.id = str(uuid.uuid4())
        self.user_id = user_id
        self.loop = loop or asyncio.get_running_loop()
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self.channels: Set[str] = set()

    def offer(self, message: dict) -> bool:
        """Enqueue from the session loop. A full queue drops the frame (slow reader)."""
        try:
            self.queue.put_nowait(message)
            return True
        except asyncio.QueueFull:
            logger.debug(f"Dropped {message.get('event')} for slow session {self.id}")
            return False

    def deliver(self, message: dict) -> bool:
        # appelé depuis les threads des handlers HTTP
        try:
            self.loop.call_soon_threadsafe(self.offer, message)
            return True
        except RuntimeError:
            logger.debug(f"Dropped {message.get('event')} for closed session {self.id}")
            return False


class SessionRegistry:
    """Which session listens on which board channel."""

    def __init__(self):
        self._channels: Dict[str, Set[BoardSession]] = {}
        self._lock = threading.Lock()

    def join(self, session: BoardSession, board_id: str) -> None:
        channel = channel_name(board_id)
        with self._lock:
            self._channels.setdefault(channel, set()).add(session)
            session.channels.add(channel)

    def leave(self, session: BoardSession, board_id: str) -> None:
        channel = channel_name(board_id)
        with self._lock:
            self._discard(session, channel)

    def disconnect(self, session: BoardSession) -> None:
        with self._lock:
            for channel in list(session.channels):
                self._discard(session, channel)

    def subscribers(self, board_id: str) -> List[BoardSession]:
        with self._lock:
            return list(self._channels.get(channel_name(board_id), ()))

    def _discard(self, session: BoardSession, channel: str) -> None:
        members = self._channels.get(channel)
        if members is not None:
            members.discard(session)
            if not members:
                del self._channels[channel]
        session.channels.discard(channel)


class Broadcaster:
    def __init__(self, registry: Optional[SessionRegistry] = None):
        self.registry = registry or SessionRegistry()

    def emit(self, board_id: str, event: str, data: dict) -> int:
        """Fire-and-forget: queue ``event`` on every session of the board channel."""
        message = {"event": event, "data": data}
        delivered = sum(1 for session in self.registry.subscribers(board_id) if session.deliver(message))
        logger.debug(f"{event} -> {channel_name(board_id)} ({delivered} session(s))")
        return delivered
