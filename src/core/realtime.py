"""In-process real-time hub for WebSocket publish/subscribe.

Clients connect over a WebSocket and explicitly join or leave rooms. The
server publishes events either to every connected client (broadcast) or to
the members of a single room (``order:<id>`` or ``user:<id>``).
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Protocol
from uuid import uuid4

from fastapi import WebSocket

logger = logging.getLogger(__name__)

ORDER_ROOM_PREFIX = "order"
USER_ROOM_PREFIX = "user"

# Inbound command -> (room prefix, join?)
ROOM_COMMANDS: dict[str, tuple[str, bool]] = {
    "joinOrderRoom": (ORDER_ROOM_PREFIX, True),
    "leaveOrderRoom": (ORDER_ROOM_PREFIX, False),
    "joinUserRoom": (USER_ROOM_PREFIX, True),
    "leaveUserRoom": (USER_ROOM_PREFIX, False),
}


def order_room(order_id: Any) -> str:
    """Room name for clients tracking a single order."""
    return f"{ORDER_ROOM_PREFIX}:{order_id}"


def user_room(user_id: Any) -> str:
    """Room name for a user's personal notifications."""
    return f"{USER_ROOM_PREFIX}:{user_id}"


class EventPublisher(Protocol):
    """Publish handle injected into services that emit real-time events."""

    async def emit(self, event: str, data: Any, room: str | None = None) -> int:
        """Emit an event to a room, or to every client when room is None."""
        ...


class RealtimeHub:
    """Tracks WebSocket connections and their room memberships.

    One hub exists per application instance. It holds no state outside this
    process, so it does not coordinate across multiple server instances.
    """

    def __init__(self) -> None:
        self._connections: dict[str, WebSocket] = {}
        self._rooms: dict[str, set[str]] = defaultdict(set)

    @property
    def connection_count(self) -> int:
        """Number of currently connected clients."""
        return len(self._connections)

    def room_members(self, room: str) -> set[str]:
        """Return the client IDs currently in a room."""
        return set(self._rooms.get(room, set()))

    async def connect(self, websocket: WebSocket) -> str:
        """Accept a WebSocket and register it.

        Returns:
            str: The generated client ID.
        """
        await websocket.accept()
        client_id = uuid4().hex
        self._connections[client_id] = websocket
        logger.info("Client connected: %s", client_id)
        return client_id

    def disconnect(self, client_id: str) -> None:
        """Forget a client and remove it from every room."""
        self._connections.pop(client_id, None)
        for room in list(self._rooms):
            members = self._rooms[room]
            members.discard(client_id)
            if not members:
                del self._rooms[room]
        logger.info("Client disconnected: %s", client_id)

    def join(self, client_id: str, room: str) -> None:
        if client_id not in self._connections:
            return
        self._rooms[room].add(client_id)
        logger.info("Client %s joined room: %s", client_id, room)

    def leave(self, client_id: str, room: str) -> None:
        members = self._rooms.get(room)
        if not members:
            return
        members.discard(client_id)
        if not members:
            del self._rooms[room]
        logger.info("Client %s left room: %s", client_id, room)

    def handle_command(self, client_id: str, message: Any) -> bool:
        """Apply an inbound join/leave command.

        Args:
            client_id: Client that sent the message.
            message: Decoded JSON frame, expected as {"event": str, "data": id}.

        Returns:
            bool: True if the message was a recognised room command.
        """
        if not isinstance(message, dict):
            logger.warning("Ignoring malformed frame from %s", client_id)
            return False

        event = message.get("event")
        target = message.get("data")
        command = ROOM_COMMANDS.get(event) if isinstance(event, str) else None
        if command is None or target in (None, ""):
            logger.warning("Ignoring unknown command %r from %s", event, client_id)
            return False

        prefix, joining = command
        room = f"{prefix}:{target}"
        if joining:
            self.join(client_id, room)
        else:
            self.leave(client_id, room)
        return True

    async def emit(self, event: str, data: Any, room: str | None = None) -> int:
        """Send an event to a room or to all clients.

        Publishing to an empty room is a no-op. Clients whose socket fails
        are dropped from the hub.

        Args:
            event: Event name.
            data: JSON-serialisable payload.
            room: Target room, or None to broadcast.

        Returns:
            int: Number of clients the event was delivered to.
        """
        if room is None:
            targets = list(self._connections)
        else:
            targets = list(self._rooms.get(room, ()))

        frame = {"event": event, "data": data}
        delivered = 0
        for client_id in targets:
            websocket = self._connections.get(client_id)
            if websocket is None:
                continue
            try:
                await websocket.send_json(frame)
                delivered += 1
            except Exception as e:
                logger.warning("Dropping client %s after send failure: %s", client_id, e)
                self.disconnect(client_id)

        logger.debug("Emitted %s to %s (%d clients)", event, room or "broadcast", delivered)
        return delivered
