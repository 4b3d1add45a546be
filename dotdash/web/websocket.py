"""
WebSocket Chat Relay
====================

In-memory chat rooms over WebSockets. Every chat message carries both its
plain text and its Morse rendering; whichever half the sender omits is
filled in with the codec before fan-out.

Nothing is persisted and callers are not authenticated: a connection is
identified by the ``user_id`` it presents.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from dotdash.core.codec import morse_to_text, text_to_morse
from dotdash.core.foundation.config_defaults import DEFAULTS
from dotdash.core.foundation.exceptions import DotdashError, InvalidInputError, MissingInputError
from dotdash.core.observability.metrics import MetricsCollector

logger = logging.getLogger(__name__)


# client event -> (room event, direct event)
TYPING_EVENTS = {
    "typing_start": ("user_typing", "user_typing_direct"),
    "typing_stop": ("user_stopped_typing", "user_stopped_typing_direct"),
}

AUDIO_EVENTS = {
    "morse_audio_start": "morse_audio_started",
    "morse_audio_stop": "morse_audio_stopped",
}

PRESENCE_STATUSES = ("online", "away", "busy")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _message_id() -> str:
    return uuid.uuid4().hex[:DEFAULTS.MESSAGE_ID_LENGTH]


def anonymous_user_id() -> str:
    return f"{DEFAULTS.ANONYMOUS_USER_PREFIX}{uuid.uuid4().hex[:8]}"


@dataclass
class RoomConnection:
    """Represents an active WebSocket connection in one room."""
    websocket: Any  # WebSocket object
    room_id: str
    user_id: str
    email: Optional[str] = None
    connected_at: datetime = field(default_factory=datetime.now)
    _id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __hash__(self):
        return hash(self._id)

    def __eq__(self, other):
        if isinstance(other, RoomConnection):
            return self._id == other._id
        return False


def build_message_content(payload: Dict[str, Any]) -> Dict[str, str]:
    """
    Return ``{"text", "morse"}`` for an outgoing chat message.

    ``text`` takes precedence and ``morse`` is derived from it; otherwise
    ``text`` is decoded from ``morse``.

    Raises:
        MissingInputError: neither text nor morse was sent
        InvalidInputError: text is not a string
        MorseError: the codec rejected the payload
    """
    text = payload.get("text")
    morse = payload.get("morse")

    if text:
        if not isinstance(text, str):
            raise InvalidInputError("Message text must be a string")
        return {"text": text, "morse": text_to_morse(text)}

    if morse:
        return {"text": morse_to_text(morse), "morse": morse}

    raise MissingInputError("Message requires text or morse")


class RoomManager:
    """
    Manages WebSocket connections for real-time chat rooms.

    Features:
    - Connection tracking by room and by user
    - Broadcast to a room, optionally excluding the sender
    - Direct delivery to every connection of a user
    - Presence updates fanned out across all rooms
    - Dead connections are dropped during fan-out
    """

    def __init__(self, metrics: Optional[MetricsCollector] = None):
        self._rooms: Dict[str, Set[RoomConnection]] = {}
        self._users: Dict[str, Set[RoomConnection]] = {}
        self._lock = asyncio.Lock()
        self._metrics = metrics

    @property
    def connection_count(self) -> int:
        return sum(len(conns) for conns in self._rooms.values())

    def _report_connections(self):
        if self._metrics is not None:
            self._metrics.set_active_connections(self.connection_count)

    async def connect(
        self,
        websocket: Any,
        room_id: str,
        user_id: str,
        email: Optional[str] = None
    ) -> RoomConnection:
        """
        Register an accepted WebSocket and announce it to the room.

        Args:
            websocket: Accepted WebSocket object
            room_id: Room to join
            user_id: User identifier
            email: Optional email echoed in join notifications

        Returns:
            RoomConnection object
        """
        conn = RoomConnection(websocket=websocket, room_id=room_id, user_id=user_id, email=email)

        async with self._lock:
            self._rooms.setdefault(room_id, set()).add(conn)
            self._users.setdefault(user_id, set()).add(conn)
            self._report_connections()

        logger.info(f"User {user_id} joined room {room_id}")

        await self.send(conn, {"type": "joined_room", "room_id": room_id, "timestamp": _now()})
        await self.broadcast(room_id, {
            "type": "user_joined_room",
            "room_id": room_id,
            "user_id": user_id,
            "email": email,
            "timestamp": _now(),
        }, exclude=conn)
        return conn

    async def disconnect(self, conn: RoomConnection, notify: bool = True):
        """
        Remove a connection. Safe to call more than once.

        Args:
            conn: Connection to remove
            notify: Tell the rest of the room the user left
        """
        async with self._lock:
            room = self._rooms.get(conn.room_id)
            if room is None or conn not in room:
                return
            room.discard(conn)
            if not room:
                del self._rooms[conn.room_id]

            user_conns = self._users.get(conn.user_id)
            if user_conns is not None:
                user_conns.discard(conn)
                if not user_conns:
                    del self._users[conn.user_id]
            self._report_connections()

        logger.info(f"User {conn.user_id} left room {conn.room_id}")

        if notify:
            await self.broadcast(conn.room_id, {
                "type": "user_left_room",
                "room_id": conn.room_id,
                "user_id": conn.user_id,
                "email": conn.email,
                "timestamp": _now(),
            })

    async def send(self, conn: RoomConnection, message: Dict[str, Any]) -> bool:
        """Send to one connection. Returns False if the socket is dead."""
        try:
            await conn.websocket.send_json(message)
            return True
        except Exception as e:
            logger.debug(f"Failed to send to WebSocket: {e}")
            return False

    async def _deliver(self, connections, message: Dict[str, Any]) -> int:
        delivered = 0
        dead_connections = []

        for conn in connections:
            if await self.send(conn, message):
                delivered += 1
            else:
                dead_connections.append(conn)

        for conn in dead_connections:
            await self.disconnect(conn, notify=False)

        return delivered

    async def broadcast(
        self,
        room_id: str,
        message: Dict[str, Any],
        exclude: Optional[RoomConnection] = None
    ) -> int:
        """
        Send message to all connections in a room.

        Returns:
            Number of connections the message reached
        """
        async with self._lock:
            connections = self._rooms.get(room_id, set()).copy()
        connections.discard(exclude)
        return await self._deliver(connections, message)

    async def broadcast_all(self, message: Dict[str, Any], exclude: Optional[RoomConnection] = None) -> int:
        """Send message to every connection in every room."""
        async with self._lock:
            connections = set().union(*self._rooms.values())
        connections.discard(exclude)
        return await self._deliver(connections, message)

    async def send_to_user(self, user_id: str, message: Dict[str, Any]) -> int:
        """Send message to every connection of a user, in any room."""
        async with self._lock:
            connections = self._users.get(user_id, set()).copy()
        return await self._deliver(connections, message)

    async def send_error(self, conn: RoomConnection, message: str, code: str):
        await self.send(conn, {
            "type": "error",
            "message": message,
            "code": code,
            "timestamp": _now(),
        })

    async def handle_event(self, conn: RoomConnection, event: Dict[str, Any]) -> bool:
        """
        Dispatch one client event.

        Returns:
            False when the client asked to leave, True otherwise
        """
        event_type = event.get("type")

        try:
            if event_type == "send_message":
                await self._handle_send_message(conn, event)
            elif event_type == "send_direct_message":
                await self._handle_direct_message(conn, event)
            elif event_type in TYPING_EVENTS:
                await self._handle_typing(conn, event_type, event)
            elif event_type in AUDIO_EVENTS:
                message = {
                    "type": AUDIO_EVENTS[event_type],
                    "room_id": conn.room_id,
                    "user_id": conn.user_id,
                    "email": conn.email,
                    "timestamp": _now(),
                }
                if event_type == "morse_audio_start":
                    message["audio_settings"] = event.get("audio_settings")
                await self.broadcast(conn.room_id, message, exclude=conn)
            elif event_type == "user_presence":
                await self._handle_presence(conn, event)
            elif event_type == "leave_room":
                await self.send(conn, {"type": "left_room", "room_id": conn.room_id, "timestamp": _now()})
                return False
            else:
                await self.send_error(conn, f"Unknown event type: {event_type}", "UNKNOWN_EVENT")
        except DotdashError as e:
            logger.debug(f"Rejected {event_type} from {conn.user_id}: {e}")
            await self.send_error(conn, e.message, e.code)

        return True

    async def _handle_send_message(self, conn: RoomConnection, event: Dict[str, Any]):
        content = build_message_content(event)
        await self.broadcast(conn.room_id, {
            "type": "new_message",
            "message_id": _message_id(),
            "room_id": conn.room_id,
            "sender_id": conn.user_id,
            "content": content,
            "timestamp": _now(),
        })

    async def _handle_direct_message(self, conn: RoomConnection, event: Dict[str, Any]):
        recipient_id = event.get("recipient_id")
        if not recipient_id:
            raise MissingInputError("recipient_id is required for direct messages")
        if recipient_id == conn.user_id:
            raise InvalidInputError("Cannot send message to yourself", code="SELF_MESSAGE")

        content = build_message_content(event)
        message_id = _message_id()
        timestamp = _now()
        delivered = await self.send_to_user(recipient_id, {
            "type": "new_direct_message",
            "message_id": message_id,
            "sender_id": conn.user_id,
            "recipient_id": recipient_id,
            "content": content,
            "timestamp": timestamp,
        })
        if not delivered:
            logger.info(f"Direct message from {conn.user_id} to offline user {recipient_id}")

        await self.send(conn, {
            "type": "direct_message_sent",
            "message_id": message_id,
            "recipient_id": recipient_id,
            "content": content,
            "delivered": delivered > 0,
            "timestamp": timestamp,
        })

    async def _handle_typing(self, conn: RoomConnection, event_type: str, event: Dict[str, Any]):
        room_type, direct_type = TYPING_EVENTS[event_type]
        recipient_id = event.get("recipient_id")

        if recipient_id:
            await self.send_to_user(recipient_id, {
                "type": direct_type,
                "user_id": conn.user_id,
                "email": conn.email,
                "timestamp": _now(),
            })
            return

        await self.broadcast(conn.room_id, {
            "type": room_type,
            "room_id": conn.room_id,
            "user_id": conn.user_id,
            "email": conn.email,
            "timestamp": _now(),
        }, exclude=conn)

    async def _handle_presence(self, conn: RoomConnection, event: Dict[str, Any]):
        status = event.get("status")
        if status not in PRESENCE_STATUSES:
            raise InvalidInputError(f"Presence status must be one of: {', '.join(PRESENCE_STATUSES)}")

        await self.broadcast_all({
            "type": "user_presence_updated",
            "user_id": conn.user_id,
            "email": conn.email,
            "status": status,
            "last_active": _now(),
        }, exclude=conn)

    def get_room_connection_count(self, room_id: str) -> int:
        """Get number of connections in a room."""
        return len(self._rooms.get(room_id, set()))

    def get_all_rooms(self) -> list:
        """Get all room IDs with at least one connection."""
        return list(self._rooms.keys())

