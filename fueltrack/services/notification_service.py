import enum
import json
import logging
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


class TripEvent(str, enum.Enum):
    CREATED = "TRIP_CREATED"
    UPDATED = "TRIP_UPDATED"
    # Wire name kept for existing clients; the trip is soft-cancelled, never removed
    DELETED = "TRIP_DELETED"


def _is_open(conn: WebSocket) -> bool:
    return (
        conn.client_state == WebSocketState.CONNECTED
        and conn.application_state == WebSocketState.CONNECTED
    )


class ConnectionManager:
    """
    Live WebSocket connections of this server process.

    One instance per app (``app.state.notifier``). All methods run on the
    event loop, so the connection set needs no lock.

    Delivery is best-effort: a client that is offline when a broadcast goes
    out gets nothing and is expected to refetch after reconnecting.
    """

    def __init__(self):
        self._connections: set[WebSocket] = set()

    @property
    def active_count(self) -> int:
        return len(self._connections)

    async def register(self, conn: WebSocket) -> None:
        await conn.accept()
        self._connections.add(conn)
        logger.info(f"WebSocket connected ({self.active_count} open)")

    def unregister(self, conn: WebSocket) -> None:
        self._connections.discard(conn)
        logger.info(f"WebSocket disconnected ({self.active_count} open)")

    async def broadcast(self, event: TripEvent, payload: Any) -> int:
        """
        Send ``{"type": event, "data": payload}`` to every open connection.

        Returns the number of connections the message was written to.
        Never raises: a failing socket is logged and dropped.
        """
        event = TripEvent(event)
        message = json.dumps({"type": event.value, "data": payload}, default=str)
        delivered = 0

        for conn in list(self._connections):
            if not _is_open(conn):
                continue
            try:
                await conn.send_text(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping WebSocket after failed send of {event.value}: {e}")
                self._connections.discard(conn)

        logger.debug(f"Broadcast {event.value} to {delivered} client(s)")
        return delivered
