import asyncio
import json

from starlette.websockets import WebSocketState

from fueltrack.services.notification_service import ConnectionManager, TripEvent


class FakeSocket:
    def __init__(self, open_=True, fail=False):
        state = WebSocketState.CONNECTED if open_ else WebSocketState.DISCONNECTED
        self.client_state = state
        self.application_state = state
        self.fail = fail
        self.accepted = False
        self.sent: list[str] = []

    async def accept(self):
        self.accepted = True

    async def send_text(self, message: str):
        if self.fail:
            raise RuntimeError("broken pipe")
        self.sent.append(message)


def _manager_with(*sockets) -> ConnectionManager:
    manager = ConnectionManager()

    async def register_all():
        for s in sockets:
            await manager.register(s)

    asyncio.run(register_all())
    return manager


def test_register_accepts_and_tracks_connection():
    sock = FakeSocket()
    manager = _manager_with(sock)
    assert sock.accepted
    assert manager.active_count == 1

    manager.unregister(sock)
    assert manager.active_count == 0


def test_unregister_unknown_connection_is_harmless():
    manager = ConnectionManager()
    manager.unregister(FakeSocket())
    assert manager.active_count == 0


def test_broadcast_reaches_only_open_connections():
    open_socks = [FakeSocket() for _ in range(3)]
    closed = FakeSocket(open_=False)
    manager = _manager_with(*open_socks, closed)

    delivered = asyncio.run(manager.broadcast(TripEvent.CREATED, {"id": "abc"}))

    assert delivered == 3
    for s in open_socks:
        assert len(s.sent) == 1
    assert closed.sent == []


def test_broadcast_message_shape():
    sock = FakeSocket()
    manager = _manager_with(sock)

    asyncio.run(manager.broadcast(TripEvent.DELETED, {"id": "t1"}))

    assert json.loads(sock.sent[0]) == {"type": "TRIP_DELETED", "data": {"id": "t1"}}


def test_failed_send_is_isolated_and_drops_the_socket():
    good_a, bad, good_b = FakeSocket(), FakeSocket(fail=True), FakeSocket()
    manager = _manager_with(good_a, bad, good_b)

    delivered = asyncio.run(manager.broadcast(TripEvent.UPDATED, {"id": "t1"}))

    assert delivered == 2
    assert len(good_a.sent) == 1 and len(good_b.sent) == 1
    assert manager.active_count == 2


def test_broadcast_with_no_connections():
    assert asyncio.run(ConnectionManager().broadcast(TripEvent.CREATED, {})) == 0


def test_event_accepts_wire_name():
    sock = FakeSocket()
    manager = _manager_with(sock)
    asyncio.run(manager.broadcast("TRIP_UPDATED", {"id": "x"}))
    assert json.loads(sock.sent[0])["type"] == "TRIP_UPDATED"
