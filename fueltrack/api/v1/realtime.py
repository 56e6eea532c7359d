import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status
from starlette.concurrency import run_in_threadpool

from fueltrack.database import SessionLocal
from fueltrack.dependencies import user_from_token
from fueltrack.services.notification_service import ConnectionManager
from fueltrack.utils.exceptions import AppException

logger = logging.getLogger(__name__)

router = APIRouter()


def _authenticate(token: str | None) -> bool:
    if not token:
        return False
    db = SessionLocal()
    try:
        user_from_token(db, token)
        return True
    except AppException:
        return False
    finally:
        db.close()


@router.websocket("/ws")
async def trip_updates(websocket: WebSocket, token: str | None = Query(None)):
    """
    Push channel for trip changes. Messages are `{type, data}`; clients treat
    any message as "refetch the trip list". Inbound messages are ignored.
    """
    if not await run_in_threadpool(_authenticate, token):
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    notifier: ConnectionManager = websocket.app.state.notifier
    await notifier.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        notifier.unregister(websocket)
