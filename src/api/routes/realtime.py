"""WebSocket endpoint for real-time order updates."""

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from src.core.realtime import RealtimeHub

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def realtime_socket(websocket: WebSocket) -> None:
    """Real-time channel.

    Clients send ``{"event": "joinOrderRoom", "data": "<order id>"}`` (and
    the matching leave/user-room commands) and receive ``newOrder``,
    ``orderStatusUpdate`` and ``pickupReady`` events in the same envelope.
    """
    hub: RealtimeHub = websocket.app.state.hub
    client_id = await hub.connect(websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                logger.warning("Ignoring non-JSON frame from %s", client_id)
                continue
            hub.handle_command(client_id, message)
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(client_id)
