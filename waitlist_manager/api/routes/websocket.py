"""WebSocket routes for real-time communication."""

import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from ...services.venue import Venue
from ..deps import ConnectionManager, get_connection_manager, get_venue, state_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(tags=["websocket"])


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    manager: ConnectionManager = Depends(get_connection_manager),
    venue: Venue = Depends(get_venue),
):
    """Main WebSocket endpoint for real-time updates."""
    await manager.connect(websocket)

    try:
        await manager.send_personal(
            {"type": "initial_state", "data": state_snapshot(venue)}, websocket
        )

        while True:
            data = await websocket.receive_text()
            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                await manager.send_personal(
                    {"type": "error", "message": "Invalid JSON"}, websocket
                )
                continue

            if not isinstance(message, dict):
                await manager.send_personal(
                    {"type": "error", "message": "Invalid message"}, websocket
                )
                continue

            await handle_client_message(message, websocket, manager, venue)

    except WebSocketDisconnect:
        manager.disconnect(websocket)
    except Exception as e:
        logger.error("WebSocket error: %s", e)
        manager.disconnect(websocket)


async def handle_client_message(
    message: dict,
    websocket: WebSocket,
    manager: ConnectionManager,
    venue: Venue,
):
    """Handle incoming WebSocket messages from clients."""
    msg_type = message.get("type")

    if msg_type == "ping":
        await manager.send_personal({"type": "pong"}, websocket)

    elif msg_type == "request_state":
        await manager.send_personal(
            {"type": "state_update", "data": state_snapshot(venue)}, websocket
        )

    else:
        await manager.send_personal(
            {"type": "error", "message": f"Unknown message type: {msg_type}"}, websocket
        )
