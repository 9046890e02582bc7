"""API dependencies for dependency injection."""

import json
import logging
from typing import Optional

from ..config import settings
from ..services.venue import Venue, create_venue

logger = logging.getLogger(__name__)


class ConnectionManager:
    """WebSocket connection manager for real-time updates."""

    def __init__(self):
        self.active_connections: list = []

    async def connect(self, websocket):
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, message: dict):
        """Broadcast message to all connected clients."""
        for connection in list(self.active_connections):
            try:
                await connection.send_text(json.dumps(message))
            except Exception as e:
                logger.warning("Dropping WebSocket client after send failure: %s", e)
                self.disconnect(connection)

    async def send_personal(self, message: dict, websocket):
        """Send message to specific client."""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.warning("Dropping WebSocket client after send failure: %s", e)
            self.disconnect(websocket)


# Global instances
connection_manager = ConnectionManager()
_venue: Optional[Venue] = None


def get_connection_manager() -> ConnectionManager:
    """Get connection manager dependency."""
    return connection_manager


def get_venue() -> Venue:
    """Get the venue dependency, building it from settings on first use."""
    global _venue
    if _venue is None:
        _venue = create_venue(settings)
    return _venue


def state_snapshot(venue: Venue) -> dict:
    """Full table and queue state for WebSocket clients."""
    return {
        "tables": [t.to_dict() for t in venue.store.get_tables()],
        "entries": [e.to_dict() for e in venue.store.get_entries()],
    }
