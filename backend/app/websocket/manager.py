"""WebSocket connection manager for real-time idea list updates."""

import json
from typing import Any

from fastapi import WebSocket

IDEAS_CHANNEL = "ideas"


class ConnectionManager:
    """Manages WebSocket connections for real-time updates."""

    def __init__(self):
        """Initialize connection manager."""
        # Maps channel -> list of WebSocket connections
        self.active_connections: dict[str, list[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, channel: str = IDEAS_CHANNEL) -> None:
        """Accept a new WebSocket connection and subscribe it to a channel."""
        await websocket.accept()

        if channel not in self.active_connections:
            self.active_connections[channel] = []

        self.active_connections[channel].append(websocket)

    def disconnect(self, websocket: WebSocket, channel: str = IDEAS_CHANNEL) -> None:
        """Remove a WebSocket connection from a channel."""
        if channel in self.active_connections:
            if websocket in self.active_connections[channel]:
                self.active_connections[channel].remove(websocket)

            # Clean up empty channels
            if not self.active_connections[channel]:
                del self.active_connections[channel]

    def has_subscribers(self, channel: str = IDEAS_CHANNEL) -> bool:
        return bool(self.active_connections.get(channel))

    async def send_personal_message(self, message: dict[str, Any], websocket: WebSocket) -> None:
        """Send a message to a specific WebSocket connection."""
        await websocket.send_text(json.dumps(message))

    async def broadcast(self, channel: str, message: dict[str, Any]) -> None:
        """Broadcast a message to all connections on a channel."""
        if channel not in self.active_connections:
            return

        payload = json.dumps(message)
        disconnected = []
        for connection in list(self.active_connections[channel]):
            try:
                await connection.send_text(payload)
            except Exception:
                # Mark for removal if connection is broken
                disconnected.append(connection)

        # Clean up broken connections
        for connection in disconnected:
            self.disconnect(connection, channel)

    @staticmethod
    def ideas_snapshot_message(snapshot: dict[str, Any]) -> dict[str, Any]:
        return {"type": "ideas_snapshot", "data": snapshot}

    async def send_ideas_snapshot(self, snapshot: dict[str, Any]) -> None:
        """Broadcast the full, ordered idea list to all idea subscribers."""
        await self.broadcast(IDEAS_CHANNEL, self.ideas_snapshot_message(snapshot))


# Global connection manager instance
manager = ConnectionManager()
