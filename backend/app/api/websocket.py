"""WebSocket endpoints for real-time communication."""

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from backend.app.db.store import StoreHandle, get_store
from backend.app.services.feed import build_snapshot
from backend.app.websocket.manager import IDEAS_CHANNEL, manager

router = APIRouter(tags=["websocket"])


@router.websocket("/ws/ideas")
async def ideas_feed(websocket: WebSocket, store: StoreHandle = Depends(get_store)):
    """
    Live idea list.

    Events sent to clients:
    - ideas_snapshot: the full idea list, newest first; sent on connect and
      after every committed submission or upvote
    - pong: reply to a "ping" text frame
    """
    await manager.connect(websocket, IDEAS_CHANNEL)

    try:
        snapshot = await build_snapshot(store)
        await manager.send_personal_message(
            manager.ideas_snapshot_message(snapshot),
            websocket
        )

        # Keep connection alive and listen for heartbeats
        while True:
            data = await websocket.receive_text()

            if data == "ping":
                await manager.send_personal_message(
                    {"type": "pong"},
                    websocket
                )

    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket, IDEAS_CHANNEL)
