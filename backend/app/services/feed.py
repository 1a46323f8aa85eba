"""Live idea feed: pushes the ordered idea list to WebSocket subscribers."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from backend.app.db.store import StoreHandle, is_persisted
from backend.app.schemas.idea import IdeaResponse
from backend.app.services.ideas import list_ideas
from backend.app.websocket.manager import IDEAS_CHANNEL, manager

logger = logging.getLogger(__name__)


async def build_snapshot(store: StoreHandle) -> dict[str, Any]:
    """The full idea list, newest first, in wire form."""
    ideas = await list_ideas(store)
    return {
        "ideas": [
            IdeaResponse.model_validate(idea).model_dump(mode="json", by_alias=True)
            for idea in ideas
        ],
        "persisted": is_persisted(store),
    }


async def publish_snapshot(store: StoreHandle) -> None:
    """
    Push a fresh snapshot to every subscriber.

    Called after a write has committed; a failure here is logged and does not
    undo or fail the write.
    """
    if not manager.has_subscribers(IDEAS_CHANNEL):
        return
    try:
        snapshot = await build_snapshot(store)
    except SQLAlchemyError as e:
        logger.error(f"[FEED] Could not load ideas for snapshot: {e}")
        return
    await manager.send_ideas_snapshot(snapshot)
