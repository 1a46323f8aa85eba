"""Idea management API endpoints."""

import logging

from fastapi import APIRouter, Depends, Query, status

from backend.app.api.auth import get_current_user
from backend.app.core.config import Settings, get_settings
from backend.app.core.exceptions import (
    IdeaBoardException,
    InternalError,
    UpvoteModeDisabledError,
)
from backend.app.db.store import StoreHandle, get_store, is_persisted
from backend.app.schemas.idea import (
    IdeaCreate,
    IdeaListResponse,
    IdeaResponse,
    UpvoteResponse,
)
from backend.app.services.feed import publish_snapshot
from backend.app.services.ideas import list_ideas, submit_idea
from backend.app.services.upvotes import upvote_direct

router = APIRouter(prefix="/ideas", tags=["ideas"])

# Logger
logger = logging.getLogger(__name__)


@router.post("", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
async def create_idea(
    idea_data: IdeaCreate,
    store: StoreHandle = Depends(get_store),
    user_id: str | None = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> IdeaResponse:
    """
    Submit a new idea.

    The text is trimmed and must be 1-280 characters. A connected store
    requires a bearer token; the demo board accepts anonymous submissions.
    """
    try:
        idea = await submit_idea(store, idea_data.text, user_id, settings.max_idea_length)
    except IdeaBoardException:
        raise
    except Exception as e:
        logger.exception(f"[IDEA] Error adding idea: {e}")
        raise InternalError("submitting the idea", e) from e

    await publish_snapshot(store)
    return IdeaResponse.model_validate(idea)


@router.get("", response_model=IdeaListResponse)
async def get_ideas(
    limit: int | None = Query(None, ge=1, description="Return at most this many ideas"),
    store: StoreHandle = Depends(get_store),
) -> IdeaListResponse:
    """List ideas, most recent first."""
    try:
        ideas = await list_ideas(store, limit)
    except IdeaBoardException:
        raise
    except Exception as e:
        logger.exception(f"[IDEA] Error listing ideas: {e}")
        raise InternalError("listing ideas", e) from e

    return IdeaListResponse(
        ideas=[IdeaResponse.model_validate(idea) for idea in ideas],
        total=len(ideas),
        persisted=is_persisted(store),
    )


@router.post("/{idea_id}/upvote", response_model=UpvoteResponse)
async def upvote_idea(
    idea_id: str,
    store: StoreHandle = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> UpvoteResponse:
    """
    Increment an idea's counter without a per-user gate.

    Only available when the server runs with ``upvote_mode=direct``.
    """
    if settings.upvote_mode != "direct":
        raise UpvoteModeDisabledError("direct", settings.upvote_mode)

    try:
        upvotes = await upvote_direct(store, idea_id, settings.transaction_max_attempts)
    except IdeaBoardException:
        raise
    except Exception as e:
        logger.exception(f"[UPVOTE] Error upvoting idea {idea_id}: {e}")
        raise InternalError("upvoting the idea", e) from e

    await publish_snapshot(store)
    return UpvoteResponse(success=True, upvotes=upvotes, persisted=is_persisted(store))
