"""Remote callable functions for one-vote-per-user upvoting.

Each callable takes a JSON request object and answers with a JSON result, or
with an error body whose ``code`` is one of the remote-procedure error codes
(unauthenticated, invalid-argument, not-found, already-exists, aborted,
failed-precondition, internal).
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends

from backend.app.api.auth import get_current_user
from backend.app.core.config import Settings, get_settings
from backend.app.core.exceptions import (
    IdeaBoardException,
    InternalError,
    InvalidArgumentError,
    UnauthenticatedError,
    UpvoteModeDisabledError,
)
from backend.app.db.store import StoreHandle, get_store, is_persisted
from backend.app.schemas.vote import (
    IdeaRequest,
    UpvoteResult,
    VoteCountResponse,
    VoteStatusResponse,
)
from backend.app.services.feed import publish_snapshot
from backend.app.services.upvotes import count_votes, has_voted, upvote_gated

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])


def _require_idea_id(payload: Any) -> str:
    """
    Extract a non-blank string ideaId from a raw callable request body.

    Raises:
        InvalidArgumentError: If the body is not an object or ideaId is missing, blank or not a string
    """
    if payload is not None and not isinstance(payload, dict):
        raise InvalidArgumentError("Request body must be a JSON object.", argument="ideaId")

    idea_id = IdeaRequest.model_validate(payload or {}).idea_id
    if idea_id is None or (isinstance(idea_id, str) and not idea_id.strip()):
        raise InvalidArgumentError("ideaId is required.", argument="ideaId")
    if not isinstance(idea_id, str):
        raise InvalidArgumentError("ideaId must be a string.", argument="ideaId")
    return idea_id.strip()


@router.post("/upvoteIdea", response_model=UpvoteResult)
async def upvote_idea(
    payload: Any = Body(None),
    store: StoreHandle = Depends(get_store),
    user_id: str | None = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> UpvoteResult:
    """Upvote an idea at most once per authenticated user."""
    if user_id is None:
        raise UnauthenticatedError("User must be authenticated to upvote.")
    idea_id = _require_idea_id(payload)
    if settings.upvote_mode != "gated":
        raise UpvoteModeDisabledError("gated", settings.upvote_mode)

    try:
        upvotes = await upvote_gated(store, idea_id, user_id, settings.transaction_max_attempts)
    except IdeaBoardException as e:
        logger.info(f"[UPVOTE] Upvote of {idea_id} by {user_id} rejected: {e.code}")
        raise
    except Exception as e:
        logger.exception(f"[UPVOTE] Error upvoting idea: {e}")
        raise InternalError("upvoting the idea", e) from e

    await publish_snapshot(store)
    message = "Idea upvoted successfully!"
    if not is_persisted(store):
        message += " (demo mode: not persisted)"
    return UpvoteResult(success=True, upvotes=upvotes, message=message)


@router.post("/hasUserVoted", response_model=VoteStatusResponse)
async def has_user_voted(
    payload: Any = Body(None),
    store: StoreHandle = Depends(get_store),
    user_id: str | None = Depends(get_current_user),
) -> VoteStatusResponse:
    """Check whether the caller has already upvoted an idea."""
    if user_id is None:
        raise UnauthenticatedError()
    idea_id = _require_idea_id(payload)

    try:
        vote_status = await has_voted(store, idea_id, user_id)
    except IdeaBoardException:
        raise
    except Exception as e:
        logger.exception(f"[VOTE] Error checking vote status: {e}")
        raise InternalError("checking vote status", e) from e

    return VoteStatusResponse(has_voted=vote_status.has_voted, voted_at=vote_status.voted_at)


@router.post("/getVoteCount", response_model=VoteCountResponse)
async def get_vote_count(
    payload: Any = Body(None),
    store: StoreHandle = Depends(get_store),
) -> VoteCountResponse:
    """Count the vote-ledger entries of an idea. No authentication required."""
    idea_id = _require_idea_id(payload)

    try:
        vote_count = await count_votes(store, idea_id)
    except Exception as e:
        logger.exception(f"[VOTE] Error getting vote count: {e}")
        raise InternalError("getting vote count", e) from e

    return VoteCountResponse(vote_count=vote_count)
