"""Idea submission and listing."""

import logging

from sqlalchemy import select

from backend.app.core.exceptions import InvalidArgumentError, UnauthenticatedError
from backend.app.db.demo import DEMO_AUTHOR, DemoIdea
from backend.app.db.store import Connected, StoreHandle, Unconfigured
from backend.app.models.idea import Idea

logger = logging.getLogger(__name__)

DEFAULT_MAX_IDEA_LENGTH = 280


def normalize_idea_text(text: str | None, max_length: int = DEFAULT_MAX_IDEA_LENGTH) -> str:
    """
    Trim idea text and enforce the length limit.

    Length is counted in code points, after trimming.

    Raises:
        InvalidArgumentError: If the text is empty, whitespace-only or too long
    """
    trimmed = (text or "").strip()
    if not trimmed:
        raise InvalidArgumentError("Idea text must not be empty.", argument="text")
    if len(trimmed) > max_length:
        raise InvalidArgumentError(
            f"Ideas must be {max_length} characters or less.", argument="text"
        )
    return trimmed


async def submit_idea(
    store: StoreHandle,
    text: str | None,
    user_id: str | None,
    max_length: int = DEFAULT_MAX_IDEA_LENGTH,
) -> Idea | DemoIdea:
    """
    Create a new idea with zero upvotes.

    A connected store requires an authenticated author. The demo board
    accepts anonymous submissions and attributes them to the demo user.
    """
    trimmed = normalize_idea_text(text, max_length)

    match store:
        case Connected(session_factory=session_factory):
            if user_id is None:
                raise UnauthenticatedError("User must be authenticated to submit ideas.")
            async with session_factory() as session:
                idea = Idea(text=trimmed, upvotes=0, author_id=user_id)
                session.add(idea)
                await session.commit()
            logger.info(f"[IDEA] {user_id} submitted idea {idea.id}")
            return idea
        case Unconfigured(board=board):
            idea = await board.add(trimmed, author_id=user_id or DEMO_AUTHOR)
            logger.info(f"[IDEA] Demo idea {idea.id} added locally (not persisted)")
            return idea


async def list_ideas(store: StoreHandle, limit: int | None = None) -> list[Idea] | list[DemoIdea]:
    """
    All ideas, most recent first.

    Raises:
        InvalidArgumentError: If limit is given and is not positive
    """
    if limit is not None and limit < 1:
        raise InvalidArgumentError("limit must be a positive integer.", argument="limit")

    match store:
        case Connected(session_factory=session_factory):
            query = select(Idea).order_by(Idea.created_at.desc(), Idea.id.desc())
            if limit is not None:
                query = query.limit(limit)
            async with session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
        case Unconfigured(board=board):
            return await board.ideas(limit)
