"""Upvote transactions and vote-ledger queries.

Two mechanisms exist and a deployment picks one as the source of truth
(``settings.upvote_mode``):

- direct: any caller may increment the counter any number of times.
- gated: one vote per authenticated user, recorded in the vote ledger in the
  same transaction that increments the counter.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.exceptions import (
    AlreadyVotedError,
    IdeaNotFoundError,
    UnauthenticatedError,
)
from backend.app.db.store import Connected, StoreHandle, Unconfigured
from backend.app.db.transaction import run_transaction
from backend.app.models.idea import Idea, utcnow
from backend.app.models.vote import Vote

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteStatus:
    """Whether a user has voted on an idea, and when."""

    has_voted: bool
    voted_at: datetime | None = None


async def _load_idea(session: AsyncSession, idea_id: str) -> Idea:
    idea = await session.get(Idea, idea_id)
    if idea is None:
        raise IdeaNotFoundError(idea_id)
    return idea


async def upvote_direct(store: StoreHandle, idea_id: str, max_attempts: int = 5) -> int:
    """
    Increment an idea's counter by one, without any per-user gate.

    Returns:
        The counter value written by this call

    Raises:
        IdeaNotFoundError: If the idea does not exist when the transaction runs
        TransactionAbortedError: If contention outlasted the retry budget
    """
    match store:
        case Connected(session_factory=session_factory):
            async def work(session: AsyncSession) -> int:
                idea = await _load_idea(session, idea_id)
                idea.upvotes += 1
                await session.flush()
                return idea.upvotes

            upvotes = await run_transaction(session_factory, work, max_attempts=max_attempts)
        case Unconfigured(board=board):
            upvotes = await board.upvote(idea_id)

    logger.info(f"[UPVOTE] Idea {idea_id} now has {upvotes} upvotes")
    return upvotes


async def upvote_gated(
    store: StoreHandle,
    idea_id: str,
    user_id: str | None,
    max_attempts: int = 5,
) -> int:
    """
    Record one vote for ``user_id`` and increment the counter, atomically.

    The ledger insert and the counter increment commit together or not at
    all. Concurrent calls for the same pair conflict; the retry then sees the
    committed vote and fails with AlreadyVotedError.

    Returns:
        The counter value written by this call

    Raises:
        UnauthenticatedError: If there is no caller identity (checked before any read)
        IdeaNotFoundError: If the idea does not exist
        AlreadyVotedError: If the user already voted on this idea
        TransactionAbortedError: If contention outlasted the retry budget
    """
    if user_id is None:
        raise UnauthenticatedError("User must be authenticated to upvote.")

    match store:
        case Connected(session_factory=session_factory):
            async def work(session: AsyncSession) -> int:
                idea = await _load_idea(session, idea_id)
                if await session.get(Vote, (idea_id, user_id)) is not None:
                    raise AlreadyVotedError(idea_id, user_id)

                session.add(Vote(idea_id=idea_id, user_id=user_id, voted_at=utcnow()))
                idea.upvotes += 1
                await session.flush()
                return idea.upvotes

            upvotes = await run_transaction(session_factory, work, max_attempts=max_attempts)
        case Unconfigured(board=board):
            upvotes = await board.upvote_once(idea_id, user_id)

    logger.info(f"[UPVOTE] {user_id} upvoted idea {idea_id} ({upvotes} upvotes)")
    return upvotes


async def has_voted(store: StoreHandle, idea_id: str, user_id: str | None) -> VoteStatus:
    """Look up the caller's own ledger entry for an idea."""
    if user_id is None:
        raise UnauthenticatedError()

    match store:
        case Connected(session_factory=session_factory):
            async with session_factory() as session:
                vote = await session.get(Vote, (idea_id, user_id))
            voted_at = vote.voted_at if vote is not None else None
        case Unconfigured(board=board):
            voted_at = await board.voted_at(idea_id, user_id)

    return VoteStatus(has_voted=voted_at is not None, voted_at=voted_at)


async def count_votes(store: StoreHandle, idea_id: str) -> int:
    """Number of ledger entries for an idea (0 for unknown ideas)."""
    match store:
        case Connected(session_factory=session_factory):
            async with session_factory() as session:
                result = await session.execute(
                    select(func.count()).select_from(Vote).where(Vote.idea_id == idea_id)
                )
                return result.scalar_one()
        case Unconfigured(board=board):
            return await board.count_votes(idea_id)
