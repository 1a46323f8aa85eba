"""In-memory idea board used when no persistent store is configured.

Nothing here survives a restart. Every response built from this board is
flagged as non-persistent so clients can tell it apart from stored data.
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from backend.app.core.exceptions import AlreadyVotedError, IdeaNotFoundError
from backend.app.models.idea import utcnow

DEMO_AUTHOR = "demo-user"


@dataclass
class DemoIdea:
    """Idea held only in process memory; mirrors the Idea model's public fields."""

    text: str
    author_id: str = DEMO_AUTHOR
    upvotes: int = 0
    id: str = field(default_factory=lambda: f"demo-{uuid.uuid4().hex[:12]}")
    created_at: datetime = field(default_factory=utcnow)


def _seed_ideas() -> list[DemoIdea]:
    now = utcnow()
    return [
        DemoIdea(
            id="demo-1",
            text="Welcome to the Idea Board! This is a demo idea. "
                 "Configure a database to start creating real ideas.",
            upvotes=5,
            created_at=now,
        ),
        DemoIdea(
            id="demo-2",
            text="Set DATABASE_URL in .env to enable persistence and real-time sync.",
            upvotes=3,
            created_at=now - timedelta(hours=1),
        ),
    ]


class DemoBoard:
    """Process-local idea board guarded by a single asyncio lock."""

    def __init__(self, seed: bool = True):
        self._ideas: dict[str, DemoIdea] = {}
        self._votes: dict[tuple[str, str], datetime] = {}
        self._lock = asyncio.Lock()
        if seed:
            for idea in _seed_ideas():
                self._ideas[idea.id] = idea

    async def add(self, text: str, author_id: str = DEMO_AUTHOR) -> DemoIdea:
        async with self._lock:
            idea = DemoIdea(text=text, author_id=author_id)
            self._ideas[idea.id] = idea
            return idea

    async def ideas(self, limit: int | None = None) -> list[DemoIdea]:
        async with self._lock:
            ideas = sorted(
                self._ideas.values(),
                key=lambda i: (i.created_at, i.id),
                reverse=True,
            )
        return ideas[:limit] if limit is not None else ideas

    async def upvote(self, idea_id: str) -> int:
        async with self._lock:
            idea = self._get(idea_id)
            idea.upvotes += 1
            return idea.upvotes

    async def upvote_once(self, idea_id: str, user_id: str) -> int:
        async with self._lock:
            idea = self._get(idea_id)
            if (idea_id, user_id) in self._votes:
                raise AlreadyVotedError(idea_id, user_id)
            self._votes[(idea_id, user_id)] = utcnow()
            idea.upvotes += 1
            return idea.upvotes

    async def voted_at(self, idea_id: str, user_id: str) -> datetime | None:
        async with self._lock:
            return self._votes.get((idea_id, user_id))

    async def count_votes(self, idea_id: str) -> int:
        async with self._lock:
            return sum(1 for (voted_idea, _) in self._votes if voted_idea == idea_id)

    def _get(self, idea_id: str) -> DemoIdea:
        idea = self._ideas.get(idea_id)
        if idea is None:
            raise IdeaNotFoundError(idea_id)
        return idea
