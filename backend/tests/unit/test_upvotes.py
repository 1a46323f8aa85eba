"""Unit tests for upvote transactions and vote queries."""

import pytest

from backend.app.core.exceptions import (
    AlreadyVotedError,
    IdeaNotFoundError,
    UnauthenticatedError,
)
from backend.app.models.idea import Idea
from backend.app.models.vote import Vote
from backend.app.services.upvotes import (
    count_votes,
    has_voted,
    upvote_direct,
    upvote_gated,
)


async def _reload(store, idea_id: str) -> Idea:
    async with store.session_factory() as session:
        return await session.get(Idea, idea_id)


class TestDirectUpvote:
    """Test cases for the ungated increment."""

    @pytest.mark.asyncio
    async def test_increments_counter(self, store, idea):
        """Test a direct upvote increments the counter."""
        assert await upvote_direct(store, idea.id) == 1
        assert await upvote_direct(store, idea.id) == 2

        assert (await _reload(store, idea.id)).upvotes == 2

    @pytest.mark.asyncio
    async def test_bumps_version(self, store, idea):
        """Test a direct upvote bumps the row version."""
        version_before = idea.version

        await upvote_direct(store, idea.id)

        assert (await _reload(store, idea.id)).version == version_before + 1

    @pytest.mark.asyncio
    async def test_does_not_touch_ledger(self, store, idea):
        """Test a direct upvote records no vote row."""
        await upvote_direct(store, idea.id)

        assert await count_votes(store, idea.id) == 0

    @pytest.mark.asyncio
    async def test_missing_idea(self, store):
        """Test upvoting a missing idea raises not-found."""
        with pytest.raises(IdeaNotFoundError):
            await upvote_direct(store, "00000000-0000-0000-0000-000000000000")

    @pytest.mark.asyncio
    async def test_demo_board(self, demo_store):
        """Test upvoting on the demo board."""
        assert await upvote_direct(demo_store, "demo-1") == 6


class TestGatedUpvote:
    """Test cases for the one-vote-per-user transaction."""

    @pytest.mark.asyncio
    async def test_first_vote_counts(self, store, idea):
        """Test a first gated vote counts and is recorded."""
        assert await upvote_gated(store, idea.id, "alice") == 1

        status = await has_voted(store, idea.id, "alice")
        assert status.has_voted
        assert status.voted_at is not None

    @pytest.mark.asyncio
    async def test_second_vote_rejected(self, store, idea):
        """Test a second gated vote by the same user is rejected."""
        await upvote_gated(store, idea.id, "alice")

        with pytest.raises(AlreadyVotedError) as exc_info:
            await upvote_gated(store, idea.id, "alice")

        assert exc_info.value.code == "already-exists"
        assert (await _reload(store, idea.id)).upvotes == 1

    @pytest.mark.asyncio
    async def test_distinct_users_each_count(self, store, idea):
        """Test votes by distinct users each count."""
        for user in ("alice", "bob", "carol"):
            await upvote_gated(store, idea.id, user)

        assert (await _reload(store, idea.id)).upvotes == 3
        assert await count_votes(store, idea.id) == 3

    @pytest.mark.asyncio
    async def test_missing_idea_creates_no_vote(self, store):
        """Test a vote on a missing idea leaves no ledger row."""
        missing = "00000000-0000-0000-0000-000000000000"

        with pytest.raises(IdeaNotFoundError):
            await upvote_gated(store, missing, "alice")

        async with store.session_factory() as session:
            assert await session.get(Vote, (missing, "alice")) is None

    @pytest.mark.asyncio
    async def test_unauthenticated_checked_before_lookup(self, store):
        """Test a missing identity is reported before not-found."""
        # A missing idea would raise IdeaNotFoundError if the store were read first
        with pytest.raises(UnauthenticatedError):
            await upvote_gated(store, "no-such-idea", None)

    @pytest.mark.asyncio
    async def test_demo_board(self, demo_store):
        """Test upvoting on the demo board."""
        assert await upvote_gated(demo_store, "demo-2", "alice") == 4
        with pytest.raises(AlreadyVotedError):
            await upvote_gated(demo_store, "demo-2", "alice")


class TestVoteQueries:
    """Test cases for has_voted and count_votes."""

    @pytest.mark.asyncio
    async def test_has_not_voted(self, store, idea):
        """Test a user who has not voted."""
        status = await has_voted(store, idea.id, "alice")

        assert not status.has_voted
        assert status.voted_at is None

    @pytest.mark.asyncio
    async def test_has_voted_requires_identity(self, store, idea):
        """Test checking vote status needs an identity."""
        with pytest.raises(UnauthenticatedError):
            await has_voted(store, idea.id, None)

    @pytest.mark.asyncio
    async def test_count_votes_unknown_idea(self, store):
        """Test counting votes on an unknown idea gives zero."""
        assert await count_votes(store, "unknown") == 0

    @pytest.mark.asyncio
    async def test_count_matches_counter(self, store, idea):
        """Test the vote count matches the counter."""
        for user in ("u1", "u2", "u3", "u4"):
            await upvote_gated(store, idea.id, user)

        assert await count_votes(store, idea.id) == (await _reload(store, idea.id)).upvotes == 4
