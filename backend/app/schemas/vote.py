"""Request and response schemas for the remote callable vote functions."""

from typing import Any

from pydantic import AliasChoices, BaseModel, Field

from backend.app.schemas.types import UTCDateTime


class IdeaRequest(BaseModel):
    """
    Callable request carrying an idea ID.

    ``idea_id`` accepts any JSON value so that type errors are reported by the
    callable itself, after the caller's identity has been checked.
    """

    idea_id: Any = Field(
        None,
        validation_alias=AliasChoices("ideaId", "idea_id"),
        description="Target idea ID"
    )


class UpvoteResult(BaseModel):
    """Response of upvoteIdea."""

    success: bool
    upvotes: int
    message: str


class VoteStatusResponse(BaseModel):
    """Response of hasUserVoted."""

    has_voted: bool = Field(..., serialization_alias="hasVoted")
    voted_at: UTCDateTime | None = Field(None, serialization_alias="votedAt")


class VoteCountResponse(BaseModel):
    """Response of getVoteCount."""

    vote_count: int = Field(..., serialization_alias="voteCount")
