"""Pydantic schemas for API request/response validation."""

from backend.app.schemas.auth import AuthSessionResponse
from backend.app.schemas.idea import (
    IdeaCreate,
    IdeaResponse,
    IdeaListResponse,
    UpvoteResponse,
)
from backend.app.schemas.vote import (
    IdeaRequest,
    UpvoteResult,
    VoteStatusResponse,
    VoteCountResponse,
)

__all__ = [
    "AuthSessionResponse",
    "IdeaCreate",
    "IdeaResponse",
    "IdeaListResponse",
    "UpvoteResponse",
    "IdeaRequest",
    "UpvoteResult",
    "VoteStatusResponse",
    "VoteCountResponse",
]
