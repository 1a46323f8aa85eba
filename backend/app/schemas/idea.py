"""Idea-related schemas."""

from pydantic import BaseModel, Field

from backend.app.schemas.types import UTCDateTime


class IdeaCreate(BaseModel):
    """Schema for submitting a new idea."""

    text: str = Field(
        ...,
        description="Idea text; trimmed, non-empty, at most 280 characters"
    )


class IdeaResponse(BaseModel):
    """Schema for idea data in responses."""

    id: str = Field(..., description="Idea ID")
    text: str = Field(..., description="Idea text")
    upvotes: int = Field(..., ge=0, description="Upvote counter")
    author_id: str = Field(..., serialization_alias="authorId", description="Author identity")
    created_at: UTCDateTime = Field(..., serialization_alias="createdAt", description="Creation timestamp")

    model_config = {"from_attributes": True}


class IdeaListResponse(BaseModel):
    """Schema for the idea list, newest first."""

    ideas: list[IdeaResponse] = Field(..., description="List of ideas")
    total: int = Field(..., description="Total number of ideas")
    persisted: bool = Field(..., description="False when served from the local demo board")


class UpvoteResponse(BaseModel):
    """Result of a direct (ungated) upvote."""

    success: bool = Field(..., description="Whether the increment was committed")
    upvotes: int = Field(..., description="Counter value after the increment")
    persisted: bool = Field(..., description="False when served from the local demo board")
