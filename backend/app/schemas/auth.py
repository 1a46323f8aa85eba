"""Authentication schemas."""

from pydantic import BaseModel, Field

from backend.app.schemas.types import UTCDateTime


class AuthSessionResponse(BaseModel):
    """Anonymous session issued by /auth/anonymous."""

    user_id: str = Field(..., serialization_alias="userId", description="Anonymous user identity")
    token: str = Field(..., description="Bearer token for authenticated endpoints")
    token_type: str = Field("bearer", serialization_alias="tokenType")
    expires_at: UTCDateTime = Field(..., serialization_alias="expiresAt", description="Token expiry")
