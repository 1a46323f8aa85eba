"""Authentication endpoints and the caller-identity dependency."""

from fastapi import APIRouter, Depends, Header, status

from backend.app.core.config import Settings, get_settings
from backend.app.schemas.auth import AuthSessionResponse
from backend.app.services.auth import authenticate, resolve_identity

router = APIRouter(prefix="/auth", tags=["auth"])


def _bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_current_user(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> str | None:
    """
    Resolve the caller's identity from the bearer token.

    Returns None for anonymous callers; each route decides whether that is
    allowed.
    """
    return resolve_identity(_bearer_token(authorization), settings)


@router.post("/anonymous", response_model=AuthSessionResponse, status_code=status.HTTP_201_CREATED)
async def sign_in_anonymously(
    settings: Settings = Depends(get_settings),
) -> AuthSessionResponse:
    """Start an anonymous session and return its bearer token."""
    session = authenticate(settings)
    return AuthSessionResponse(
        user_id=session.user_id,
        token=session.token,
        expires_at=session.expires_at,
    )
