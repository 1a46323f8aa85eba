"""Anonymous sign-in and bearer token verification."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from backend.app.core.config import Settings
from backend.app.core.exceptions import InternalError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """An anonymous identity and the signed token proving it."""

    user_id: str
    token: str
    expires_at: datetime


def authenticate(settings: Settings) -> AuthSession:
    """
    Sign in anonymously: mint a fresh identity and a token for it.

    Called explicitly by clients (``POST /api/auth/anonymous``), never as a
    side effect of importing or starting the app.

    Raises:
        InternalError: If the token cannot be signed
    """
    user_id = uuid.uuid4().hex
    expires_at = datetime.now(timezone.utc) + timedelta(hours=settings.jwt_expiration_hours)
    claims = {"sub": user_id, "exp": expires_at, "anonymous": True}
    try:
        token = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
    except JWTError as e:
        logger.error(f"[AUTH] Failed to sign session token: {e}")
        raise InternalError("signing in", e)

    logger.info(f"[AUTH] Signed in anonymous user {user_id}")
    return AuthSession(user_id=user_id, token=token, expires_at=expires_at)


def resolve_identity(token: str | None, settings: Settings) -> str | None:
    """
    Return the user id a token was issued to.

    Missing, malformed, forged and expired tokens all resolve to None.
    """
    if not token:
        return None
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"[AUTH] Rejected token: {e}")
        return None
    subject = claims.get("sub")
    return subject if isinstance(subject, str) and subject else None
