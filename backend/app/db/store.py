"""Store handle: either a connected database or the local demo board.

The handle is built once at process start, kept on ``app.state`` and injected
into routes with :func:`get_store`. Service code matches on the two variants
instead of checking for a missing client.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from starlette.requests import HTTPConnection

from backend.app.core.config import Settings
from backend.app.db.base import Base, create_engine, create_session_factory
from backend.app.db.demo import DemoBoard
# Import all models to register them with SQLAlchemy
import backend.app.models  # noqa: F401

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Connected:
    """A live database behind an async SQLAlchemy engine."""

    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]


@dataclass(frozen=True)
class Unconfigured:
    """No persistent store; reads and writes go to an in-memory board."""

    board: DemoBoard = field(default_factory=DemoBoard)
    reason: str = "not configured"


StoreHandle = Connected | Unconfigured


async def open_store(settings: Settings) -> StoreHandle:
    """
    Build the store handle for this process.

    Falls back to :class:`Unconfigured` when no database is configured or when
    the configured one cannot be reached.
    """
    if not settings.is_configured:
        logger.warning(
            "[STORE] No database configured. Running in demo mode; ideas will not be persisted."
        )
        return Unconfigured(reason="not configured")

    engine = create_engine(settings.database_url, echo=settings.debug)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"[STORE] Database unreachable, falling back to demo mode: {e}")
        await engine.dispose()
        return Unconfigured(reason="unreachable")

    logger.info("[STORE] Connected to database")
    return Connected(engine=engine, session_factory=create_session_factory(engine))


async def close_store(store: StoreHandle) -> None:
    """Release resources held by the handle."""
    match store:
        case Connected(engine=engine):
            await engine.dispose()
        case Unconfigured():
            pass


def is_persisted(store: StoreHandle) -> bool:
    match store:
        case Connected():
            return True
        case Unconfigured():
            return False


def describe_store(store: StoreHandle) -> str:
    match store:
        case Connected():
            return "connected"
        case Unconfigured():
            return "unconfigured"


def get_store(connection: HTTPConnection) -> StoreHandle:
    """FastAPI dependency returning the handle opened in the app lifespan."""
    return connection.app.state.store
