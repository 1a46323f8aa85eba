"""Retrying transaction runner for optimistic read-modify-write units."""

import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from backend.app.core.exceptions import TransactionAbortedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CONTENTION_MARKERS = ("database is locked", "deadlock", "could not serialize")


def is_conflict(exc: Exception) -> bool:
    """
    Whether ``exc`` means a concurrent transaction invalidated this one.

    - StaleDataError: a versioned UPDATE matched no rows.
    - IntegrityError: a concurrent writer inserted the same ledger key first.
    - OperationalError: the store reported lock contention or a serialization failure.
    """
    if isinstance(exc, (StaleDataError, IntegrityError)):
        return True
    if isinstance(exc, OperationalError):
        message = str(exc.orig if exc.orig is not None else exc).lower()
        return any(marker in message for marker in _CONTENTION_MARKERS)
    return False


async def run_transaction(
    session_factory: async_sessionmaker[AsyncSession],
    work: Callable[[AsyncSession], Awaitable[T]],
    max_attempts: int = 5,
) -> T:
    """
    Run ``work`` in a transaction, retrying on optimistic conflicts.

    Each attempt gets a fresh session so reads observe the latest committed
    state. Exceptions raised by ``work`` itself (not found, already voted)
    roll the attempt back and propagate without a retry.

    Args:
        session_factory: Factory producing sessions bound to the store
        work: Coroutine function performing reads and writes on the session
        max_attempts: Number of attempts before giving up

    Returns:
        Whatever ``work`` returned in the attempt that committed

    Raises:
        TransactionAbortedError: If every attempt conflicted
    """
    for attempt in range(1, max_attempts + 1):
        async with session_factory() as session:
            try:
                async with session.begin():
                    result = await work(session)
                return result
            except (StaleDataError, IntegrityError, OperationalError) as e:
                if not is_conflict(e):
                    raise
                logger.debug(
                    f"[TX] Conflict on attempt {attempt}/{max_attempts}: {e.__class__.__name__}"
                )

    logger.warning(f"[TX] Giving up after {max_attempts} conflicting attempts")
    raise TransactionAbortedError(max_attempts)
