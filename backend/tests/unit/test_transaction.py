"""Unit tests for the retrying transaction runner."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm.exc import StaleDataError

from backend.app.core.exceptions import IdeaNotFoundError, TransactionAbortedError
from backend.app.db.transaction import is_conflict, run_transaction
from backend.app.models.idea import Idea


class TestIsConflict:
    """Test classification of store errors."""

    def test_stale_data_is_conflict(self):
        """Test a stale version counts as a conflict."""
        assert is_conflict(StaleDataError("version mismatch"))

    def test_integrity_error_is_conflict(self):
        """Test a key collision counts as a conflict."""
        assert is_conflict(IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed")))

    def test_locked_database_is_conflict(self):
        """Test a locked database counts as a conflict."""
        assert is_conflict(OperationalError("UPDATE", {}, Exception("database is locked")))

    def test_other_operational_error_is_not_conflict(self):
        """Test other operational errors are not conflicts."""
        assert not is_conflict(OperationalError("SELECT", {}, Exception("no such table: ideas")))

    def test_unrelated_error_is_not_conflict(self):
        """Test unrelated errors are not conflicts."""
        assert not is_conflict(ValueError("boom"))


class TestRunTransaction:
    """Test cases for run_transaction."""

    @pytest.mark.asyncio
    async def test_commits_work(self, store):
        """Test successful work is committed."""
        async def work(session):
            session.add(Idea(text="committed", author_id="a"))
            return "done"

        assert await run_transaction(store.session_factory, work) == "done"

        async with store.session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(Idea))
        assert count == 1

    @pytest.mark.asyncio
    async def test_retries_after_conflict(self, store):
        """Test a conflicting attempt is retried."""
        calls = []

        async def work(session):
            calls.append(1)
            if len(calls) == 1:
                raise StaleDataError("concurrent update")
            return len(calls)

        assert await run_transaction(store.session_factory, work, max_attempts=3) == 2
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_aborts_after_retry_budget(self, store):
        """Test the runner aborts once the retry budget is spent."""
        calls = []

        async def work(session):
            calls.append(1)
            raise StaleDataError("always conflicting")

        with pytest.raises(TransactionAbortedError) as exc_info:
            await run_transaction(store.session_factory, work, max_attempts=4)

        assert len(calls) == 4
        assert exc_info.value.attempts == 4
        assert exc_info.value.code == "aborted"

    @pytest.mark.asyncio
    async def test_domain_errors_are_not_retried(self, store):
        """Test domain errors propagate without retry."""
        calls = []

        async def work(session):
            calls.append(1)
            raise IdeaNotFoundError("missing")

        with pytest.raises(IdeaNotFoundError):
            await run_transaction(store.session_factory, work, max_attempts=5)

        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failed_attempt_leaves_no_writes(self, store):
        """Test a failed attempt is rolled back."""
        async def work(session):
            session.add(Idea(text="should roll back", author_id="a"))
            await session.flush()
            raise IdeaNotFoundError("missing")

        with pytest.raises(IdeaNotFoundError):
            await run_transaction(store.session_factory, work)

        async with store.session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(Idea))
        assert count == 0

    @pytest.mark.asyncio
    async def test_non_conflict_operational_error_propagates(self, store):
        """Test a non-conflict operational error propagates."""
        async def work(session):
            raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        with pytest.raises(OperationalError):
            await run_transaction(store.session_factory, work, max_attempts=3)
