"""Pytest configuration and fixtures."""

import pytest
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport

from backend.app.core.config import Settings, get_settings
from backend.app.db.demo import DemoBoard
from backend.app.db.store import Connected, Unconfigured, close_store, get_store, open_store
from backend.app.main import app
from backend.app.services.ideas import submit_idea


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """
    Settings for a temporary on-disk SQLite database.

    A file database (rather than :memory:) gives every session its own
    connection, so concurrent transactions really contend.
    """
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'ideas.db'}",
        secret_key="test-secret-key",
        upvote_mode="gated",
        transaction_max_attempts=25,
    )


@pytest.fixture(scope="function")
async def store(test_settings: Settings) -> AsyncGenerator[Connected, None]:
    """
    Create a connected store.

    Each test gets a fresh database with all tables created.
    """
    handle = await open_store(test_settings)
    assert isinstance(handle, Connected)

    yield handle

    # Cleanup
    await close_store(handle)


@pytest.fixture
def demo_store() -> Unconfigured:
    """Store handle backed by a freshly seeded in-memory board."""
    return Unconfigured(board=DemoBoard())


@pytest.fixture
async def idea(store: Connected):
    """A persisted idea with zero upvotes."""
    return await submit_idea(store, "Plant trees along the river path", "author-1")


def _override(store, settings: Settings) -> None:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_settings] = lambda: settings


@pytest.fixture(scope="function")
async def test_client(store: Connected, test_settings: Settings) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client bound to the temporary database.

    Overrides the app's store and settings dependencies.
    """
    _override(store, test_settings)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def demo_client(demo_store: Unconfigured) -> AsyncGenerator[AsyncClient, None]:
    """Create test client running against the demo board."""
    _override(demo_store, Settings(database_url="", secret_key="test-secret-key", upvote_mode="gated"))

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def sign_in(client: AsyncClient) -> dict:
    """Start an anonymous session and return its auth headers and user id."""
    response = await client.post("/api/auth/anonymous")
    assert response.status_code == 201
    data = response.json()
    return {
        "user_id": data["userId"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
async def signed_in(test_client: AsyncClient) -> dict:
    """An anonymous session on the connected test client."""
    return await sign_in(test_client)
