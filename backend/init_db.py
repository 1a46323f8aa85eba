"""Initialize database tables."""

import asyncio

from backend.app.core.config import settings
from backend.app.db.store import Connected, Unconfigured, close_store, open_store


async def init_db():
    """Create all database tables for the configured database."""
    # open_store creates any missing tables
    store = await open_store(settings)
    try:
        match store:
            case Connected():
                print("Database tables created successfully!")
            case Unconfigured(reason=reason):
                print(f"No database available ({reason}); nothing to create.")
    finally:
        await close_store(store)


if __name__ == "__main__":
    asyncio.run(init_db())
