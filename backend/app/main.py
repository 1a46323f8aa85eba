"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api import auth, functions, ideas, websocket
from backend.app.core.config import settings
from backend.app.core.exception_handlers import register_exception_handlers
from backend.app.db.store import StoreHandle, close_store, describe_store, get_store, open_store

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: open the store handle once for the whole process
    app.state.store = await open_store(settings)
    logger.info(f"[STARTUP] Store is {describe_store(app.state.store)}, upvote mode: {settings.upvote_mode}")

    yield

    # Shutdown: Close database connections
    await close_store(app.state.store)
    logger.info("[SHUTDOWN] Cleaned up resources")


app = FastAPI(
    title="Idea Board API",
    description="Share short ideas and upvote them in real time",
    version="1.0.0",
    lifespan=lifespan,
)

# Register custom exception handlers
register_exception_handlers(app)

# CORS middleware for frontend
logger.debug(f"[CORS] Allowed origins: {settings.cors_origins_list}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,  # Load from .env file
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router, prefix="/api")
app.include_router(ideas.router, prefix="/api")
app.include_router(functions.router, prefix="/api")
app.include_router(websocket.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Idea Board API",
        "version": "1.0.0",
        "description": "Share short ideas and upvote them in real time",
    }


@app.get("/health")
async def health_check(store: StoreHandle = Depends(get_store)):
    """Health check endpoint."""
    return {"status": "healthy", "store": describe_store(store)}
