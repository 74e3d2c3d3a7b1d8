"""
MockView - FastAPI Application.

Main FastAPI app that serves the interview API.
Includes background task for periodic session cleanup.
"""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from src.core.config import configure_logging
from src.api.routes import router as api_router, cleanup_stale_sessions, get_answer_repo, limiter

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)

CLEANUP_INTERVAL_SECONDS = 30 * 60
ANSWER_RETENTION_HOURS = 24 * 90

# Background cleanup task reference
_cleanup_task: asyncio.Task | None = None


async def background_cleanup_task():
    """
    Background task to clean up stale state periodically.

    Runs every 30 minutes to:
    - Remove live sessions older than SESSION_TIMEOUT_HOURS
    - Remove stored answer files past the retention window
    """
    logger.info("🧹 Background cleanup task started")

    while True:
        try:
            await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)

            memory_count = cleanup_stale_sessions()
            disk_count = get_answer_repo().cleanup_old_sessions(max_age_hours=ANSWER_RETENTION_HOURS)

            if memory_count > 0 or disk_count > 0:
                logger.info(
                    f"🧹 Cleanup complete: {memory_count} live sessions, "
                    f"{disk_count} answer files removed"
                )

        except asyncio.CancelledError:
            logger.info("🧹 Background cleanup task cancelled")
            break
        except Exception as e:
            logger.error(f"🧹 Cleanup task error: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: Start background cleanup task
    - Shutdown: Cancel cleanup task gracefully
    """
    global _cleanup_task

    logger.info("🚀 MockView API starting...")
    _cleanup_task = asyncio.create_task(background_cleanup_task())

    yield

    logger.info("👋 MockView API shutting down...")
    if _cleanup_task:
        _cleanup_task.cancel()
        try:
            await _cleanup_task
        except asyncio.CancelledError:
            pass


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="MockView",
        description="Mock interview question and feedback API",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    # Rate limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # CORS middleware for the browser client
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    @app.get("/")
    async def root():
        return {"message": "MockView API is running. See /api/docs."}

    return app


# Create app instance
app = create_app()
