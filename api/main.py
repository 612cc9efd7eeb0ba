"""TaskDesk API: FastAPI entry point.

Registers middleware, routers, and lifecycle hooks.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import SessionTokenMiddleware
from core.config import settings
from core.database import close_db, init_db
from core.logging_setup import setup_logging
from core.observability.otel_setup import setup_otel

VERSION = "0.1.0"

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    setup_logging(level=settings.logging.level, log_dir=settings.logging.log_dir)
    setup_otel("taskdesk-api", endpoint=settings.otel_endpoint)
    await init_db()

    logger.info("TaskDesk API started")
    yield
    await close_db()
    logger.info("TaskDesk API shutting down")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="TaskDesk",
    description="Project and task management with session-based auth",
    version=VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Session token extraction
app.add_middleware(SessionTokenMiddleware)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

from auth.router import router as auth_router  # noqa: E402
from tasks.router import router as tasks_router  # noqa: E402

app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(tasks_router, prefix="/api/tasks", tags=["Tasks"])


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "healthy", "version": VERSION}


@app.get("/")
async def root():
    return {
        "name": "TaskDesk",
        "version": VERSION,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("TASKDESK_PORT", "8000")))
