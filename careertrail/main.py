"""
CareerTrail - Backend API
FastAPI + SQLAlchemy + JWT
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from careertrail import __version__
from careertrail.config import get_config
from careertrail.db import database
from careertrail.errors import ConflictError, NotConfiguredError, NotFoundError, UpstreamError
from careertrail.realtime import change_feed
from careertrail.routers import (
    ai,
    contacts,
    documents,
    folders,
    health,
    interviews,
    jobs,
    linkedin,
    metrics,
    preferences,
    profile,
    realtime,
)

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Bind the database and create tables on startup."""
    cfg = get_config()
    engine = database.current_engine()
    database.init_db(engine)
    change_feed.queue_size = cfg.realtime.queue_size
    logger.info(f"CareerTrail API v{__version__} started ({engine.url.get_backend_name()})")
    yield
    logger.info("Shutting down")


app = FastAPI(
    title="CareerTrail API",
    description="Job applications, contacts, interviews, documents and a real-time status board",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().cors.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Domain errors -> HTTP
# ---------------------------------------------------------------------------

def _error(status_code: int):
    async def handler(request: Request, exc: Exception):
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})
    return handler


app.add_exception_handler(NotFoundError, _error(404))
app.add_exception_handler(ConflictError, _error(409))
app.add_exception_handler(ValueError, _error(400))
app.add_exception_handler(NotConfiguredError, _error(503))
app.add_exception_handler(UpstreamError, _error(502))


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["Jobs"])
app.include_router(contacts.router, prefix="/api/contacts", tags=["Contacts"])
app.include_router(interviews.router, prefix="/api/interviews", tags=["Interviews"])
app.include_router(folders.router, prefix="/api/folders", tags=["Folders"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])
app.include_router(metrics.router, prefix="/api/metrics", tags=["Metrics"])
app.include_router(preferences.router, prefix="/api/preferences", tags=["Preferences"])
app.include_router(profile.router, prefix="/api/profile", tags=["Profile"])
app.include_router(linkedin.router, prefix="/api/linkedin", tags=["LinkedIn"])
app.include_router(ai.router, prefix="/api/ai", tags=["AI"])
app.include_router(realtime.router, tags=["Realtime"])


@app.get("/")
async def root():
    return {
        "name": "CareerTrail API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }
