"""
GigCampus Rating API - Main Application Entry Point

This module initializes the FastAPI application with:
- Rating store initialization (SQL tables when rating_store=sql)
- Error handlers translating service errors into HTTP responses
- CORS middleware for frontend communication
- Prometheus metrics
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup/shutdown)
    ├── Exception Handlers (422 / 415 / 502 / 503)
    ├── CORS Middleware
    ├── Prometheus Middleware (+ GET /metrics)
    └── API Router (/api)
        ├── /resume  - Resume analysis and upload
        └── /ratings - Per-user rating ledger
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gigcampus import __version__
from gigcampus.api import api_router
from gigcampus.config import get_settings
from gigcampus.database import init_db
from gigcampus.exceptions import (
    ExtractionUnavailableError,
    GigCampusError,
    InvalidInputError,
    PersistenceError,
    UnsupportedDocumentError,
)
from gigcampus.middleware import setup_metrics
from gigcampus.services.rating_repository import RedisRatingRepository, get_rating_repository

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Create the user_ratings table when the SQL store is selected

    Shutdown:
        1. Close the Redis connection when the Redis store is selected

    Yields:
        Control to the application during its runtime
    """
    if settings.rating_store == "sql":
        await init_db()
    logger.info(f"GigCampus API started with rating_store={settings.rating_store}")
    yield
    repository = get_rating_repository()
    if isinstance(repository, RedisRatingRepository):
        await repository.close()


app = FastAPI(
    title="GigCampus Rating API",
    description="Resume scoring and skill rating ledger",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_metrics(app)


def _status_for(exc: GigCampusError) -> int:
    if isinstance(exc, UnsupportedDocumentError):
        return status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    if isinstance(exc, InvalidInputError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, ExtractionUnavailableError):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, PersistenceError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@app.exception_handler(GigCampusError)
async def gigcampus_error_handler(request: Request, exc: GigCampusError):
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": __version__}
