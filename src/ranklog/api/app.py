"""FastAPI application factory.

API layer:
- Validates inputs, calls the record store, query engine and aggregators
- Translates domain errors into HTTP responses
- Opens the database handle at startup and closes it at shutdown
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ranklog.config import Settings, configure_logging, get_settings
from ranklog.core.errors import StoreUnavailable, ValidationError
from ranklog.db.session import Database
from ranklog.records.store import RecordStore
from ranklog.summarizers.base import SummarizerBase
from ranklog.summarizers.cache import SummaryCache
from ranklog.summarizers.chat import ChatCompletionSummarizer

logger = logging.getLogger(__name__)


def get_record_store(request: Request) -> RecordStore:
    """Dependency returning the application's record store."""
    return request.app.state.record_store


def get_summary_cache(request: Request) -> SummaryCache:
    """Dependency returning the application's summary cache."""
    return request.app.state.summary_cache


def get_app_settings(request: Request) -> Settings:
    """Dependency returning the settings the app was built with."""
    return request.app.state.settings


def validation_http_error(error: ValidationError) -> HTTPException:
    """422 carrying the offending field name."""
    return HTTPException(
        status_code=422, detail={"field": error.field, "message": error.message}
    )


def build_summarizer(settings: Settings) -> SummarizerBase:
    """Build the chat-completions summarizer from settings."""
    if not settings.summarizer_api_key:
        logger.info("No summarizer API key set; champion summaries use the fallback")
    return ChatCompletionSummarizer(
        api_key=settings.summarizer_api_key,
        base_url=settings.summarizer_base_url,
        model=settings.summarizer_model,
        timeout_s=settings.summarizer_timeout_s,
    )


def _attach(app: FastAPI, database: Database, summarizer: SummarizerBase) -> None:
    app.state.database = database
    app.state.record_store = RecordStore(database)
    app.state.summary_cache = SummaryCache(database, summarizer)


def create_app(
    database: Database | None = None,
    summarizer: SummarizerBase | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create FastAPI application.

    Args:
        database: Optional open database handle. When omitted, one is opened
            from settings at startup and closed at shutdown.
        summarizer: Optional summarizer. Defaults to the chat-completions
            summarizer configured from settings.
        settings: Optional settings. Defaults to environment settings.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    summarizer = summarizer or build_summarizer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.database is None
        if owned:
            _attach(app, Database.open(settings.database_url), summarizer)
        try:
            yield
        finally:
            if owned:
                app.state.database.close()
                app.state.database = None

    app = FastAPI(
        title="Ranklog API",
        description="Per-match performance log and derived statistics",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = None
    if database is not None:
        _attach(app, database, summarizer)

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
        logger.error(f"Store unavailable during {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=503, content={"detail": "Store unavailable"})

    # Include routes
    from ranklog.api.routes import games, stats, summaries

    app.include_router(games.router, prefix="/api")
    app.include_router(stats.router, prefix="/api")
    app.include_router(summaries.router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    return app
