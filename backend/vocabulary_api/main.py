"""Vocabulary API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure → ApiResponse envelope
    - CORS configured from settings (not hardcoded)
    - Database and dictionary client created on startup, released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Dictionary client kept on app.state: one connection pool per process,
      handed to each request's WordService by get_word_service
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from vocabulary_api.api.error_handlers import register_error_handlers
from vocabulary_api.api.routes import health, words
from vocabulary_api.config import get_settings
from vocabulary_api.infrastructure.database import init_db
from vocabulary_api.infrastructure.dictionary_client import ResilientDictionaryClient
from vocabulary_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_url.startswith("sqlite"):
        await manager.create_schema()
    app.state.dictionary_client = ResilientDictionaryClient(
        settings.dictionary_api_base_url,
        max_retries=settings.dictionary_api_max_retries,
        base_delay_ms=settings.dictionary_api_base_delay_ms,
        max_delay_ms=settings.dictionary_api_max_delay_ms,
        timeout_seconds=settings.dictionary_api_timeout_seconds,
    )
    logger.info("Vocabulary API started")
    yield
    logger.info("Vocabulary API shutting down")
    await app.state.dictionary_client.close()
    await manager.dispose()


app = FastAPI(
    title="Vocabulary API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(words.router)

register_error_handlers(app)
