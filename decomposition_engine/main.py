"""Decomposition Engine API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers keep HTTP failures in the tool envelope shape
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: ExMA import fan-out < 10)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from decomposition_engine.infrastructure.observability import setup_logging
from decomposition_engine.config import get_settings
from decomposition_engine.api.error_handlers import register_error_handlers
from decomposition_engine.api.routes import decomposition, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Decomposition Engine API started")
    yield
    logger.info("Decomposition Engine API shutting down")


app = FastAPI(
    title="Decomposition Engine API", version="0.7.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(decomposition.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("decomposition_engine.main:app", host="0.0.0.0", port=8000)
