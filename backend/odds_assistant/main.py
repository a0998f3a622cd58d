"""
backend/odds_assistant/main.py

Purpose:
    FastAPI application bootstrap: logging, middleware/router wiring, error
    envelopes and upstream client lifecycle.

Dependencies:
    - odds_assistant.config
    - odds_assistant.routers
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from odds_assistant.config import settings
from odds_assistant.errors import register_error_handlers
from odds_assistant.middleware.logging import StructuredLoggingMiddleware, setup_logging
from odds_assistant.providers.odds_api import odds_provider
from odds_assistant.providers.reddit import reddit_provider

logger = logging.getLogger("odds_assistant")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if not settings.account_id:
        logger.warning("no account: BITTE_KEY has no accountId, manifest account-id will be empty")
    if not settings.public_url:
        logger.warning("BITTE_CONFIG has no url, manifest servers entry will be empty")
    if not settings.odds_api_configured:
        logger.warning("ODD_KEY is not set, get-odds will answer 500")

    yield

    await odds_provider.aclose()
    await reddit_provider.aclose()


app = FastAPI(
    title=settings.PLUGIN_TITLE,
    description=settings.PLUGIN_DESCRIPTION,
    version=settings.PLUGIN_VERSION,
    lifespan=lifespan,
)

# CORS: the assistant host calls the tools cross-origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS.split(","),
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)

# Structured logging
app.add_middleware(StructuredLoggingMiddleware)

register_error_handlers(app)

# Routers
from odds_assistant.routers.plugin import router as plugin_router
from odds_assistant.routers.odds import router as odds_router
from odds_assistant.routers.tools import router as tools_router

app.include_router(plugin_router)
app.include_router(odds_router)
app.include_router(tools_router)


@app.get("/health")
async def health():
    """Health check -- reports which upstream credentials are configured."""
    return {
        "status": "healthy",
        "account_configured": settings.account_id is not None,
        "odds_api_configured": settings.odds_api_configured,
    }
