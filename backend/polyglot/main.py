"""
PolyGlot Translator Backend - Main Application

This is the entry point for the FastAPI application.
It handles:
- REST API endpoints (languages, history, one-shot translate / speech)
- WebSocket sessions for debounced streaming translation
- Loading the persisted translation history at startup
"""
from contextlib import asynccontextmanager
import logging
from datetime import datetime, UTC

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from polyglot import __version__
from polyglot.api import router as api_router
from polyglot.api.deps import get_history
from polyglot.api.websocket import router as ws_router
from polyglot.config.redis import close_redis
from polyglot.config.settings import settings
from polyglot.services.exceptions import HistoryStorageError, InvalidLanguageError
from polyglot.services.history.store import HistoryStore, get_history_store

# Configure logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # === STARTUP ===
    logger.info("🚀 Starting PolyGlot Translator Backend...")

    if not settings.GEMINI_API_KEY:
        logger.warning("⚠️ GEMINI_API_KEY not set - translation and speech are unavailable")

    # Load persisted history once
    entries = await get_history_store().load()
    logger.info(f"✅ History loaded ({len(entries)} entries)")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("🛑 Shutting down...")
    await close_redis()


app = FastAPI(
    title="PolyGlot Translator Backend",
    description="Streaming AI translation with speech playback and history",
    version=__version__,
    lifespan=lifespan
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=r"http://(localhost|127\.0\.0\.1)(:\d+)?",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidLanguageError)
async def invalid_language_handler(request: Request, exc: InvalidLanguageError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(HistoryStorageError)
async def history_storage_handler(request: Request, exc: HistoryStorageError):
    return JSONResponse(status_code=503, content={"detail": "History storage unavailable"})


# Include REST API routes
app.include_router(api_router, prefix="/api")

# Include WebSocket routes
app.include_router(ws_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "PolyGlot Translator",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health(store: HistoryStore = Depends(get_history)):
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "provider_configured": bool(settings.GEMINI_API_KEY),
        "history_entries": len(store),
    }


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "polyglot.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
