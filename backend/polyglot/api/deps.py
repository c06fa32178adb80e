import logging
from typing import Optional

from fastapi import Depends, HTTPException, WebSocket, status
from google import genai

from polyglot.services.gemini import get_genai_client
from polyglot.services.history.store import HistoryStore, get_history_store
from polyglot.services.speech.client import SpeechClient
from polyglot.services.translation.stream_client import TranslationStreamClient

logger = logging.getLogger(__name__)


def get_provider_client() -> genai.Client:
    """
    Dependency for the shared Gemini client.
    Responds 503 when no API key is configured.
    """
    try:
        return get_genai_client()
    except RuntimeError as e:
        logger.error(f"[API] Gemini client unavailable: {e}")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def get_history() -> HistoryStore:
    return get_history_store()


def get_translation_client(
    client: genai.Client = Depends(get_provider_client),
) -> TranslationStreamClient:
    return TranslationStreamClient(client)


def get_speech_client(
    client: genai.Client = Depends(get_provider_client),
) -> SpeechClient:
    # REST callers receive the audio themselves, so no playback sink
    return SpeechClient(client)


async def get_ws_provider_client(websocket: WebSocket) -> Optional[genai.Client]:
    """
    WebSocket dependency for the shared Gemini client.
    If no API key is configured, closes the connection with code 1011.
    """
    try:
        return get_genai_client()
    except RuntimeError as e:
        logger.error(f"[WebSocket] Gemini client unavailable: {e}")
        await websocket.close(code=1011, reason="Translation provider not configured")
        return None
