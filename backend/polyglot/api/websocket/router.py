"""
WebSocket Router - Interactive Translator Endpoint

This is the thin routing layer that delegates to TranslatorSession
for all WebSocket session management.
"""
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket
from google import genai

from polyglot.api.deps import get_history, get_ws_provider_client
from polyglot.services.history.store import HistoryStore
from polyglot.services.session import TranslatorSession

router = APIRouter()


@router.websocket("/ws")
async def ws_endpoint(
    websocket: WebSocket,
    store: HistoryStore = Depends(get_history),
    client: Optional[genai.Client] = Depends(get_ws_provider_client),
):
    """
    WebSocket endpoint for the interactive translator.

    Message Types (JSON, client -> server):
        - set_source_text / set_source_lang / set_target_lang: edit input,
          re-arms the debounce, then a streamed translation
        - swap: exchange languages and texts (ignored for auto-detect)
        - copy: confirm copy of the translation
        - speak: read the translation aloud
        - toggle_history / delete_history / clear_history
        - ping

    Server -> client:
        - connected, state, history, copied, pong, error (JSON)
        - WAV audio (binary) in response to speak
    """
    if client is None:
        return

    session = TranslatorSession(websocket=websocket, history_store=store, genai_client=client)
    await session.run()
