"""
One-shot Translation & Speech API

Implements:
- Streamed translation (no debounce, no history entry)
- Speech synthesis returned as WAV audio
"""
import asyncio
import logging
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import StreamingResponse

from polyglot.api.deps import get_speech_client, get_translation_client
from polyglot.config.constants import DEFAULT_TTS_VOICE
from polyglot.config.languages import TTS_VOICES, validate_source, validate_target
from polyglot.schemas.websocket_events import SpeechRequest, TranslateRequest
from polyglot.services.audio.decoder import encode_wav
from polyglot.services.speech.client import SpeechClient
from polyglot.services.translation.stream_client import TranslationStreamClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/translate")
async def translate(
    request: TranslateRequest,
    client: TranslationStreamClient = Depends(get_translation_client),
):
    """
    Stream a translation as plain text.

    Responds 502 if the provider fails before the first fragment; a failure
    after that truncates the stream.
    """
    validate_source(request.source_lang)
    validate_target(request.target_lang)

    queue: "asyncio.Queue[Optional[str]]" = asyncio.Queue()

    async def produce():
        try:
            await client.stream_translate(
                request.text, request.source_lang, request.target_lang, queue.put_nowait
            )
        finally:
            queue.put_nowait(None)

    producer = asyncio.create_task(produce())

    first = await queue.get()
    if first is None:
        try:
            await producer
        except Exception as e:
            raise HTTPException(status_code=502, detail=f"Translation failed: {e}")
        return Response(content="", media_type="text/plain; charset=utf-8")

    async def body() -> AsyncIterator[str]:
        try:
            yield first
            while (fragment := await queue.get()) is not None:
                yield fragment
            await producer
        finally:
            if not producer.done():
                logger.info("[Translate] Client went away, stopping translation stream")
                producer.cancel()
            elif not producer.cancelled():
                # Errors were already logged by the stream client
                producer.exception()

    return StreamingResponse(body(), media_type="text/plain; charset=utf-8")


@router.post("/speech")
async def speech(
    request: SpeechRequest,
    client: SpeechClient = Depends(get_speech_client),
):
    """Synthesize speech for a text and return it as audio/wav."""
    voice = request.voice or DEFAULT_TTS_VOICE
    if voice not in TTS_VOICES:
        raise HTTPException(status_code=400, detail=f"Unknown voice: {voice!r}")

    try:
        buffer = await client.synthesize(request.text, voice)
    except Exception as e:
        raise HTTPException(status_code=502, detail=f"Speech synthesis failed: {e}")

    return Response(content=encode_wav(buffer), media_type="audio/wav")
