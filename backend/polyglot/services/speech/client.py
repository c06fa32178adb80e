"""
Speech Client - Gemini text-to-speech.

Asks the TTS model to read a text with a prebuilt voice, pulls the inline
PCM payload out of the response, decodes it and hands it to an AudioSink.
"""

import logging
from typing import Any, Optional, Union

from google import genai
from google.genai import types

from polyglot.config.settings import settings
from polyglot.config.constants import (
    DEFAULT_TTS_VOICE,
    TTS_CHANNELS,
    TTS_INSTRUCTION,
    TTS_SAMPLE_RATE,
)
from polyglot.services.audio.decoder import SampleBuffer, decode, to_playable_buffer
from polyglot.services.audio.playback import AudioSink, PlaybackHandle
from polyglot.services.exceptions import NoAudioDataError

logger = logging.getLogger(__name__)


def extract_audio_payload(response: Any) -> Optional[Union[str, bytes]]:
    """Return the first candidate's first inline data payload, if any."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    inline_data = getattr(parts[0], "inline_data", None)
    return getattr(inline_data, "data", None) or None


class SpeechClient:
    """
    Synthesizes speech for a text and starts playback.

    Does not enforce one-playback-at-a-time; callers gate on their own
    "speaking" flag.
    """

    def __init__(
        self,
        client: genai.Client,
        sink: Optional[AudioSink] = None,
        model: Optional[str] = None,
    ):
        self._client = client
        self.sink = sink
        self.model = model or settings.TTS_MODEL

    async def synthesize(self, text: str, voice: str = DEFAULT_TTS_VOICE) -> SampleBuffer:
        """Request audio for text and decode it (24 kHz mono)."""
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=f"{TTS_INSTRUCTION}{text}",
                config=types.GenerateContentConfig(
                    response_modalities=["AUDIO"],
                    speech_config=types.SpeechConfig(
                        voice_config=types.VoiceConfig(
                            prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice),
                        )
                    ),
                ),
            )

            payload = extract_audio_payload(response)
            if not payload:
                raise NoAudioDataError()

            buffer = to_playable_buffer(decode(payload), TTS_SAMPLE_RATE, TTS_CHANNELS)
        except Exception as e:
            logger.error(f"[Speech] TTS error: {e}")
            raise

        logger.info(f"[Speech] Synthesized {buffer.duration:.2f}s of audio with voice {voice}")
        return buffer

    async def speak(self, text: str, voice: str = DEFAULT_TTS_VOICE) -> PlaybackHandle:
        """Synthesize text and start playback on the configured sink."""
        if self.sink is None:
            raise RuntimeError("SpeechClient has no audio sink configured")
        buffer = await self.synthesize(text, voice)
        return await self.sink.play(buffer)
