"""
Translation Stream Client - streamed Gemini translation.

Sends one translation prompt per call and hands every non-empty text
fragment to a callback, in arrival order. Fragment boundaries are chosen by
the provider and need not align with words; only the in-order concatenation
is meaningful.

Single best-effort attempt: no retry, no cache, no rate limiting. Provider
errors are logged and re-raised untouched.

Usage:
    from polyglot.services.translation import TranslationStreamClient

    client = TranslationStreamClient(get_genai_client())
    await client.stream_translate("Hello", "en", "es", on_fragment=print)
"""

import logging
from typing import Callable, Optional

from google import genai
from google.genai import types

from polyglot.config.settings import settings
from polyglot.config.constants import TRANSLATION_TEMPERATURE
from polyglot.services.translation.prompts import build_translation_prompt

logger = logging.getLogger(__name__)

FragmentCallback = Callable[[str], None]


class TranslationStreamClient:
    """Streams translations from the Gemini text model."""

    def __init__(
        self,
        client: genai.Client,
        model: Optional[str] = None,
        temperature: float = TRANSLATION_TEMPERATURE,
    ):
        self._client = client
        self.model = model or settings.TRANSLATION_MODEL
        self.temperature = temperature

    async def stream_translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        on_fragment: FragmentCallback,
    ) -> None:
        """
        Translate text, delivering fragments as they stream in.

        Args:
            text: Source text
            source_lang: Source language code, or "auto" to let the model detect it
            target_lang: Target language code
            on_fragment: Called synchronously with each non-empty fragment
        """
        prompt = build_translation_prompt(text, source_lang, target_lang)
        logger.debug(
            f"[TranslationStream] Requesting {source_lang}->{target_lang} "
            f"({len(text)} chars) from {self.model}"
        )

        fragment_count = 0
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(temperature=self.temperature),
            )
            async for chunk in stream:
                fragment = chunk.text
                if fragment:
                    fragment_count += 1
                    on_fragment(fragment)
        except Exception as e:
            logger.error(f"[TranslationStream] Translation error: {e}")
            raise

        logger.debug(f"[TranslationStream] Completed with {fragment_count} fragments")
