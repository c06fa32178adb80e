"""
Gemini client factory.

One google-genai client is shared by the translation and speech clients.
It is created lazily so the app can start (and serve history) without a key.
"""

import logging
from typing import Optional

from google import genai

from polyglot.config.settings import settings

logger = logging.getLogger(__name__)

_client: Optional[genai.Client] = None


def get_genai_client() -> genai.Client:
    """Get or create the global google-genai client."""
    global _client
    if _client is None:
        if not settings.GEMINI_API_KEY:
            raise RuntimeError(
                "GEMINI_API_KEY is not set. Please update backend/.env accordingly."
            )
        _client = genai.Client(api_key=settings.GEMINI_API_KEY)
        logger.info("[Gemini] Client initialized")
    return _client
