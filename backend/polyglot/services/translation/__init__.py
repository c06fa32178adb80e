"""
Translation Module

- TranslationStreamClient: streamed Gemini translation with per-fragment callbacks
- prompts: the translation instruction template

Usage:
    from polyglot.services.translation import TranslationStreamClient
"""

from polyglot.services.translation.prompts import build_translation_prompt
from polyglot.services.translation.stream_client import (
    TranslationStreamClient,
    FragmentCallback,
)

__all__ = [
    "TranslationStreamClient",
    "FragmentCallback",
    "build_translation_prompt",
]
