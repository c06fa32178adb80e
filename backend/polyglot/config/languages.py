"""
Static language catalog and TTS voice list.

The catalog is configuration data: codes are passed verbatim to the
translation prompt, so they only need to be meaningful to the model.
"""
from typing import Dict, List

from polyglot.config.constants import AUTO_DETECT_LANGUAGE
from polyglot.models.language import Language
from polyglot.services.exceptions import InvalidLanguageError

LANGUAGES: List[Language] = [
    Language(code=AUTO_DETECT_LANGUAGE, name="Detect Language", native="Detect Language"),
    Language(code="en", name="English", native="English"),
    Language(code="es", name="Spanish", native="Español"),
    Language(code="fr", name="French", native="Français"),
    Language(code="de", name="German", native="Deutsch"),
    Language(code="it", name="Italian", native="Italiano"),
    Language(code="pt", name="Portuguese", native="Português"),
    Language(code="nl", name="Dutch", native="Nederlands"),
    Language(code="pl", name="Polish", native="Polski"),
    Language(code="ro", name="Romanian", native="Română"),
    Language(code="ru", name="Russian", native="Русский"),
    Language(code="uk", name="Ukrainian", native="Українська"),
    Language(code="tr", name="Turkish", native="Türkçe"),
    Language(code="ar", name="Arabic", native="العربية"),
    Language(code="he", name="Hebrew", native="עברית"),
    Language(code="hi", name="Hindi", native="हिन्दी"),
    Language(code="zh", name="Chinese", native="中文"),
    Language(code="ja", name="Japanese", native="日本語"),
    Language(code="ko", name="Korean", native="한국어"),
    Language(code="vi", name="Vietnamese", native="Tiếng Việt"),
    Language(code="id", name="Indonesian", native="Bahasa Indonesia"),
]

LANGUAGES_BY_CODE: Dict[str, Language] = {lang.code: lang for lang in LANGUAGES}

# Prebuilt Gemini TTS voices offered to clients
TTS_VOICES: List[str] = ["Kore", "Puck", "Charon", "Fenrir", "Aoede", "Zephyr"]


def source_languages() -> List[Language]:
    return list(LANGUAGES)


def target_languages() -> List[Language]:
    """Languages valid as a translation target (no auto-detect)."""
    return [lang for lang in LANGUAGES if lang.code != AUTO_DETECT_LANGUAGE]


def validate_source(code: str) -> str:
    if code not in LANGUAGES_BY_CODE:
        raise InvalidLanguageError(f"Unknown source language: {code!r}")
    return code


def validate_target(code: str) -> str:
    if code == AUTO_DETECT_LANGUAGE:
        raise InvalidLanguageError("Auto-detect cannot be a target language")
    if code not in LANGUAGES_BY_CODE:
        raise InvalidLanguageError(f"Unknown target language: {code!r}")
    return code
