from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict

from polyglot.config.constants import DEFAULT_SOURCE_LANGUAGE, DEFAULT_TARGET_LANGUAGE


class TranslationStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    STREAMING = "streaming"
    DONE = "done"
    FAILED = "failed"


@dataclass
class SessionState:
    """Transient per-session state. Never persisted."""

    source_text: str = ""
    translated_text: str = ""
    source_lang: str = DEFAULT_SOURCE_LANGUAGE
    target_lang: str = DEFAULT_TARGET_LANGUAGE
    status: TranslationStatus = TranslationStatus.IDLE
    is_translating: bool = False
    is_speaking: bool = False
    show_history: bool = False
    copied: bool = False

    def snapshot(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data
