"""
WebSocket Event Schemas

Pydantic models for type-safe WebSocket event handling. Client events are
parsed through ClientEvent, a union discriminated on "type".
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from polyglot.config.constants import DEFAULT_TTS_VOICE, MAX_SOURCE_TEXT_CHARS


# =============================================================================
# Client -> Server Events
# =============================================================================

class WebSocketEventBase(BaseModel):
    """Base model for all WebSocket events."""
    type: str


class SetSourceTextEvent(WebSocketEventBase):
    """Source text edited (clipped to the field limit)."""
    type: Literal["set_source_text"] = "set_source_text"
    text: str = ""


class SetSourceLangEvent(WebSocketEventBase):
    type: Literal["set_source_lang"] = "set_source_lang"
    code: str


class SetTargetLangEvent(WebSocketEventBase):
    type: Literal["set_target_lang"] = "set_target_lang"
    code: str


class SwapEvent(WebSocketEventBase):
    """Swap languages and texts (ignored while source is auto-detect)."""
    type: Literal["swap"] = "swap"


class CopyEvent(WebSocketEventBase):
    type: Literal["copy"] = "copy"


class SpeakEvent(WebSocketEventBase):
    """Read the current translation aloud."""
    type: Literal["speak"] = "speak"
    voice: str = DEFAULT_TTS_VOICE


class ToggleHistoryEvent(WebSocketEventBase):
    type: Literal["toggle_history"] = "toggle_history"


class DeleteHistoryEvent(WebSocketEventBase):
    type: Literal["delete_history"] = "delete_history"
    id: str


class ClearHistoryEvent(WebSocketEventBase):
    type: Literal["clear_history"] = "clear_history"


class PingEvent(WebSocketEventBase):
    """Simple ping for latency check."""
    type: Literal["ping"] = "ping"


ClientEvent = Annotated[
    Union[
        SetSourceTextEvent,
        SetSourceLangEvent,
        SetTargetLangEvent,
        SwapEvent,
        CopyEvent,
        SpeakEvent,
        ToggleHistoryEvent,
        DeleteHistoryEvent,
        ClearHistoryEvent,
        PingEvent,
    ],
    Field(discriminator="type"),
]

client_event_adapter: TypeAdapter[ClientEvent] = TypeAdapter(ClientEvent)


# =============================================================================
# REST Request Models
# =============================================================================

class TranslateRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=MAX_SOURCE_TEXT_CHARS)
    source_lang: str = "auto"
    target_lang: str


class SpeechRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=MAX_SOURCE_TEXT_CHARS)
    voice: Optional[str] = None
