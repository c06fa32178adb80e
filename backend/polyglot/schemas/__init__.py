"""
Schemas Package

Pydantic models for API and WebSocket events.
"""

from polyglot.schemas.websocket_events import (
    WebSocketEventBase,
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
    ClientEvent,
    client_event_adapter,
    TranslateRequest,
    SpeechRequest,
)

__all__ = [
    "WebSocketEventBase",
    "SetSourceTextEvent",
    "SetSourceLangEvent",
    "SetTargetLangEvent",
    "SwapEvent",
    "CopyEvent",
    "SpeakEvent",
    "ToggleHistoryEvent",
    "DeleteHistoryEvent",
    "ClearHistoryEvent",
    "PingEvent",
    "ClientEvent",
    "client_event_adapter",
    "TranslateRequest",
    "SpeechRequest",
]
