"""
Session management module.

- TranslationController: debounced streaming translation state machine
- TranslatorSession: WebSocket session wrapping one controller
"""
from .state import SessionState, TranslationStatus
from .controller import TranslationController
from .orchestrator import TranslatorSession

__all__ = ["SessionState", "TranslationStatus", "TranslationController", "TranslatorSession"]
