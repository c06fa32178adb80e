"""
Service Exceptions

Custom exceptions for translator errors. Provider (network / Gemini) errors
are not wrapped: they propagate untouched to the orchestration boundary.
"""


class PolyglotError(Exception):
    """Base exception for translator errors"""
    pass


class InvalidLanguageError(PolyglotError):
    """Raised when a language code is unknown or not valid in its position"""
    pass


class SpeechError(PolyglotError):
    """Base exception for speech synthesis errors"""
    pass


class NoAudioDataError(SpeechError):
    """Raised when the TTS response carries no inline audio payload"""

    def __init__(self, message: str = "No audio data received"):
        super().__init__(message)


class HistoryStorageError(PolyglotError):
    """Raised when the history persistence backend cannot be read or written"""
    pass
