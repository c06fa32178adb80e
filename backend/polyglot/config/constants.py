"""
Application-wide constants for configuration and tuning.

This file centralizes the operational parameters of the translator so they
stay consistent across the controller, the clients and the API layer.

Note: Environment-dependent settings (API keys, model names, storage paths)
belong in settings.py.
"""

# ==============================================================================
# LANGUAGE DEFAULTS
# ==============================================================================

# Sentinel source language meaning "let the model detect it"
AUTO_DETECT_LANGUAGE: str = "auto"

# Label used in the prompt when the source language is auto-detected
AUTO_DETECT_LABEL: str = "automatically detected"

# Initial language selections for a new session
DEFAULT_SOURCE_LANGUAGE: str = AUTO_DETECT_LANGUAGE
DEFAULT_TARGET_LANGUAGE: str = "es"

# ==============================================================================
# TRANSLATION ORCHESTRATION
# ==============================================================================

# Quiescence window after the last input change before translating (seconds)
DEBOUNCE_DELAY_SEC: float = 0.8

# Maximum characters accepted in the source text field
MAX_SOURCE_TEXT_CHARS: int = 5000

# Source text must be longer than this to be recorded in history
HISTORY_MIN_SOURCE_CHARS: int = 3

# How long the "copied" confirmation stays raised (seconds)
COPY_CONFIRMATION_SEC: float = 2.0

# Shown in place of the translation when the request fails
TRANSLATION_ERROR_MESSAGE: str = "Error occurred during translation. Please try again."

# Sampling temperature for the translation model (low = faithful)
TRANSLATION_TEMPERATURE: float = 0.3

# ==============================================================================
# HISTORY
# ==============================================================================

# Maximum entries kept in the history log (oldest evicted first)
HISTORY_MAX_ENTRIES: int = 50

# ==============================================================================
# SPEECH SYNTHESIS
# ==============================================================================

# Raw PCM format returned by the TTS model
TTS_SAMPLE_RATE: int = 24000
TTS_CHANNELS: int = 1

# Bytes per sample (16-bit PCM = 2 bytes)
PCM_BYTES_PER_SAMPLE: int = 2

# Normalization divisor for signed 16-bit samples
PCM_INT16_SCALE: float = 32768.0

# Prebuilt voice used when the caller does not pick one
DEFAULT_TTS_VOICE: str = "Kore"

# Instruction prepended to the text sent to the TTS model
TTS_INSTRUCTION: str = "Read this text clearly: "
