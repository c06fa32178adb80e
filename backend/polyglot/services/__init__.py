"""Business Logic Services.

This package contains the service modules that implement the core
logic of the PolyGlot translator.

Service Categories:
- Audio: PCM decoding, WAV encoding, playback sinks
- Translation: Streamed Gemini translation client
- Speech: Gemini text-to-speech client
- History: Bounded translation log and its persistence adapters
- Session: Debounced translation controller, WebSocket session orchestration

External integrations:
- gemini: shared google-genai client
"""
