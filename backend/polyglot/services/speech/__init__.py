from polyglot.services.speech.client import SpeechClient, extract_audio_payload

__all__ = ["SpeechClient", "extract_audio_payload"]
