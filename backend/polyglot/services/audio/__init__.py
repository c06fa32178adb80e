"""
Audio Module

- decoder: base64 / raw PCM decoding into SampleBuffer, WAV encoding
- playback: AudioSink capability and its implementations

Usage:
    from polyglot.services.audio import decode, to_playable_buffer
    from polyglot.services.audio.playback import SoundDeviceSink
"""

from polyglot.services.audio.decoder import SampleBuffer, decode, to_playable_buffer, encode_wav
from polyglot.services.audio.playback import (
    AudioSink,
    PlaybackHandle,
    SoundDeviceSink,
    WebSocketAudioSink,
)

__all__ = [
    "SampleBuffer",
    "decode",
    "to_playable_buffer",
    "encode_wav",
    "AudioSink",
    "PlaybackHandle",
    "SoundDeviceSink",
    "WebSocketAudioSink",
]
