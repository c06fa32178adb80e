"""
Audio output capability.

Speech playback needs three things from the platform: create a buffer of
given channels/frames/rate, fill it per channel and start it. AudioSink
is that capability; the speech client never talks to a device directly.

Implementations:
- SoundDeviceSink: plays on the local output device (scripts, kiosks)
- WebSocketAudioSink: ships a WAV frame to a browser, which plays it
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from fastapi import WebSocket

from polyglot.services.audio.decoder import SampleBuffer, encode_wav

logger = logging.getLogger(__name__)


@dataclass
class PlaybackHandle:
    """Handle to a started playback."""

    sample_rate: int
    channels: int
    frames: int
    _stop: Optional[Callable[[], None]] = None

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate if self.sample_rate else 0.0

    def stop(self) -> None:
        if self._stop is not None:
            self._stop()


class AudioSink(Protocol):
    async def play(self, buffer: SampleBuffer) -> PlaybackHandle:
        ...


class SoundDeviceSink:
    """Plays buffers on the default output device via sounddevice."""

    async def play(self, buffer: SampleBuffer) -> PlaybackHandle:
        import sounddevice as sd

        # sd.play returns immediately; playback continues in the background
        sd.play(buffer.interleaved(), samplerate=buffer.sample_rate)
        logger.info(
            f"[Playback] Started local playback "
            f"({buffer.duration:.2f}s, {buffer.number_of_channels}ch @ {buffer.sample_rate}Hz)"
        )
        return PlaybackHandle(
            sample_rate=buffer.sample_rate,
            channels=buffer.number_of_channels,
            frames=buffer.length,
            _stop=sd.stop,
        )


class WebSocketAudioSink:
    """Sends buffers to a connected browser as binary WAV frames."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    async def play(self, buffer: SampleBuffer) -> PlaybackHandle:
        data = encode_wav(buffer)
        await self.websocket.send_bytes(data)
        logger.info(f"[Playback] Sent {len(data)} bytes of WAV audio to client")
        return PlaybackHandle(
            sample_rate=buffer.sample_rate,
            channels=buffer.number_of_channels,
            frames=buffer.length,
        )
