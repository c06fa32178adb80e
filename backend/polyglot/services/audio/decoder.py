"""
Audio Decoder - raw PCM payload to playable sample buffers.

The TTS model returns headerless 16-bit little-endian PCM. This module turns
that payload into per-channel float samples in [-1.0, 1.0), and back into
WAV bytes for clients that play audio themselves.

Usage:
    from polyglot.services.audio.decoder import decode, to_playable_buffer

    buffer = to_playable_buffer(decode(payload), sample_rate=24000, channel_count=1)
"""

import base64
import io
import logging
import wave
from dataclasses import dataclass, field
from typing import List, Union

import numpy as np

from polyglot.config.constants import PCM_BYTES_PER_SAMPLE, PCM_INT16_SCALE

logger = logging.getLogger(__name__)


@dataclass
class SampleBuffer:
    """
    Decoded audio, one float32 sample array per channel.

    All channel arrays have the same length (the frame count).
    """

    sample_rate: int
    channels: List[np.ndarray] = field(default_factory=list)

    @property
    def number_of_channels(self) -> int:
        return len(self.channels)

    @property
    def length(self) -> int:
        """Frames per channel."""
        return len(self.channels[0]) if self.channels else 0

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.length / self.sample_rate if self.sample_rate else 0.0

    def get_channel_data(self, channel: int) -> np.ndarray:
        return self.channels[channel]

    def interleaved(self) -> np.ndarray:
        """Samples shaped (frames, channels), as audio devices expect."""
        if not self.channels:
            return np.zeros((0, 0), dtype=np.float32)
        return np.stack(self.channels, axis=1)


def decode(payload: Union[str, bytes]) -> bytes:
    """
    Reverse base64 text encoding into raw bytes.

    The google-genai SDK already decodes inline data to bytes, so a bytes
    payload is returned unchanged.
    """
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    return base64.b64decode(payload)


def to_playable_buffer(raw: bytes, sample_rate: int, channel_count: int) -> SampleBuffer:
    """
    Interpret raw bytes as interleaved int16 PCM and split it per channel.

    Each sample is divided by 32768. Trailing bytes that do not make up a
    full frame across all channels are dropped.
    """
    if channel_count < 1:
        raise ValueError(f"channel_count must be >= 1, got {channel_count}")

    frame_bytes = PCM_BYTES_PER_SAMPLE * channel_count
    frame_count = len(raw) // frame_bytes
    dropped = len(raw) - frame_count * frame_bytes
    if dropped:
        logger.debug(f"[AudioDecoder] Dropping {dropped} trailing bytes (partial frame)")

    if frame_count == 0:
        empty = [np.zeros(0, dtype=np.float32) for _ in range(channel_count)]
        return SampleBuffer(sample_rate=sample_rate, channels=empty)

    samples = np.frombuffer(raw, dtype="<i2", count=frame_count * channel_count)
    frames = (samples.astype(np.float32) / PCM_INT16_SCALE).reshape(frame_count, channel_count)

    return SampleBuffer(
        sample_rate=sample_rate,
        channels=[np.ascontiguousarray(frames[:, ch]) for ch in range(channel_count)],
    )


def encode_wav(buffer: SampleBuffer) -> bytes:
    """Re-encode a sample buffer as 16-bit PCM WAV bytes."""
    pcm = np.clip(
        np.round(buffer.interleaved() * PCM_INT16_SCALE), -32768, 32767
    ).astype("<i2")

    out = io.BytesIO()
    with wave.open(out, "wb") as wav:
        wav.setnchannels(max(buffer.number_of_channels, 1))
        wav.setsampwidth(PCM_BYTES_PER_SAMPLE)
        wav.setframerate(buffer.sample_rate)
        wav.writeframes(pcm.tobytes())
    return out.getvalue()
