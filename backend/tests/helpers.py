import asyncio
import struct
from types import SimpleNamespace
from typing import Callable, List, Optional, Sequence, Union

from polyglot.services.audio.decoder import SampleBuffer
from polyglot.services.audio.playback import PlaybackHandle

Fragments = Union[Sequence[str], Callable[[str], Sequence[Optional[str]]]]


def pcm_bytes(samples: Sequence[int]) -> bytes:
    """Pack int16 samples as little-endian PCM."""
    return struct.pack(f"<{len(samples)}h", *samples)


def make_tts_response(data):
    """Shape of a google-genai response carrying inline audio (or none)."""
    if data is None:
        return SimpleNamespace(candidates=[])
    part = SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type="audio/L16;rate=24000"))
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeModels:
    """
    Stands in for client.aio.models.

    fragments is either a fixed list, or a callable receiving the prompt and
    returning the fragments for it.
    """

    def __init__(
        self,
        fragments: Fragments = (),
        error: Optional[Exception] = None,
        audio=None,
        tts_error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.fragments = fragments
        self.error = error
        self.audio = audio
        self.tts_error = tts_error
        self.delay = delay
        self.stream_calls: List[dict] = []
        self.generate_calls: List[dict] = []

    async def generate_content_stream(self, **kwargs):
        self.stream_calls.append(kwargs)
        if self.error is not None:
            raise self.error

        fragments = self.fragments
        if callable(fragments):
            fragments = fragments(kwargs["contents"])
        delay = self.delay

        async def stream():
            for fragment in fragments:
                if delay:
                    await asyncio.sleep(delay)
                yield SimpleNamespace(text=fragment)

        return stream()

    async def generate_content(self, **kwargs):
        self.generate_calls.append(kwargs)
        if self.tts_error is not None:
            raise self.tts_error
        return make_tts_response(self.audio)


def make_genai_client(**kwargs):
    models = FakeModels(**kwargs)
    return SimpleNamespace(aio=SimpleNamespace(models=models))


class MemoryHistoryStorage:
    """History storage keeping the record in memory."""

    def __init__(self, payload: Optional[str] = None):
        self.payload = payload
        self.reads = 0
        self.writes = 0

    async def read(self):
        self.reads += 1
        return self.payload

    async def write(self, payload: str):
        self.writes += 1
        self.payload = payload


class RecordingSink:
    """Audio sink that records buffers instead of playing them."""

    def __init__(self):
        self.buffers: List[SampleBuffer] = []

    async def play(self, buffer: SampleBuffer) -> PlaybackHandle:
        self.buffers.append(buffer)
        return PlaybackHandle(
            sample_rate=buffer.sample_rate,
            channels=buffer.number_of_channels,
            frames=buffer.length,
        )
