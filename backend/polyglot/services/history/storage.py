"""
History persistence adapters.

Each adapter holds one keyed record: the serialized history as JSON text.
The store decides what goes in it; adapters only read and write the text.

Adapters:
- JsonFileHistoryStorage: a single local JSON file (default)
- RedisHistoryStorage: a single Redis key
"""

import logging
import os
from typing import Awaitable, Callable, Optional, Protocol

import aiofiles
import aiofiles.os
import redis.asyncio as redis
from redis.exceptions import RedisError

from polyglot.config.settings import settings
from polyglot.config.redis import get_redis
from polyglot.services.exceptions import HistoryStorageError

logger = logging.getLogger(__name__)


class HistoryStorage(Protocol):
    async def read(self) -> Optional[str]:
        """Return the stored record, or None if nothing was saved yet."""
        ...

    async def write(self, payload: str) -> None:
        ...


class JsonFileHistoryStorage:
    """Stores the history record in a JSON file, replaced atomically on write."""

    def __init__(self, path: str):
        self.path = path

    async def read(self) -> Optional[str]:
        if not os.path.exists(self.path):
            return None
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                return await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise HistoryStorageError(f"Failed to read {self.path}: {e}") from e

    async def write(self, payload: str) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                await aiofiles.os.makedirs(directory, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError as e:
            raise HistoryStorageError(f"Failed to write {self.path}: {e}") from e


class RedisHistoryStorage:
    """Stores the history record under a single Redis key."""

    def __init__(
        self,
        key: str,
        redis_factory: Callable[[], Awaitable[redis.Redis]] = get_redis,
    ):
        self.key = key
        self._redis_factory = redis_factory

    async def read(self) -> Optional[str]:
        try:
            redis_client = await self._redis_factory()
            raw = await redis_client.get(self.key)
        except RedisError as e:
            raise HistoryStorageError(f"Failed to read key {self.key}: {e}") from e
        if isinstance(raw, bytes):
            return raw.decode("utf-8", errors="replace")
        return raw

    async def write(self, payload: str) -> None:
        try:
            redis_client = await self._redis_factory()
            await redis_client.set(self.key, payload)
        except RedisError as e:
            raise HistoryStorageError(f"Failed to write key {self.key}: {e}") from e


def create_history_storage() -> HistoryStorage:
    """Build the adapter selected by HISTORY_BACKEND."""
    backend = settings.HISTORY_BACKEND.lower()
    if backend == "redis":
        logger.info(f"[HistoryStorage] Using Redis key '{settings.HISTORY_KEY}'")
        return RedisHistoryStorage(settings.HISTORY_KEY)
    if backend == "file":
        logger.info(f"[HistoryStorage] Using file '{settings.HISTORY_FILE}'")
        return JsonFileHistoryStorage(settings.HISTORY_FILE)
    raise ValueError(f"Unknown HISTORY_BACKEND: {settings.HISTORY_BACKEND!r}")
