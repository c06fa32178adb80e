"""
Tests for the history persistence adapters
"""
import os

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from polyglot.config.settings import settings
from polyglot.services.exceptions import HistoryStorageError
from polyglot.services.history.storage import (
    JsonFileHistoryStorage,
    RedisHistoryStorage,
    create_history_storage,
)


class FakeRedis:
    """Minimal async get/set stand-in for redis.asyncio.Redis."""

    def __init__(self, error=None):
        self.data = {}
        self.error = error

    async def get(self, key):
        if self.error:
            raise self.error
        return self.data.get(key)

    async def set(self, key, value):
        if self.error:
            raise self.error
        self.data[key] = value


@pytest.mark.asyncio
async def test_file_storage_missing_file(tmp_path):
    storage = JsonFileHistoryStorage(str(tmp_path / "history.json"))
    assert await storage.read() is None


@pytest.mark.asyncio
async def test_file_storage_round_trip_creates_directory(tmp_path):
    path = tmp_path / "nested" / "history.json"
    storage = JsonFileHistoryStorage(str(path))

    await storage.write('[{"id": "a"}]')

    assert await storage.read() == '[{"id": "a"}]'
    assert not os.path.exists(f"{path}.tmp")


@pytest.mark.asyncio
async def test_file_storage_overwrites(tmp_path):
    storage = JsonFileHistoryStorage(str(tmp_path / "history.json"))

    await storage.write("[1]")
    await storage.write("[]")

    assert await storage.read() == "[]"


@pytest.mark.asyncio
async def test_file_storage_unwritable_path(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    storage = JsonFileHistoryStorage(str(blocker / "history.json"))

    with pytest.raises(HistoryStorageError):
        await storage.write("[]")


@pytest.mark.asyncio
async def test_redis_storage_round_trip():
    fake = FakeRedis()

    async def factory():
        return fake

    storage = RedisHistoryStorage("history-key", redis_factory=factory)

    assert await storage.read() is None
    await storage.write("[]")
    assert fake.data == {"history-key": "[]"}
    assert await storage.read() == "[]"


@pytest.mark.asyncio
async def test_redis_storage_decodes_bytes():
    fake = FakeRedis()
    fake.data["k"] = "[]".encode("utf-8")

    async def factory():
        return fake

    assert await RedisHistoryStorage("k", redis_factory=factory).read() == "[]"


@pytest.mark.asyncio
async def test_redis_errors_become_storage_errors():
    fake = FakeRedis(error=RedisConnectionError("refused"))

    async def factory():
        return fake

    storage = RedisHistoryStorage("k", redis_factory=factory)

    with pytest.raises(HistoryStorageError):
        await storage.read()
    with pytest.raises(HistoryStorageError):
        await storage.write("[]")


def test_backend_selection(monkeypatch):
    monkeypatch.setattr(settings, "HISTORY_BACKEND", "redis")
    assert isinstance(create_history_storage(), RedisHistoryStorage)

    monkeypatch.setattr(settings, "HISTORY_BACKEND", "file")
    assert isinstance(create_history_storage(), JsonFileHistoryStorage)

    monkeypatch.setattr(settings, "HISTORY_BACKEND", "sqlite")
    with pytest.raises(ValueError):
        create_history_storage()
