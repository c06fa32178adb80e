"""
Redis connection used by the Redis-backed history storage.

The connection is created lazily, so deployments using the file backend
never open one.
"""
from typing import Optional

import redis.asyncio as redis

from polyglot.config.settings import settings

_redis: Optional[redis.Redis] = None


def redis_url() -> str:
    """Build the connection URL from settings (password optional)."""
    auth = f":{settings.REDIS_PASSWORD}@" if settings.REDIS_PASSWORD else ""
    return f"redis://{auth}{settings.REDIS_HOST}:{settings.REDIS_PORT}"


async def get_redis() -> redis.Redis:
    global _redis
    if _redis is None:
        # History is stored as JSON text, so responses are decoded to str
        _redis = redis.Redis.from_url(redis_url(), decode_responses=True)
    return _redis


async def close_redis():
    global _redis
    if _redis is not None:
        await _redis.aclose()
        _redis = None
