"""
History Module

- HistoryStore: bounded newest-first translation log
- storage: file and Redis persistence adapters

Usage:
    from polyglot.services.history import get_history_store
"""

from polyglot.services.history.store import HistoryStore, get_history_store
from polyglot.services.history.storage import (
    HistoryStorage,
    JsonFileHistoryStorage,
    RedisHistoryStorage,
    create_history_storage,
)

__all__ = [
    "HistoryStore",
    "get_history_store",
    "HistoryStorage",
    "JsonFileHistoryStorage",
    "RedisHistoryStorage",
    "create_history_storage",
]
