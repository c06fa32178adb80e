"""
History Store - bounded, newest-first log of completed translations.

The store is the only thing that mutates history entries. Every mutation
rewrites the whole persisted record before returning, under a lock, so
callers never observe a half-applied change. The record is read once, on
load(); missing or malformed data starts an empty history.

Usage:
    from polyglot.services.history import get_history_store

    store = get_history_store()
    await store.load()
    await store.insert(HistoryEntry.create("Hello", "Hola", "en", "es"))
"""

import asyncio
import logging
from typing import Callable, List, Optional

from pydantic import TypeAdapter, ValidationError

from polyglot.config.constants import HISTORY_MAX_ENTRIES
from polyglot.models.history_entry import HistoryEntry
from polyglot.services.exceptions import HistoryStorageError
from polyglot.services.history.storage import HistoryStorage, create_history_storage

logger = logging.getLogger(__name__)

HistoryListener = Callable[[List[HistoryEntry]], None]

_entries_adapter = TypeAdapter(List[HistoryEntry])


class HistoryStore:
    """
    Ordered history log persisted through a HistoryStorage adapter.

    Attributes:
        max_entries: Retention bound; the oldest entries are evicted beyond it
    """

    def __init__(self, storage: HistoryStorage, max_entries: int = HISTORY_MAX_ENTRIES):
        self.storage = storage
        self.max_entries = max_entries
        self._entries: List[HistoryEntry] = []
        self._loaded = False
        self._lock = asyncio.Lock()
        self._listeners: List[HistoryListener] = []

    @property
    def entries(self) -> List[HistoryEntry]:
        """Snapshot of the entries, newest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    async def load(self) -> List[HistoryEntry]:
        """Read the persisted record. Only the first call touches storage."""
        async with self._lock:
            if self._loaded:
                return self.entries
            self._loaded = True

            try:
                raw = await self.storage.read()
            except HistoryStorageError as e:
                logger.warning(f"[HistoryStore] Could not read history, starting empty: {e}")
                return self.entries

            if not raw:
                return self.entries

            try:
                entries = _entries_adapter.validate_json(raw)
            except ValidationError as e:
                logger.warning(
                    f"[HistoryStore] Ignoring malformed history record "
                    f"({e.error_count()} errors)"
                )
                return self.entries

            self._entries = entries[: self.max_entries]
            logger.info(f"[HistoryStore] Loaded {len(self._entries)} entries")
            return self.entries

    async def insert(self, entry: HistoryEntry) -> None:
        """Prepend entry, keeping at most max_entries."""
        async with self._lock:
            await self._commit([entry, *self._entries][: self.max_entries])

    async def remove_by_id(self, entry_id: str) -> bool:
        """Remove the entry with entry_id. Returns False (and writes nothing) if absent."""
        async with self._lock:
            remaining = [e for e in self._entries if e.id != entry_id]
            if len(remaining) == len(self._entries):
                return False
            await self._commit(remaining)
            return True

    async def clear(self) -> None:
        async with self._lock:
            await self._commit([])

    def subscribe(self, listener: HistoryListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def to_json(self, entries: Optional[List[HistoryEntry]] = None) -> str:
        if entries is None:
            entries = self._entries
        return _entries_adapter.dump_json(entries, by_alias=True).decode("utf-8")

    async def _commit(self, entries: List[HistoryEntry]) -> None:
        """Persist entries, then make them current. A failed write changes nothing."""
        try:
            await self.storage.write(self.to_json(entries))
        except HistoryStorageError as e:
            logger.error(f"[HistoryStore] Failed to save history: {e}")
            raise
        self._entries = entries
        self._notify()

    def _notify(self) -> None:
        snapshot = self.entries
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"[HistoryStore] Listener error: {e}")


# Global singleton instance
_history_store: Optional[HistoryStore] = None


def get_history_store() -> HistoryStore:
    """Get or create the global HistoryStore instance."""
    global _history_store
    if _history_store is None:
        _history_store = HistoryStore(create_history_storage())
    return _history_store
