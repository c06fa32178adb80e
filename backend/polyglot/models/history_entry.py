"""
History Entry Model

One completed translation exchange. Serialized with camelCase keys, which is
the shape persisted to storage and returned to clients.
"""
import time
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HistoryEntry(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    source_text: str
    translated_text: str
    source_lang: str
    target_lang: str
    timestamp: int  # epoch milliseconds

    @classmethod
    def create(
        cls,
        source_text: str,
        translated_text: str,
        source_lang: str,
        target_lang: str,
        timestamp: Optional[int] = None,
    ) -> "HistoryEntry":
        """Build a new entry with a fresh id, stamped with the current time."""
        return cls(
            id=uuid.uuid4().hex,
            source_text=source_text,
            translated_text=translated_text,
            source_lang=source_lang,
            target_lang=target_lang,
            timestamp=timestamp if timestamp is not None else int(time.time() * 1000),
        )
