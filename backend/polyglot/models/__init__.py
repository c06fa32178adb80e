"""
Data Models Package

Immutable pydantic models shared by the services and the API layer.
"""

from .language import Language
from .history_entry import HistoryEntry

__all__ = ["Language", "HistoryEntry"]
