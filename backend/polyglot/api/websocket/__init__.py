"""
WebSocket API module.

Provides the WebSocket router for interactive translator sessions.
"""
from .router import router

__all__ = ["router"]
