"""
Session Module - Manages ephemeral play sessions.

A session represents one player at one machine:
- Created when the player sits down
- Holds the engine and running totals
- Destroyed when the player leaves

Nothing is persisted.
"""

from .manager import SessionManager, SpinSession, SessionState

__all__ = [
    "SessionManager",
    "SpinSession",
    "SessionState",
]
