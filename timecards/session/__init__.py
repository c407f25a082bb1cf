"""
Session Module - Manages ephemeral game sessions.

A session represents one table of players:
- Created when the presentation layer connects
- Deals games from the shared event catalog
- Turns interaction intents into engine transitions
- Can restart with the same options or reset to setup

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import EmptyPoolError, GameSession, SessionManager, SessionState

__all__ = [
    "EmptyPoolError",
    "GameSession",
    "SessionManager",
    "SessionState",
]
