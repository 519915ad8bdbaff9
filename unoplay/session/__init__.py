"""
Session Module - Drives games in real time.

A session represents one player at the table:
- Created when a client starts playing
- Owns a GameLoop, which owns the current game
- Runs the opponent through delayed continuations
- Destroyed on request or when idle too long

Sessions are in-memory only.
"""

from .scheduler import Scheduler, OperationKind, Continuation
from .game_loop import GameLoop, LoopState, TurnResult
from .manager import SessionManager, Session, SessionState

__all__ = [
    "Scheduler",
    "OperationKind",
    "Continuation",
    "GameLoop",
    "LoopState",
    "TurnResult",
    "SessionManager",
    "Session",
    "SessionState",
]
