"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Client creates a session (personality and seed are optional)
2. The session owns one GameLoop; a game is dealt immediately
3. During the game:
   - Client plays, draws or names colors through the loop
   - Pending continuations run when the client polls
4. Client may start a new game in the same session
5. Session ends on request or when it goes stale

PERSISTENCE RULES:
- In-memory only, nothing survives a restart
- Ending a session drops its game and all pending continuations
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable
import logging
import time
import uuid

from ..bots import get_personality
from ..config import EngineConfig
from .game_loop import GameLoop, LoopState

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # A game is in progress
    GAME_OVER = "game_over"  # Last game finished, a new one may be started
    ENDED = "ended"  # Session closed by the client
    ABANDONED = "abandoned"  # Removed as stale


@dataclass
class Session:
    """
    A game session: one opponent, one game at a time.
    """
    session_id: str
    loop: GameLoop
    created_at: float
    last_active: float

    ended: SessionState | None = None

    @property
    def state(self) -> SessionState:
        if self.ended is not None:
            return self.ended
        if self.loop.loop_state == LoopState.GAME_OVER:
            return SessionState.GAME_OVER
        return SessionState.ACTIVE

    @property
    def personality(self) -> str:
        return self.loop.config.personality

    def is_active(self) -> bool:
        """Check if session is still usable."""
        return self.ended is None

    def touch(self, now: float | None = None):
        self.last_active = time.time() if now is None else now


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their game loop
    - Track active sessions
    - Clean up ended and stale sessions
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.config = config or EngineConfig()
        self.clock = clock
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        personality: str | None = None,
        seed: int | None = None,
    ) -> Session:
        """
        Create a new game session and deal its first game.

        Args:
            personality: Opponent personality name (config default if None)
            seed: Random seed for a reproducible game

        Raises:
            ValueError: if the personality is unknown
        """
        overrides: dict[str, Any] = {}
        if personality is not None:
            get_personality(personality)
            overrides["personality"] = personality
        if seed is not None:
            overrides["seed"] = seed
        config = replace(self.config, **overrides) if overrides else self.config

        loop = GameLoop(config=config, clock=self.clock)
        loop.new_game()

        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            loop=loop,
            created_at=now,
            last_active=now,
        )
        self._sessions[session.session_id] = session
        logger.info("Created session %s (personality=%s)", session.session_id, config.personality)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "ended") -> bool:
        """
        End a session and remove it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False

        session.ended = SessionState.ENDED if reason == "ended" else SessionState.ABANDONED
        # Pending continuations must not fire for a dead session
        session.loop.scheduler.reset(session.loop.generation + 1)
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_idle_seconds: float = 3600, now: float | None = None) -> int:
        """
        Remove sessions idle for longer than max_idle_seconds.

        Returns the number removed.
        """
        current_time = time.time() if now is None else now
        stale = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active > max_idle_seconds
        ]

        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return len(stale)
