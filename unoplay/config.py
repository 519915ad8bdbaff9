"""
Engine configuration.

Delays are presentation pacing, not correctness parameters: every
value here can be changed without affecting the rules.

Environment variables (all optional):
    UNOPLAY_DRAW_SETTLE_DELAY      seconds before an unplayable draw ends the turn
    UNOPLAY_OPPONENT_THINK_DELAY   seconds before the opponent acts
    UNOPLAY_OPPONENT_CHAIN_LIMIT   max consecutive opponent turns (skip chains)
    UNOPLAY_HISTORY_CAPACITY       recent plays kept per side
    UNOPLAY_PERSONALITY            default opponent personality
    UNOPLAY_SEED                   fixed seed for reproducible games
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Optional
import os


@dataclass
class EngineConfig:
    """
    Engine configuration

    Attributes:
        draw_settle_delay: pause after a draw that cannot be played
        opponent_think_delay: pause before the opponent takes its turn
        opponent_chain_limit: consecutive opponent turns before a forced hand-over
        history_capacity: recent plays kept per side
        personality: name of the opponent personality
        seed: random seed, None for a fresh game every time
    """
    draw_settle_delay: float = 1.0
    opponent_think_delay: float = 1.5
    opponent_chain_limit: int = 3
    history_capacity: int = 3
    personality: str = "classic"
    seed: Optional[int] = None

    def __post_init__(self):
        if self.draw_settle_delay < 0 or self.opponent_think_delay < 0:
            raise ValueError("Delays cannot be negative")
        if self.opponent_chain_limit < 1:
            raise ValueError("opponent_chain_limit must be at least 1")
        if self.history_capacity < 1:
            raise ValueError("history_capacity must be at least 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineConfig:
        """Build a config from UNOPLAY_* environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()

        seed = env.get("UNOPLAY_SEED")
        return cls(
            draw_settle_delay=float(env.get("UNOPLAY_DRAW_SETTLE_DELAY", defaults.draw_settle_delay)),
            opponent_think_delay=float(env.get("UNOPLAY_OPPONENT_THINK_DELAY", defaults.opponent_think_delay)),
            opponent_chain_limit=int(env.get("UNOPLAY_OPPONENT_CHAIN_LIMIT", defaults.opponent_chain_limit)),
            history_capacity=int(env.get("UNOPLAY_HISTORY_CAPACITY", defaults.history_capacity)),
            personality=env.get("UNOPLAY_PERSONALITY", defaults.personality),
            seed=int(seed) if seed not in (None, "") else None,
        )
