"""
Bot Policy - Interface for opponent decision-making.

The game loop hands a policy the current state plus the actions the
rules allow, and gets back a BotDecision. After a wild card the loop
asks the same policy which color to name.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

from ..engine_core.cards import Color, CONCRETE_COLORS

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.action import Action


@dataclass
class BotDecision:
    """
    A chosen action and why it was chosen.

    optimal is None for policies that have no notion of a best move.
    """
    action: Action
    explanation: str = ""
    optimal: bool | None = None

    # Debug output only, never read by the engine
    evaluated_actions: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    How the opponent picks its moves.

    Implementations must pick from legal_actions and must not mutate
    the state they are given.
    """

    @abstractmethod
    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        """Pick one of legal_actions. Raises ValueError if there are none."""

    @abstractmethod
    def select_color(self, state: GameState) -> Color:
        """Name a concrete color for the wild card just played."""


def _require_actions(legal_actions: list[Action]):
    if not legal_actions:
        raise ValueError("No legal actions available")


class RandomPolicy(BotPolicy):
    """Uniformly random moves; a baseline for simulations."""

    def __init__(self, seed: int | None = None):
        self.rng = random.Random(seed)

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        _require_actions(legal_actions)
        return BotDecision(
            action=self.rng.choice(legal_actions),
            explanation="random pick",
            evaluated_actions=len(legal_actions),
        )

    def select_color(self, state: GameState) -> Color:
        return self.rng.choice(CONCRETE_COLORS)


class FirstLegalPolicy(BotPolicy):
    """
    Always the first legal action, and red after a wild.

    Fully deterministic, which makes it the policy of choice in tests.
    """

    def select_action(self, state: GameState, legal_actions: list[Action]) -> BotDecision:
        _require_actions(legal_actions)
        return BotDecision(action=legal_actions[0], explanation="first legal action", evaluated_actions=1)

    def select_color(self, state: GameState) -> Color:
        return CONCRETE_COLORS[0]
