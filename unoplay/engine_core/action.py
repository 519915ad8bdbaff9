"""
Action System - Actions, payloads, results and rule violations.

Actions represent:
1. Side actions (play, draw, select color)
2. System actions (end turn)

All state changes flow through actions applied by the reducer.
A rejected action is a result, never an exception.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from .cards import Card, Color

if TYPE_CHECKING:
    from .state import GameState, Side


class ActionType(Enum):
    """Types of actions in the system."""
    PLAY = "play"
    DRAW = "draw"
    SELECT_COLOR = "select_color"

    # System actions
    END_TURN = "end_turn"


class ViolationCode(str, Enum):
    """Why an action was rejected."""
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    CARD_NOT_LEGAL = "CARD_NOT_LEGAL"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    WRONG_STATE = "WRONG_STATE"
    OPERATION_PENDING = "OPERATION_PENDING"
    INVALID_COLOR = "INVALID_COLOR"


@dataclass(frozen=True)
class RuleViolation:
    """A rejected request: the state is left untouched."""
    code: ViolationCode
    reason: str


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    Validation happens in the reducer.
    """
    side: Side | None = None
    card_id: str | None = None
    color: Color | None = None


@dataclass
class Action:
    """
    A complete action to be applied to the game state.

    Built through the factories below rather than by hand.
    """
    action_type: ActionType
    payload: ActionPayload

    @classmethod
    def play(cls, side: Side, card_id: str) -> Action:
        """Factory for play action."""
        return cls(
            action_type=ActionType.PLAY,
            payload=ActionPayload(side=side, card_id=card_id),
        )

    @classmethod
    def draw(cls, side: Side) -> Action:
        """Factory for draw action."""
        return cls(
            action_type=ActionType.DRAW,
            payload=ActionPayload(side=side),
        )

    @classmethod
    def select_color(cls, side: Side, color: Color) -> Action:
        """Factory for color choice after a wild card."""
        return cls(
            action_type=ActionType.SELECT_COLOR,
            payload=ActionPayload(side=side, color=color),
        )

    @classmethod
    def end_turn(cls) -> Action:
        """Factory for handing control to the other side."""
        return cls(action_type=ActionType.END_TURN, payload=ActionPayload())

    def describe(self) -> str:
        parts = [self.action_type.value]
        if self.payload.side is not None:
            parts.insert(0, self.payload.side.value)
        if self.payload.card_id:
            parts.append(self.payload.card_id)
        if self.payload.color is not None:
            parts.append(self.payload.color.value)
        return " ".join(parts)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action succeeded
    - New state (if succeeded) or the violation (if not)
    - What happened, for the display message and logs
    - Turn flow hints for the game loop
    """
    success: bool
    new_state: GameState | None = None
    error: str | None = None
    error_code: ViolationCode | None = None

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    # Cards that entered the acting side's hand (draw actions)
    drawn_cards: list[Card] = field(default_factory=list)

    # Turn flow: the acting side goes again / control should pass
    extra_turn: bool = False
    turn_over: bool = False

    @property
    def violation(self) -> RuleViolation | None:
        if self.success or self.error_code is None:
            return None
        return RuleViolation(code=self.error_code, reason=self.error or "")

    @classmethod
    def failure(cls, error: str, error_code: ViolationCode) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: GameState,
        changes: list[str] | None = None,
        **flags,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
            **flags,
        )
