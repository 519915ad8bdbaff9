"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. The opponent bot to enumerate its moves
2. Snapshots, to flag which player cards are legal right now
3. Tests, to check the reducer accepts exactly these actions

Design: Generates Action objects, not just action types.
"""

from __future__ import annotations
from dataclasses import dataclass

from .action import Action
from .cards import CONCRETE_COLORS
from .rules import legal_cards
from .state import GameState, GameStatus, Side


@dataclass
class ActionGenerator:
    """
    Generates legal actions for a side.

    With draw_when_stuck_only, draw is offered only when no card is
    playable (the opponent's rule); otherwise draw is always offered
    on the side's turn (the player's rule).
    """
    draw_when_stuck_only: bool = False

    def generate(self, state: GameState, side: Side) -> list[Action]:
        """Generate all legal actions for side in the current state."""
        if state.status == GameStatus.GAME_OVER:
            return []

        if state.whose_turn != side:
            return []

        if state.status == GameStatus.AWAITING_COLOR_CHOICE:
            return [Action.select_color(side, color) for color in CONCRETE_COLORS]

        active = state.active_card
        playable = legal_cards(state.hand(side).cards, active) if active else []
        actions = [Action.play(side, card.card_id) for card in playable]

        if not (self.draw_when_stuck_only and actions):
            actions.append(Action.draw(side))

        return actions


def legal_actions(state: GameState, side: Side) -> list[Action]:
    """
    Convenience function to generate legal actions.

    The opponent only draws when it has nothing to play.
    """
    generator = ActionGenerator(draw_when_stuck_only=side == Side.OPPONENT)
    return generator.generate(state, side)
