"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation and the turn state
machine:

    Playing(side) --play--> Playing(side)              skip / reverse
                       +--> AwaitingColorChoice        wild cards
                       +--> GameOver(side)             empty hand
                       +--> (turn over)                anything else
    Playing(side) --draw--> Playing(side)              drawn card is playable
                       +--> (turn over)                otherwise
    AwaitingColorChoice --select_color--> (turn over)
    Playing(side) --end_turn--> Playing(other)         round + 1 when other is the player

"Turn over" results leave whose_turn unchanged; the game loop decides
when to apply END_TURN (immediately or after a scheduled delay).

Design principles:
- (state, action) -> ActionResult, the input state is never modified
- Validates before applying; violations are results, not exceptions
- Delegates card consequences to EffectResolver
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from .action import Action, ActionType, ActionResult, ViolationCode
from .cards import Color
from .deck import draw_cards, lucky_draw
from .effect_resolver import EffectResolver
from .rules import is_playable
from .state import GameState, GameStatus, Side

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the random source used for reshuffles.
    """
    rng: random.Random = field(default_factory=random.Random)
    resolver: EffectResolver | None = None

    def __post_init__(self):
        if self.resolver is None:
            self.resolver = EffectResolver(rng=self.rng)

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or the violation.
        """
        if state.status == GameStatus.GAME_OVER:
            return ActionResult.failure("Game is over - no actions allowed", ViolationCode.WRONG_STATE)

        handler = self._get_handler(action.action_type)
        result = handler(state, action)

        if result.success:
            logger.debug("Applied %s: %s", action.describe(), "; ".join(result.state_changes))
        else:
            logger.debug("Rejected %s: %s", action.describe(), result.error)
        return result

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY: self._handle_play,
            ActionType.DRAW: self._handle_draw,
            ActionType.SELECT_COLOR: self._handle_select_color,
            ActionType.END_TURN: self._handle_end_turn,
        }
        return handlers[action_type]

    def _check_turn(self, state: GameState, side: Side | None) -> ActionResult | None:
        """Common checks for play and draw."""
        if state.status == GameStatus.AWAITING_COLOR_CHOICE:
            return ActionResult.failure("A color must be chosen first", ViolationCode.WRONG_STATE)
        if side != state.whose_turn:
            return ActionResult.failure(
                f"Not {side.value if side else 'anyone'}'s turn", ViolationCode.NOT_YOUR_TURN
            )
        return None

    def _handle_play(self, state: GameState, action: Action) -> ActionResult:
        """Handle playing a card from hand onto the discard pile."""
        side = action.payload.side
        rejected = self._check_turn(state, side)
        if rejected:
            return rejected

        hand = state.hand(side)
        card = hand.find(action.payload.card_id or "")
        if card is None:
            return ActionResult.failure(
                f"Card {action.payload.card_id} not in hand", ViolationCode.CARD_NOT_IN_HAND
            )

        active = state.active_card
        if active is not None and not is_playable(card, active):
            return ActionResult.failure(
                f"{card} cannot be played on {active}", ViolationCode.CARD_NOT_LEGAL
            )

        _, new_hand = hand.remove(card.card_id)
        new_state = state.with_hand(side, new_hand)._copy_with(
            discard=state.discard.add(card),
            history=state.history.record_play(card, side, state.round_number),
        )

        outcome = self.resolver.resolve(new_state, card, side)
        new_state = outcome.state
        changes = [f"{side.value} played {card}"] + outcome.changes

        if new_state.hand(side).is_empty:
            changes.append(f"{side.value} wins!")
            new_state = new_state._copy_with(
                status=GameStatus.GAME_OVER,
                winner=side,
                message=_winner_message(side),
            )
            return ActionResult.success_with_state(new_state, changes)

        if outcome.needs_color:
            new_state = new_state._copy_with(
                status=GameStatus.AWAITING_COLOR_CHOICE,
                message=changes[-1],
            )
            return ActionResult.success_with_state(new_state, changes)

        new_state = new_state._copy_with(message=changes[-1])
        return ActionResult.success_with_state(
            new_state,
            changes,
            extra_turn=outcome.skip_other,
            turn_over=not outcome.skip_other,
        )

    def _handle_draw(self, state: GameState, action: Action) -> ActionResult:
        """
        Handle drawing one card.

        The player gets the lucky draw; the opponent takes the top card.
        """
        side = action.payload.side
        rejected = self._check_turn(state, side)
        if rejected:
            return rejected

        if side == Side.PLAYER:
            outcome = lucky_draw(state.deck, state.discard, self.rng)
        else:
            outcome = draw_cards(state.deck, state.discard, 1, self.rng)

        new_state = state._copy_with(deck=outcome.deck, discard=outcome.discard)
        changes = ["Deck reshuffled from the discard pile"] if outcome.reshuffles else []

        if not outcome.cards:
            changes.append(f"{side.value} could not draw, no cards left")
            new_state = new_state._copy_with(message=changes[-1])
            return ActionResult.success_with_state(new_state, changes, turn_over=True)

        card = outcome.cards[0]
        new_state = new_state.with_hand(side, new_state.hand(side).add(card))
        playable = is_playable(card, new_state.active_card)

        if playable:
            changes.append(f"{side.value} drew a card that can be played")
        else:
            changes.append(f"{side.value} drew a card but cannot play it")

        new_state = new_state._copy_with(message=changes[-1])
        return ActionResult.success_with_state(
            new_state,
            changes,
            drawn_cards=[card],
            turn_over=not playable,
        )

    def _handle_select_color(self, state: GameState, action: Action) -> ActionResult:
        """Rewrite the wild card on top of the discard pile to a concrete color."""
        side = action.payload.side
        if state.status != GameStatus.AWAITING_COLOR_CHOICE:
            return ActionResult.failure("No color choice pending", ViolationCode.WRONG_STATE)
        if side != state.whose_turn:
            return ActionResult.failure(
                f"Not {side.value if side else 'anyone'}'s choice", ViolationCode.NOT_YOUR_TURN
            )

        color = action.payload.color
        if color is None or color == Color.WILD:
            return ActionResult.failure(
                f"{color.value if color else 'No color'} is not a playable color",
                ViolationCode.INVALID_COLOR,
            )

        top = state.active_card
        new_state = state._copy_with(
            discard=state.discard.replace_top(top.with_color(color)),
            status=GameStatus.PLAYING,
            message=f"{side.value} chose {color.value}",
        )
        return ActionResult.success_with_state(
            new_state,
            [f"{side.value} chose {color.value}"],
            turn_over=True,
        )

    def _handle_end_turn(self, state: GameState, action: Action) -> ActionResult:
        """Hand control to the other side; a new round starts when the player is back."""
        if state.status != GameStatus.PLAYING:
            return ActionResult.failure(
                f"Cannot end the turn while {state.status.value}", ViolationCode.WRONG_STATE
            )

        next_side = state.whose_turn.other
        round_number = state.round_number + 1 if next_side == Side.PLAYER else state.round_number
        message = "Your turn" if next_side == Side.PLAYER else "Opponent's turn"

        new_state = state._copy_with(
            whose_turn=next_side,
            round_number=round_number,
            message=message,
        )
        return ActionResult.success_with_state(new_state, [message])


def _winner_message(side: Side) -> str:
    if side == Side.PLAYER:
        return "Congratulations, you win!"
    return "The opponent wins. Game over"


def apply_action(state: GameState, action: Action, rng: random.Random | None = None) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a reducer and applies the action.
    """
    reducer = Reducer(rng=rng or random.Random())
    return reducer.apply(state, action)
