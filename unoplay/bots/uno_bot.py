"""
Opponent Bot - The scripted opponent.

Per turn with at least one legal card, the bot rolls once:
- optimal (80% with the classic personality): power cards first in
  strict priority, then a card of its dominant color, then the first
  legal card
- suboptimal: a random legal card that is not an aggressive power card,
  or any random legal card if it holds nothing else

With no legal card it draws. Color choice after a wild is the most
frequent color left in hand, random if it holds only wilds.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable
import logging
import random

from .policy import BotPolicy, BotDecision
from .personality import Personality, CLASSIC
from ..engine_core.action import ActionType
from ..engine_core.cards import Card, Color, CONCRETE_COLORS, AGGRESSIVE_KINDS
from ..engine_core.state import Side

if TYPE_CHECKING:
    from ..engine_core.state import GameState
    from ..engine_core.action import Action

logger = logging.getLogger(__name__)


def dominant_color(cards: Iterable[Card]) -> Color | None:
    """Most frequent non-wild color; ties go to the color seen first."""
    counts: dict[Color, int] = {}
    for card in cards:
        if card.color != Color.WILD:
            counts[card.color] = counts.get(card.color, 0) + 1
    if not counts:
        return None
    return max(counts, key=counts.get)


@dataclass
class UnoBot(BotPolicy):
    """
    The opponent's decision policy.

    Usage:
        bot = UnoBot(personality=CLASSIC, rng=random.Random(7))
        decision = bot.select_action(state, legal_actions(state, Side.OPPONENT))
    """
    personality: Personality = CLASSIC
    rng: random.Random = field(default_factory=random.Random)
    side: Side = Side.OPPONENT

    def select_action(
        self,
        state: GameState,
        legal_actions: list[Action],
    ) -> BotDecision:
        """
        Pick a card to play, or draw when nothing is playable.
        """
        if not legal_actions:
            raise ValueError("No legal actions available")

        hand = state.hand(self.side)
        plays = {
            action.payload.card_id: action
            for action in legal_actions
            if action.action_type == ActionType.PLAY
        }

        if not plays:
            return BotDecision(
                action=legal_actions[0],
                explanation="Nothing playable, drawing",
                evaluated_actions=len(legal_actions),
            )

        playable = [card for card in hand.cards if card.card_id in plays]

        optimal = self.rng.random() >= self.personality.suboptimal_rate
        if optimal:
            card, reason = self._pick_optimal(hand.cards, playable)
        else:
            card, reason = self._pick_suboptimal(playable)

        logger.debug("Opponent picks %s (%s)", card, reason)
        return BotDecision(
            action=plays[card.card_id],
            explanation=reason,
            optimal=optimal,
            evaluated_actions=len(playable),
            evaluation_details={"personality": self.personality.name},
        )

    def select_color(self, state: GameState) -> Color:
        color = dominant_color(state.hand(self.side).cards)
        if color is None:
            color = self.rng.choice(CONCRETE_COLORS)
        return color

    def _pick_optimal(self, hand: tuple[Card, ...], playable: list[Card]) -> tuple[Card, str]:
        """Power cards by priority, then dominant color, then first legal."""
        power = [card for card in playable if card.is_power]
        if power:
            for kind in self.personality.power_priority:
                for card in power:
                    if card.kind == kind:
                        return card, f"Best power card: {kind.value}"
            return power[0], "First power card"

        color = dominant_color(hand)
        if color is not None:
            for card in playable:
                if card.color == color:
                    return card, f"Dominant color: {color.value}"

        return playable[0], "First legal card"

    def _pick_suboptimal(self, playable: list[Card]) -> tuple[Card, str]:
        """Random card, holding back aggressive power cards when possible."""
        mild = [card for card in playable if card.kind not in AGGRESSIVE_KINDS]
        if mild:
            return self.rng.choice(mild), "Holding back power cards"
        return self.rng.choice(playable), "Only power cards, random pick"
