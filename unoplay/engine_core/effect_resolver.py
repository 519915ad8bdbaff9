"""
Effect Resolver - Applies the consequences of a just-played card.

Resolution order is fixed: first the state is changed (forced draws,
direction), then the resolver reports whether the other side's next
turn is skipped and whether a color must be chosen.

| Kind           | Effect                         | Skips other side? |
|----------------|--------------------------------|-------------------|
| number         | none                           | no                |
| skip           | none                           | yes               |
| reverse        | toggle direction               | yes               |
| draw two       | other side draws 2             | no                |
| wild           | color choice                   | no                |
| wild draw four | other side draws 4, then color | no                |

Forced draws do not cost the victim its turn.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from .cards import Card, CardKind
from .deck import draw_cards
from .state import GameState, Side

logger = logging.getLogger(__name__)

FORCED_DRAWS = {
    CardKind.DRAW_TWO: 2,
    CardKind.WILD_DRAW_FOUR: 4,
}


@dataclass
class EffectOutcome:
    """What resolving one card did."""
    state: GameState
    skip_other: bool = False
    needs_color: bool = False
    changes: list[str] = field(default_factory=list)


@dataclass
class EffectResolver:
    """
    Resolves card effects.

    Does not own the game state - it returns new states.
    The rng is only used when a forced draw reshuffles the deck.
    """
    rng: random.Random = field(default_factory=random.Random)

    def resolve(self, state: GameState, card: Card, actor: Side) -> EffectOutcome:
        """Apply card's effect as played by actor."""
        victim = actor.other

        if card.kind == CardKind.NUMBER:
            return EffectOutcome(state=state)

        if card.kind == CardKind.SKIP:
            return EffectOutcome(
                state=state,
                skip_other=True,
                changes=[f"Skip! {victim.value} loses a turn"],
            )

        if card.kind == CardKind.REVERSE:
            new_state = state._copy_with(direction=state.direction.toggled())
            return EffectOutcome(
                state=new_state,
                skip_other=True,
                changes=[f"Reverse! Direction is now {new_state.direction.value}, {victim.value} loses a turn"],
            )

        changes = []
        if card.kind in FORCED_DRAWS:
            count = FORCED_DRAWS[card.kind]
            state, received = self.force_draw(state, victim, count)
            changes.append(f"{victim.value} draws {received} cards")

        if card.is_wild:
            changes.append(f"{actor.value} must choose a color")
            return EffectOutcome(state=state, needs_color=True, changes=changes)

        return EffectOutcome(state=state, changes=changes)

    def force_draw(self, state: GameState, victim: Side, count: int) -> tuple[GameState, int]:
        """
        Make victim draw count cards from the top.

        Reshuffles as needed. Returns (new_state, cards actually drawn).
        """
        outcome = draw_cards(state.deck, state.discard, count, self.rng)
        if len(outcome.cards) < count:
            logger.debug(
                "Forced draw for %s short by %d cards", victim.value, count - len(outcome.cards)
            )

        hand = state.hand(victim).extend(outcome.cards)
        new_state = state._copy_with(deck=outcome.deck, discard=outcome.discard)
        return new_state.with_hand(victim, hand), len(outcome.cards)
