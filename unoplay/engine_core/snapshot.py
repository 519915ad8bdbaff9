"""
Snapshots - Read-only views of the game for the presentation layer.

A snapshot is rebuilt from GameState after every action. It never
exposes the opponent's cards, only their count. Snapshots are frozen
pydantic models, so two snapshots of the same state compare equal and
serialize identically.
"""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, Field

from .cards import Card
from .rules import is_playable
from .state import GameState, GameStatus, Side

# Discard cards shown under the active card
RECENT_DISCARDS = 3


class CardView(BaseModel):
    """Card information for display."""
    card_id: str
    color: str
    kind: str
    value: Optional[int] = None
    display_text: str
    played_on_round: Optional[int] = None

    model_config = {"frozen": True}

    @classmethod
    def from_card(cls, card: Card) -> CardView:
        return cls(
            card_id=card.card_id,
            color=card.color.value,
            kind=card.kind.value,
            value=card.value,
            display_text=card.display_text,
            played_on_round=card.played_on_round,
        )


class HandCardView(CardView):
    """A card in the player's hand, with its legality right now."""
    is_legal_now: bool = False


class GameStateSnapshot(BaseModel):
    """Everything the presentation layer may render."""
    game_id: str
    generation: int
    status: GameStatus
    whose_turn: Side
    direction: str
    round_number: int
    winner: Optional[Side] = None
    message: str = ""

    deck_size: int
    discard_size: int
    discard_top: Optional[CardView] = None
    recent_discards: list[CardView] = Field(default_factory=list, description="Newest first, under the top card")

    player_hand: list[HandCardView] = Field(default_factory=list)
    opponent_hand_size: int = 0

    player_history: list[CardView] = Field(default_factory=list)
    opponent_history: list[CardView] = Field(default_factory=list)

    should_highlight_draw: bool = False
    pending_operation: Optional[str] = Field(None, description="Scheduled continuation, if any")

    model_config = {"frozen": True}

    @property
    def legal_card_ids(self) -> list[str]:
        return [card.card_id for card in self.player_hand if card.is_legal_now]


def build_snapshot(state: GameState, pending_operation: str | None = None) -> GameStateSnapshot:
    """Build the snapshot for state."""
    active = state.active_card
    can_act = (
        state.whose_turn == Side.PLAYER
        and state.status == GameStatus.PLAYING
        and pending_operation is None
    )

    player_hand = [
        HandCardView(
            **CardView.from_card(card).model_dump(),
            is_legal_now=can_act and active is not None and is_playable(card, active),
        )
        for card in state.hand(Side.PLAYER).cards
    ]

    below_top = state.discard.cards[:-1]
    recent = [CardView.from_card(card) for card in reversed(below_top[-RECENT_DISCARDS:])]

    return GameStateSnapshot(
        game_id=state.game_id,
        generation=state.generation,
        status=state.status,
        whose_turn=state.whose_turn,
        direction=state.direction.value,
        round_number=state.round_number,
        winner=state.winner,
        message=state.message,
        deck_size=state.deck.count,
        discard_size=state.discard.count,
        discard_top=CardView.from_card(active) if active else None,
        recent_discards=recent,
        player_hand=player_hand,
        opponent_hand_size=state.hand(Side.OPPONENT).count,
        player_history=[CardView.from_card(c) for c in state.history.entries(Side.PLAYER)],
        opponent_history=[CardView.from_card(c) for c in state.history.entries(Side.OPPONENT)],
        should_highlight_draw=can_act and not any(card.is_legal_now for card in player_hand),
        pending_operation=pending_operation,
    )
