"""
Game State - The aggregate the turn state machine operates on.

Design principles:
- Immutable-friendly: all mutations return new state
- Exclusively owned by the reducer; other components receive it for
  one operation and hand back a new state
- Conservation: deck + discard + both hands always total 108 cards
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .cards import Card
from .history import PlayHistory


class Side(str, Enum):
    """The two sides at the table."""
    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> Side:
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class Direction(str, Enum):
    """Play direction. Cosmetic with two sides."""
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    def toggled(self) -> Direction:
        if self is Direction.CLOCKWISE:
            return Direction.COUNTERCLOCKWISE
        return Direction.CLOCKWISE


class GameStatus(str, Enum):
    """High-level game status."""
    PLAYING = "playing"
    AWAITING_COLOR_CHOICE = "awaiting_color_choice"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Zone:
    """
    An ordered pile of cards.

    Used for the deck, the discard pile and both hands. The last card
    is the "top" for piles.
    """
    name: str
    cards: tuple[Card, ...] = ()

    @property
    def count(self) -> int:
        return len(self.cards)

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def top_card(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def add(self, card: Card) -> Zone:
        """Return new zone with card added on top."""
        return Zone(name=self.name, cards=self.cards + (card,))

    def extend(self, cards: tuple[Card, ...] | list[Card]) -> Zone:
        return Zone(name=self.name, cards=self.cards + tuple(cards))

    def pop_top(self) -> tuple[Card | None, Zone]:
        """Return (removed top card, new zone)."""
        if not self.cards:
            return None, self
        return self.cards[-1], Zone(name=self.name, cards=self.cards[:-1])

    def find(self, card_id: str) -> Card | None:
        for card in self.cards:
            if card.card_id == card_id:
                return card
        return None

    def remove(self, card_id: str) -> tuple[Card | None, Zone]:
        """Return (removed card, new zone); (None, self) if absent."""
        for index, card in enumerate(self.cards):
            if card.card_id == card_id:
                remaining = self.cards[:index] + self.cards[index + 1:]
                return card, Zone(name=self.name, cards=remaining)
        return None, self

    def replace_top(self, card: Card) -> Zone:
        """Return new zone with the top card swapped (wild color substitution)."""
        if not self.cards:
            raise ValueError(f"Zone {self.name} is empty")
        return Zone(name=self.name, cards=self.cards[:-1] + (card,))


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    All state changes go through the reducer. generation identifies
    the game instance so stale scheduled continuations can be dropped.
    """
    game_id: str
    generation: int = 0

    status: GameStatus = GameStatus.PLAYING
    whose_turn: Side = Side.PLAYER
    direction: Direction = Direction.CLOCKWISE
    round_number: int = 1
    winner: Side | None = None

    deck: Zone = field(default_factory=lambda: Zone(name="deck"))
    discard: Zone = field(default_factory=lambda: Zone(name="discard"))
    hands: dict[Side, Zone] = field(default_factory=dict)

    history: PlayHistory = field(default_factory=PlayHistory)

    # Display text for the presentation layer
    message: str = ""

    random_seed: int | None = None

    @property
    def active_card(self) -> Card | None:
        """The discard top; determines legality and the current color."""
        return self.discard.top_card

    def hand(self, side: Side) -> Zone:
        return self.hands.get(side, Zone(name=f"{side.value}_hand"))

    def with_hand(self, side: Side, zone: Zone) -> GameState:
        """Return new state with side's hand replaced."""
        new_hands = dict(self.hands)
        new_hands[side] = zone
        return self._copy_with(hands=new_hands)

    def total_cards(self) -> int:
        """Cards across deck, discard and both hands."""
        return (
            self.deck.count
            + self.discard.count
            + self.hand(Side.PLAYER).count
            + self.hand(Side.OPPONENT).count
        )

    @property
    def is_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
