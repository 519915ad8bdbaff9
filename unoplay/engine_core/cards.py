"""
Cards - The immutable card value object.

A card is identified for rules purposes by (color, kind, value).
The card_id is a stable handle so the presentation layer can address
one physical card among duplicates; it never takes part in equality.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum


class Color(str, Enum):
    """Card colors. WILD is a placeholder until a color is chosen."""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


class CardKind(str, Enum):
    """Card kinds."""
    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


# Colors a wild card can resolve to, in a fixed order
CONCRETE_COLORS: tuple[Color, ...] = (Color.RED, Color.BLUE, Color.GREEN, Color.YELLOW)

WILD_KINDS = frozenset({CardKind.WILD, CardKind.WILD_DRAW_FOUR})

# Power cards the opponent avoids when it plays badly on purpose.
# Wild is deliberately not in this set.
AGGRESSIVE_KINDS = frozenset({
    CardKind.WILD_DRAW_FOUR,
    CardKind.DRAW_TWO,
    CardKind.SKIP,
    CardKind.REVERSE,
})

_SYMBOLS = {
    CardKind.SKIP: "⊘",
    CardKind.REVERSE: "⇄",
    CardKind.DRAW_TWO: "+2",
    CardKind.WILD: "W",
    CardKind.WILD_DRAW_FOUR: "+4",
}


@dataclass(frozen=True)
class Card:
    """
    A single card.

    value is 0-9 for NUMBER cards and None otherwise.
    played_on_round is only set on the copies kept in play history.
    """
    color: Color
    kind: CardKind
    value: int | None = None
    card_id: str = field(default="", compare=False)
    played_on_round: int | None = field(default=None, compare=False)

    def __post_init__(self):
        if self.kind == CardKind.NUMBER:
            if self.value is None or not 0 <= self.value <= 9:
                raise ValueError(f"Number card needs a value 0-9, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.value} cards carry no value")

    @property
    def is_number(self) -> bool:
        return self.kind == CardKind.NUMBER

    @property
    def is_wild(self) -> bool:
        return self.kind in WILD_KINDS

    @property
    def is_power(self) -> bool:
        """Any non-number card."""
        return self.kind != CardKind.NUMBER

    @property
    def display_text(self) -> str:
        """Short face text: the digit or the action symbol."""
        if self.kind == CardKind.NUMBER:
            return str(self.value)
        return _SYMBOLS[self.kind]

    def with_color(self, color: Color) -> Card:
        """Return the same card showing a different color (wild resolution)."""
        return replace(self, color=color)

    def stamped(self, round_number: int) -> Card:
        """Return a copy stamped with the round it was played on."""
        return replace(self, played_on_round=round_number)

    def __str__(self) -> str:
        if self.color == Color.WILD:
            return self.kind.value
        return f"{self.color.value} {self.display_text}"
