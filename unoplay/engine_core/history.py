"""
Play History - Recently played cards per side, for display only.

Each side keeps a bounded FIFO buffer. Recording returns a new
history; the stored cards are copies stamped with the round number.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .cards import Card

if TYPE_CHECKING:
    from .state import Side

DEFAULT_HISTORY_CAPACITY = 3


@dataclass(frozen=True)
class PlayHistory:
    """Bounded per-side record of played cards, oldest first."""
    buffers: dict[Side, tuple[Card, ...]] = field(default_factory=dict)
    capacity: int = DEFAULT_HISTORY_CAPACITY

    def __post_init__(self):
        if self.capacity < 1:
            raise ValueError("History capacity must be at least 1")

    def entries(self, side: Side) -> tuple[Card, ...]:
        return self.buffers.get(side, ())

    def record_play(self, card: Card, side: Side, round_number: int) -> PlayHistory:
        """Append a stamped copy of card to side's buffer, evicting the oldest."""
        buffer = self.entries(side) + (card.stamped(round_number),)
        new_buffers = dict(self.buffers)
        new_buffers[side] = buffer[-self.capacity:]
        return PlayHistory(buffers=new_buffers, capacity=self.capacity)
