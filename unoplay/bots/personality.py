"""
Bot Personalities - Configurable play styles.

Personalities adjust:
- How often the opponent deliberately plays a weaker card
- Which power cards it reaches for first when playing well
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.cards import CardKind

# Strict order the opponent prefers power cards in when playing well
DEFAULT_POWER_PRIORITY: tuple[CardKind, ...] = (
    CardKind.WILD_DRAW_FOUR,
    CardKind.DRAW_TWO,
    CardKind.SKIP,
    CardKind.REVERSE,
    CardKind.WILD,
)


@dataclass(frozen=True)
class Personality:
    """
    A bot personality that defines play style.

    suboptimal_rate is the probability, per turn with a legal card,
    that the bot avoids its power cards and picks at random instead.
    """
    name: str
    description: str = ""

    suboptimal_rate: float = 0.2
    power_priority: tuple[CardKind, ...] = DEFAULT_POWER_PRIORITY

    def __post_init__(self):
        if not 0.0 <= self.suboptimal_rate <= 1.0:
            raise ValueError(f"suboptimal_rate must be within [0, 1], got {self.suboptimal_rate}")


# ============================================================================
# Predefined Personalities
# ============================================================================

CLASSIC = Personality(
    name="Classic",
    description="Plays its best card four times out of five",
    suboptimal_rate=0.2,
)


RUTHLESS = Personality(
    name="Ruthless",
    description="Always plays its strongest card",
    suboptimal_rate=0.0,
)


CASUAL = Personality(
    name="Casual",
    description="Holds back its power cards half of the time",
    suboptimal_rate=0.5,
)


# All predefined personalities
PERSONALITIES: dict[str, Personality] = {
    "classic": CLASSIC,
    "ruthless": RUTHLESS,
    "casual": CASUAL,
}


def get_personality(name: str) -> Personality:
    """Look up a predefined personality by name."""
    try:
        return PERSONALITIES[name.lower()]
    except KeyError:
        known = ", ".join(sorted(PERSONALITIES))
        raise ValueError(f"Unknown personality {name!r}, expected one of: {known}") from None
