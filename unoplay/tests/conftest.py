"""
Pytest fixtures for Unoplay tests.
"""

import random

import pytest

from ..config import EngineConfig
from ..engine_core.cards import Card, CardKind, Color
from ..engine_core.deck import setup_game
from ..engine_core.state import GameState, GameStatus, Side, Zone


def card(color: str, face, copy: str = "a") -> Card:
    """
    Build a test card.

    card("red", 5), card("blue", "skip"), card("wild", "wild_draw_four")
    """
    color = Color(color)
    if isinstance(face, int):
        return Card(color, CardKind.NUMBER, face, card_id=f"{color.value}_{face}_{copy}")
    kind = CardKind(face)
    return Card(color, kind, card_id=f"{color.value}_{kind.value}_{copy}")


def make_state(
    player=(),
    opponent=(),
    discard=(),
    deck=(),
    whose_turn: Side = Side.PLAYER,
    status: GameStatus = GameStatus.PLAYING,
    round_number: int = 1,
    generation: int = 1,
) -> GameState:
    """A hand-built state. The last card of discard/deck is the top."""
    return GameState(
        game_id="test_game",
        generation=generation,
        status=status,
        whose_turn=whose_turn,
        round_number=round_number,
        deck=Zone(name="deck", cards=tuple(deck)),
        discard=Zone(name="discard", cards=tuple(discard)),
        hands={
            Side.PLAYER: Zone(name="player_hand", cards=tuple(player)),
            Side.OPPONENT: Zone(name="opponent_hand", cards=tuple(opponent)),
        },
    )


class FakeClock:
    """Manually advanced clock for scheduler tests."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def fresh_state(rng) -> GameState:
    """A freshly dealt game."""
    return setup_game(rng, game_id="test_game", generation=1)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig(seed=42)
