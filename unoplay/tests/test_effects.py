"""
Tests for card effect resolution.
"""

import random

import pytest

from ..engine_core.effect_resolver import EffectResolver
from ..engine_core.state import Direction, Side
from .conftest import card, make_state


@pytest.fixture
def resolver():
    return EffectResolver(rng=random.Random(3))


@pytest.fixture
def state():
    return make_state(
        player=[card("red", 1)],
        opponent=[card("blue", 1)],
        discard=[card("red", 9)],
        deck=[card("green", n) for n in range(1, 7)],
    )


class TestEffectResolver:

    def test_number_has_no_effect(self, resolver, state):
        outcome = resolver.resolve(state, card("red", 4), Side.PLAYER)

        assert outcome.state is state
        assert not outcome.skip_other
        assert not outcome.needs_color

    def test_skip(self, resolver, state):
        outcome = resolver.resolve(state, card("red", "skip"), Side.PLAYER)

        assert outcome.skip_other
        assert outcome.state.hand(Side.OPPONENT).count == 1

    def test_reverse_toggles_direction_and_skips(self, resolver, state):
        outcome = resolver.resolve(state, card("red", "reverse"), Side.PLAYER)

        assert outcome.skip_other
        assert outcome.state.direction == Direction.COUNTERCLOCKWISE

        again = resolver.resolve(outcome.state, card("red", "reverse", "b"), Side.OPPONENT)
        assert again.state.direction == Direction.CLOCKWISE

    def test_draw_two_hits_other_side(self, resolver, state):
        outcome = resolver.resolve(state, card("red", "draw_two"), Side.PLAYER)

        assert outcome.state.hand(Side.OPPONENT).count == 3
        assert outcome.state.hand(Side.PLAYER).count == 1
        assert outcome.state.deck.count == 4
        # The victim keeps its turn
        assert not outcome.skip_other

    def test_wild_needs_color(self, resolver, state):
        outcome = resolver.resolve(state, card("wild", "wild"), Side.OPPONENT)

        assert outcome.needs_color
        assert outcome.state.hand(Side.PLAYER).count == 1

    def test_wild_draw_four(self, resolver, state):
        outcome = resolver.resolve(state, card("wild", "wild_draw_four"), Side.OPPONENT)

        assert outcome.needs_color
        assert not outcome.skip_other
        assert outcome.state.hand(Side.PLAYER).count == 5

    def test_forced_draw_reshuffles(self, resolver):
        state = make_state(
            opponent=[card("blue", 1)],
            discard=[card("red", 1), card("red", 2), card("red", 3), card("red", 9)],
            deck=[card("green", 1)],
        )
        new_state, received = resolver.force_draw(state, Side.OPPONENT, 4)

        assert received == 4
        assert new_state.hand(Side.OPPONENT).count == 5
        assert new_state.discard.cards == (card("red", 9),)
        assert new_state.deck.is_empty

    def test_forced_draw_short(self, resolver):
        state = make_state(opponent=[], discard=[card("red", 9)], deck=[card("green", 1)])
        new_state, received = resolver.force_draw(state, Side.OPPONENT, 2)

        assert received == 1
        assert new_state.hand(Side.OPPONENT).count == 1
