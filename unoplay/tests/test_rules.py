"""
Tests for cards and the legality predicate.

Tests:
- Card construction and display
- is_playable across colors, numbers, kinds and wilds
- Hand filtering helpers
"""

import pytest

from ..engine_core.cards import Card, CardKind, Color
from ..engine_core.rules import is_playable, legal_cards, has_legal_card, RULES_SUMMARY
from .conftest import card


class TestCard:
    """Tests for the card value object."""

    def test_number_card_needs_value(self):
        with pytest.raises(ValueError):
            Card(Color.RED, CardKind.NUMBER)

    def test_number_value_out_of_range(self):
        with pytest.raises(ValueError):
            Card(Color.RED, CardKind.NUMBER, 10)

    def test_action_card_carries_no_value(self):
        with pytest.raises(ValueError):
            Card(Color.RED, CardKind.SKIP, 3)

    def test_equality_ignores_card_id(self):
        """Two copies of the same card are equal."""
        assert card("red", 5, "a") == card("red", 5, "b")
        assert card("red", 5, "a").card_id != card("red", 5, "b").card_id

    def test_display_text(self):
        assert card("red", 7).display_text == "7"
        assert card("red", "skip").display_text == "⊘"
        assert card("red", "reverse").display_text == "⇄"
        assert card("blue", "draw_two").display_text == "+2"
        assert card("wild", "wild").display_text == "W"
        assert card("wild", "wild_draw_four").display_text == "+4"

    def test_with_color_keeps_identity(self):
        wild = card("wild", "wild")
        red = wild.with_color(Color.RED)

        assert red.color == Color.RED
        assert red.kind == CardKind.WILD
        assert red.card_id == wild.card_id
        assert wild.color == Color.WILD

    def test_power_and_wild_flags(self):
        assert not card("red", 3).is_power
        assert card("red", "skip").is_power
        assert card("wild", "wild").is_wild
        assert not card("red", "draw_two").is_wild


class TestIsPlayable:
    """Tests for the pairwise legality predicate."""

    def test_same_number_different_color(self):
        """Red 5 goes on blue 5."""
        assert is_playable(card("red", 5), card("blue", 5))

    def test_equal_numbers_mutually_playable(self):
        for value in range(10):
            a = card("green", value)
            b = card("yellow", value)
            assert is_playable(a, b)
            assert is_playable(b, a)

    def test_same_color(self):
        assert is_playable(card("red", 2), card("red", 9))
        assert is_playable(card("red", "draw_two"), card("red", 9))

    def test_different_color_and_number(self):
        assert not is_playable(card("red", 2), card("blue", 9))

    def test_same_action_kind(self):
        assert is_playable(card("blue", "skip"), card("red", "skip"))
        assert is_playable(card("green", "reverse"), card("yellow", "reverse"))

    def test_different_action_kinds(self):
        assert not is_playable(card("blue", "skip"), card("red", "reverse"))

    def test_number_on_action_of_other_color(self):
        assert not is_playable(card("blue", 4), card("red", "skip"))

    def test_wild_always_playable(self):
        assert is_playable(card("wild", "wild"), card("red", 3))
        assert is_playable(card("wild", "wild_draw_four"), card("blue", "skip"))

    def test_follows_chosen_color_of_wild(self):
        """A resolved wild is matched by its chosen color."""
        active = card("wild", "wild").with_color(Color.GREEN)

        assert is_playable(card("green", 1), active)
        assert not is_playable(card("red", 1), active)

    def test_wild_kind_matches_wild_kind(self):
        active = card("wild", "wild_draw_four").with_color(Color.YELLOW)
        assert is_playable(card("wild", "wild_draw_four", "b"), active)


class TestHandHelpers:
    """Tests for legal_cards and has_legal_card."""

    def test_legal_cards_keeps_hand_order(self):
        hand = [card("red", 1), card("blue", 2), card("wild", "wild"), card("blue", 9)]
        legal = legal_cards(hand, card("blue", 7))

        assert [c.card_id for c in legal] == ["blue_2_a", "wild_wild_a", "blue_9_a"]

    def test_has_legal_card(self):
        assert has_legal_card([card("red", 1), card("green", 7)], card("blue", 7))
        assert not has_legal_card([card("red", 1)], card("blue", 7))
        assert not has_legal_card([], card("blue", 7))

    def test_rules_summary_present(self):
        assert len(RULES_SUMMARY) > 0
        assert all(isinstance(line, str) and line for line in RULES_SUMMARY)
