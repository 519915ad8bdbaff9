"""
Rules - The pairwise legality predicate.

Pure functions, no state. Everything that asks "can this card go on
that card" goes through is_playable().
"""

from __future__ import annotations
from typing import Iterable

from .cards import Card, Color, CardKind


def is_playable(candidate: Card, active: Card) -> bool:
    """
    Check whether candidate may be played on top of active.

    Wild cards always match. Otherwise the color, the number, or the
    action kind must match.
    """
    if candidate.color == Color.WILD:
        return True

    if candidate.color == active.color:
        return True

    if candidate.kind == CardKind.NUMBER and active.kind == CardKind.NUMBER:
        return candidate.value == active.value

    return candidate.kind == active.kind and candidate.kind != CardKind.NUMBER


def legal_cards(hand: Iterable[Card], active: Card) -> list[Card]:
    """Return the playable subset of a hand, in hand order."""
    return [card for card in hand if is_playable(card, active)]


def has_legal_card(hand: Iterable[Card], active: Card) -> bool:
    return any(is_playable(card, active) for card in hand)


# Shown by the terminal client and served at /api/v1/rules
RULES_SUMMARY: tuple[str, ...] = (
    "Each side starts with 7 cards; the first discard is always a number card.",
    "Play a card matching the top card's color, number or symbol. Wild cards match anything.",
    "Skip and Reverse give you another turn straight away.",
    "Draw Two and Wild Draw Four make the other side draw; play then passes as usual.",
    "After a wild card, name the color the next card must match.",
    "No playable card? Draw one. If it can be played you may play it, otherwise your turn ends.",
    "When the deck runs out the discard pile is shuffled back in, keeping its top card.",
    "The first side to empty its hand wins.",
)
