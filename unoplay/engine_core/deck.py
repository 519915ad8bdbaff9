"""
Deck Manager - Building, dealing, flipping and reshuffling.

This module handles:
- Creating the standard 108-card deck
- The opening deal, with a color-diversity bias for the player only
- Flipping the first discard (always a number card)
- Rebuilding the deck from the discard pile, with special cards
  clustered toward the middle before the shuffle
- Drawing with implicit reshuffle, and the player's lucky draw

All randomness comes from the random.Random passed in, so a seeded
game replays identically.
"""

from __future__ import annotations
from dataclasses import dataclass
import itertools
import logging
import random

from .cards import Card, CardKind, Color, CONCRETE_COLORS, WILD_KINDS
from .history import PlayHistory, DEFAULT_HISTORY_CAPACITY
from .rules import is_playable
from .state import GameState, GameStatus, Side, Zone

logger = logging.getLogger(__name__)

STANDARD_DECK_SIZE = 108
HAND_SIZE = 7
# Player picks that chase a color not yet in hand
DIVERSE_PICKS = 5

_ACTION_KINDS = (CardKind.SKIP, CardKind.REVERSE, CardKind.DRAW_TWO)


def build_standard_deck() -> list[Card]:
    """
    Create the 108 cards in a fixed order.

    Per color: one 0, two of each 1-9, two each of skip/reverse/draw two.
    Plus four wild and four wild draw four.
    """
    cards: list[Card] = []

    for color in CONCRETE_COLORS:
        cards.append(Card(color, CardKind.NUMBER, 0, card_id=f"{color.value}_0_a"))
        for value in range(1, 10):
            for copy in "ab":
                cards.append(Card(color, CardKind.NUMBER, value, card_id=f"{color.value}_{value}_{copy}"))
        for kind in _ACTION_KINDS:
            for copy in "ab":
                cards.append(Card(color, kind, card_id=f"{color.value}_{kind.value}_{copy}"))

    for n in range(1, 5):
        cards.append(Card(Color.WILD, CardKind.WILD, card_id=f"wild_{n}"))
        cards.append(Card(Color.WILD, CardKind.WILD_DRAW_FOUR, card_id=f"wild_draw_four_{n}"))

    return cards


def deal_initial_hands(
    deck: list[Card],
    rng: random.Random,
) -> tuple[list[Card], list[Card], list[Card]]:
    """
    Deal seven cards to each side.

    The player's first five picks each take a random non-wild card of a
    color the hand does not have yet (a random card once no new color is
    left), then two uniform picks. The opponent gets seven uniform picks.

    Returns (player_cards, opponent_cards, remaining_deck).
    """
    remaining = list(deck)
    player_cards: list[Card] = []
    opponent_cards: list[Card] = []
    player_colors: set[Color] = set()

    while len(player_cards) < DIVERSE_PICKS and remaining:
        candidates = [
            index for index, card in enumerate(remaining)
            if card.color != Color.WILD and card.color not in player_colors
        ]
        if candidates:
            index = rng.choice(candidates)
        else:
            index = rng.randrange(len(remaining))
        card = remaining.pop(index)
        player_cards.append(card)
        player_colors.add(card.color)

    while len(player_cards) < HAND_SIZE and remaining:
        player_cards.append(remaining.pop(rng.randrange(len(remaining))))

    while len(opponent_cards) < HAND_SIZE and remaining:
        opponent_cards.append(remaining.pop(rng.randrange(len(remaining))))

    return player_cards, opponent_cards, remaining


def flip_first_discard(deck: list[Card], rng: random.Random) -> tuple[Card | None, list[Card]]:
    """
    Flip the top card to start the discard pile.

    A special card goes back into the deck, which is reshuffled, and
    None is returned: the caller must restart the whole setup.
    """
    remaining = list(deck)
    if not remaining:
        return None, remaining

    card = remaining.pop()
    if card.kind == CardKind.NUMBER:
        return card, remaining

    remaining.append(card)
    rng.shuffle(remaining)
    return None, remaining


def setup_game(
    rng: random.Random,
    game_id: str,
    generation: int = 0,
    history_capacity: int = DEFAULT_HISTORY_CAPACITY,
    random_seed: int | None = None,
) -> GameState:
    """
    Create a fresh game: build, shuffle, deal, flip.

    A special first flip restarts everything, including the deal. The
    deck flip_first_discard reshuffled in that case is dropped: the
    restart builds and shuffles a fresh 108-card deck.
    """
    for attempt in itertools.count(1):
        deck = build_standard_deck()
        rng.shuffle(deck)
        player_cards, opponent_cards, deck = deal_initial_hands(deck, rng)
        first, deck = flip_first_discard(deck, rng)
        if first is not None:
            break
        logger.debug("Setup attempt %d flipped a special card, restarting", attempt)

    return GameState(
        game_id=game_id,
        generation=generation,
        status=GameStatus.PLAYING,
        whose_turn=Side.PLAYER,
        round_number=1,
        deck=Zone(name="deck", cards=tuple(deck)),
        discard=Zone(name="discard", cards=(first,)),
        hands={
            Side.PLAYER: Zone(name="player_hand", cards=tuple(player_cards)),
            Side.OPPONENT: Zone(name="opponent_hand", cards=tuple(opponent_cards)),
        },
        history=PlayHistory(capacity=history_capacity),
        message="Game started!",
        random_seed=random_seed,
    )


def reshuffle_from_discard(deck: Zone, discard: Zone, rng: random.Random) -> tuple[Zone, Zone]:
    """
    Move the discard pile (minus the active card) back into the deck.

    The moved cards are laid out as: lower third of number cards, all
    special cards, remaining number cards; then the whole deck is
    shuffled. Wild cards get their placeholder color back. The active
    card stays as the only discard.

    Returns (new_deck, new_discard).
    """
    active, below = discard.pop_top()
    if active is None:
        return deck, discard

    pool = list(deck.cards) + [_reset_wild(card) for card in below.cards]
    special = [card for card in pool if card.kind != CardKind.NUMBER]
    normal = [card for card in pool if card.kind == CardKind.NUMBER]

    third = len(normal) // 3
    rebuilt = normal[:third] + special + normal[third:]
    rng.shuffle(rebuilt)

    logger.debug(
        "Reshuffled %d discards into deck (%d special, %d number)",
        below.count, len(special), len(normal),
    )
    return Zone(name=deck.name, cards=tuple(rebuilt)), Zone(name=discard.name, cards=(active,))


def _reset_wild(card: Card) -> Card:
    if card.kind in WILD_KINDS and card.color != Color.WILD:
        return card.with_color(Color.WILD)
    return card


@dataclass(frozen=True)
class DrawOutcome:
    """Result of drawing from the deck."""
    cards: tuple[Card, ...]
    deck: Zone
    discard: Zone
    reshuffles: int = 0


def draw_cards(deck: Zone, discard: Zone, count: int, rng: random.Random) -> DrawOutcome:
    """
    Draw up to count cards from the top, reshuffling when the deck empties.

    If neither the deck nor the discard pile below the active card has
    anything left, fewer cards come back. This never raises.
    """
    drawn: list[Card] = []
    reshuffles = 0

    for _ in range(count):
        if deck.is_empty:
            if discard.count < 2:
                break
            deck, discard = reshuffle_from_discard(deck, discard, rng)
            reshuffles += 1
        card, deck = deck.pop_top()
        if card is None:
            break
        drawn.append(card)

    return DrawOutcome(cards=tuple(drawn), deck=deck, discard=discard, reshuffles=reshuffles)


def lucky_draw(deck: Zone, discard: Zone, rng: random.Random) -> DrawOutcome:
    """
    Draw one card for the player, favoring a playable one.

    Scans from the top for the first card playable on the active card
    and takes it wherever it sits; otherwise takes the top card.
    """
    reshuffles = 0
    if deck.is_empty and discard.count >= 2:
        deck, discard = reshuffle_from_discard(deck, discard, rng)
        reshuffles = 1

    active = discard.top_card
    if active is not None:
        for index in range(deck.count - 1, -1, -1):
            card = deck.cards[index]
            if is_playable(card, active):
                remaining = deck.cards[:index] + deck.cards[index + 1:]
                return DrawOutcome(
                    cards=(card,),
                    deck=Zone(name=deck.name, cards=remaining),
                    discard=discard,
                    reshuffles=reshuffles,
                )

    card, deck = deck.pop_top()
    cards = (card,) if card is not None else ()
    return DrawOutcome(cards=cards, deck=deck, discard=discard, reshuffles=reshuffles)
