"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Builds and deals the deck
2. Manages GameState
3. Generates legal actions
4. Applies actions via the reducer
5. Resolves card effects
"""

from .cards import Card, CardKind, Color, CONCRETE_COLORS
from .rules import is_playable, legal_cards, has_legal_card, RULES_SUMMARY
from .state import GameState, GameStatus, Side, Direction, Zone
from .history import PlayHistory
from .deck import (
    build_standard_deck,
    deal_initial_hands,
    flip_first_discard,
    setup_game,
    reshuffle_from_discard,
    draw_cards,
    lucky_draw,
)
from .action import Action, ActionType, ActionPayload, ActionResult, RuleViolation, ViolationCode
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions
from .effect_resolver import EffectResolver, EffectOutcome
from .snapshot import GameStateSnapshot, CardView, HandCardView, build_snapshot

__all__ = [
    "Card",
    "CardKind",
    "Color",
    "CONCRETE_COLORS",
    "is_playable",
    "legal_cards",
    "has_legal_card",
    "RULES_SUMMARY",
    "GameState",
    "GameStatus",
    "Side",
    "Direction",
    "Zone",
    "PlayHistory",
    "build_standard_deck",
    "deal_initial_hands",
    "flip_first_discard",
    "setup_game",
    "reshuffle_from_discard",
    "draw_cards",
    "lucky_draw",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "RuleViolation",
    "ViolationCode",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "EffectResolver",
    "EffectOutcome",
    "GameStateSnapshot",
    "CardView",
    "HandCardView",
    "build_snapshot",
]
