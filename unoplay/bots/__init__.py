"""
Bots module - Opponent AI implementations.

Provides:
- BotPolicy: Interface for bot decision-making
- UnoBot: The scripted opponent with its optimal/suboptimal split
- Personality: Configurable play styles
"""

from .policy import BotPolicy, BotDecision, RandomPolicy, FirstLegalPolicy
from .personality import Personality, PERSONALITIES, get_personality
from .uno_bot import UnoBot, dominant_color

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomPolicy",
    "FirstLegalPolicy",
    "Personality",
    "PERSONALITIES",
    "get_personality",
    "UnoBot",
    "dominant_color",
]
