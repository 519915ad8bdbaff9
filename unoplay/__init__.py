"""
Unoplay - Card game engine with a scripted opponent

A rules engine for a two-player shedding card game: a human player
against a computer opponent. The engine provides:
- Immutable game state and a single reducer for every move
- Legality checks, deck handling and card effects
- A scripted opponent with configurable personalities
- A real-time game loop with paced opponent turns
"""

__version__ = "0.1.0"
