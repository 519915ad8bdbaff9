"""
API Module - Client interface.

Exposes the engine via REST API.
A client:
1. Creates a session (a game is dealt at once)
2. Plays, draws and names colors
3. Polls the session to watch the opponent
4. Starts new games or ends the session

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    PlayRequest,
    ColorRequest,
    # Responses
    SessionResponse,
    ViolationResponse,
    ErrorResponse,
    AdvanceResponse,
    RulesResponse,
    HealthResponse,
    # Enums
    SessionStatus,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "PlayRequest",
    "ColorRequest",
    # Responses
    "SessionResponse",
    "ViolationResponse",
    "ErrorResponse",
    "AdvanceResponse",
    "RulesResponse",
    "HealthResponse",
    # Enums
    "SessionStatus",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
