"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a client and the engine.
Game state travels as GameStateSnapshot, the same model the in-process
facade returns.

Error Codes:
- NOT_YOUR_TURN, CARD_NOT_LEGAL, CARD_NOT_IN_HAND, WRONG_STATE,
  OPERATION_PENDING, INVALID_COLOR: the request broke a game rule
- SESSION_NOT_FOUND: Session does not exist or has expired
- INVALID_PERSONALITY: Unknown opponent personality
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.action import ViolationCode
from ..engine_core.snapshot import GameStateSnapshot


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    YOUR_TURN = "your_turn"
    CHOOSE_COLOR = "choose_color"
    SETTLING_DRAW = "settling_draw"
    OPPONENT_THINKING = "opponent_thinking"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    NOT_YOUR_TURN = ViolationCode.NOT_YOUR_TURN.value
    CARD_NOT_LEGAL = ViolationCode.CARD_NOT_LEGAL.value
    CARD_NOT_IN_HAND = ViolationCode.CARD_NOT_IN_HAND.value
    WRONG_STATE = ViolationCode.WRONG_STATE.value
    OPERATION_PENDING = ViolationCode.OPERATION_PENDING.value
    INVALID_COLOR = ViolationCode.INVALID_COLOR.value
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_PERSONALITY = "INVALID_PERSONALITY"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    personality: Optional[str] = Field(
        None, description="Opponent personality: classic, ruthless, casual"
    )
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")


class PlayRequest(BaseModel):
    """Request to play a card from the player's hand."""
    card_id: str = Field(..., description="ID of a card in the player's hand")


class ColorRequest(BaseModel):
    """Request to name the color after a wild card."""
    color: str = Field(..., description="red, blue, green or yellow")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class ViolationResponse(BaseModel):
    """A rejected move: the reason plus the unchanged game."""
    error: str
    error_code: ErrorCode
    snapshot: GameStateSnapshot
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information and the current game."""
    session_id: str
    status: SessionStatus
    personality: str
    snapshot: GameStateSnapshot
    events: list[str] = Field(default_factory=list, description="What the last request did")
    created_at: float = 0.0
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class AdvanceResponse(BaseModel):
    """Response after running pending continuations."""
    session_id: str
    continuations_run: int
    opponent_actions: list[str] = Field(default_factory=list)
    snapshot: GameStateSnapshot
    api_version: str = "v1"


class PersonalityInfo(BaseModel):
    """An opponent personality."""
    name: str
    description: str
    suboptimal_rate: float


class RulesResponse(BaseModel):
    """Rules summary."""
    rules: list[str]
    personalities: list[PersonalityInfo] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    api_version: str = "v1"


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
