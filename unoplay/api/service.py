"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to GameLoop calls
2. Manages sessions
3. Runs due continuations whenever a session is touched
4. Formats responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

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
    PersonalityInfo,
    # Enums
    SessionStatus,
    ErrorCode,
)
from ..bots import PERSONALITIES
from ..engine_core.cards import CONCRETE_COLORS
from ..engine_core.rules import RULES_SUMMARY
from ..session import SessionManager, Session, LoopState, TurnResult

logger = logging.getLogger(__name__)


_STATUS_BY_LOOP_STATE = {
    LoopState.WAITING_PLAYER: SessionStatus.YOUR_TURN,
    LoopState.WAITING_COLOR: SessionStatus.CHOOSE_COLOR,
    LoopState.SETTLING_DRAW: SessionStatus.SETTLING_DRAW,
    LoopState.OPPONENT_TURN: SessionStatus.OPPONENT_THINKING,
    LoopState.GAME_OVER: SessionStatus.GAME_OVER,
}


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        # Create session
        response = service.create_session(CreateSessionRequest(random_seed=7))

        # Play
        result = service.play(response.session_id, PlayRequest(card_id="red_5_a"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session with a freshly dealt game.

        Raises:
            ValueError: if the personality is unknown
        """
        session = self.session_manager.create_session(
            personality=request.personality,
            seed=request.random_seed,
        )
        return self._session_to_response(session, events=list(session.loop.events))

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session status after running any continuation that is due."""
        session = self._lookup(session_id)
        if session is None:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def end_session(self, session_id: str, reason: str = "ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def new_game(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Deal a new game; pending continuations of the old one are dropped."""
        session = self._lookup(session_id)
        if session is None:
            return self._not_found(session_id)
        session.loop.new_game()
        return self._session_to_response(session, events=list(session.loop.events))

    def play(
        self, session_id: str, request: PlayRequest
    ) -> SessionResponse | ViolationResponse | ErrorResponse:
        session = self._lookup(session_id)
        if session is None:
            return self._not_found(session_id)
        return self._turn_result_to_response(session, session.loop.play(request.card_id))

    def draw(self, session_id: str) -> SessionResponse | ViolationResponse | ErrorResponse:
        session = self._lookup(session_id)
        if session is None:
            return self._not_found(session_id)
        return self._turn_result_to_response(session, session.loop.draw())

    def select_color(
        self, session_id: str, request: ColorRequest
    ) -> SessionResponse | ViolationResponse | ErrorResponse:
        session = self._lookup(session_id)
        if session is None:
            return self._not_found(session_id)
        return self._turn_result_to_response(session, session.loop.select_color(request.color))

    def advance(self, session_id: str) -> AdvanceResponse | ErrorResponse:
        """
        Run every pending continuation without waiting.

        Used by clients that do their own pacing, and by tests.
        """
        session = self._lookup(session_id)
        if session is None:
            return self._not_found(session_id)

        ran = session.loop.run_pending()
        return AdvanceResponse(
            session_id=session_id,
            continuations_run=ran,
            opponent_actions=[action.describe() for action in session.loop.last_opponent_actions],
            snapshot=session.loop.snapshot(),
        )

    def get_rules(self) -> RulesResponse:
        return RulesResponse(
            rules=list(RULES_SUMMARY),
            personalities=[
                PersonalityInfo(
                    name=key,
                    description=p.description,
                    suboptimal_rate=p.suboptimal_rate,
                )
                for key, p in PERSONALITIES.items()
            ],
            colors=[color.value for color in CONCRETE_COLORS],
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _lookup(self, session_id: str) -> Session | None:
        session = self.session_manager.get_session(session_id)
        if session is None:
            return None
        session.touch()
        session.loop.run_due()
        return session

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(
        self, session: Session, events: list[str] | None = None
    ) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            status=_STATUS_BY_LOOP_STATE[session.loop.loop_state],
            personality=session.personality,
            snapshot=session.loop.snapshot(),
            events=events or [],
            created_at=session.created_at,
        )

    def _turn_result_to_response(
        self, session: Session, result: TurnResult
    ) -> SessionResponse | ViolationResponse:
        if result.violation is not None:
            logger.debug(
                "Session %s: rejected (%s) %s",
                session.session_id, result.violation.code.value, result.violation.reason,
            )
            return ViolationResponse(
                error=result.violation.reason,
                error_code=ErrorCode(result.violation.code.value),
                snapshot=result.snapshot,
            )
        return self._session_to_response(session, events=result.events)
