"""
FastAPI Application - REST API for game clients.

Endpoints:
    POST   /api/v1/sessions                  Create session and deal a game
    GET    /api/v1/sessions                  List active sessions
    GET    /api/v1/sessions/{id}             Get session status and snapshot
    DELETE /api/v1/sessions/{id}             End session
    POST   /api/v1/sessions/{id}/new-game    Deal a new game
    POST   /api/v1/sessions/{id}/play        Play a card
    POST   /api/v1/sessions/{id}/draw        Draw a card
    POST   /api/v1/sessions/{id}/color       Name the color after a wild
    POST   /api/v1/sessions/{id}/advance     Run pending continuations now
    GET    /api/v1/rules                     Rules summary

Opponent Pacing:
    The opponent's turn runs as a delayed continuation. Every request
    that touches a session first runs continuations that are due, so
    polling GET /sessions/{id} is enough to watch the opponent play.
    Clients that do their own pacing call POST /advance.

All responses are JSON with explicit Pydantic schemas. A move that
breaks a rule returns 409 with the reason and the unchanged snapshot.
"""

from typing import Annotated, Optional, Union
import logging
import os

# Environment configuration
UNOPLAY_ENV = os.getenv("UNOPLAY_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        PlayRequest,
        ColorRequest,
        # Response models
        SessionResponse,
        ViolationResponse,
        ErrorResponse,
        AdvanceResponse,
        SessionListResponse,
        EndSessionResponse,
        RulesResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )
    from ..config import EngineConfig
    from ..session import SessionManager

    app = FastAPI(
        title="Unoplay Engine API",
        description="""
Two-player card game against a scripted opponent.

## Turn Flow

1. `POST /play`, `POST /draw` or `POST /color` on your turn
2. The opponent's turn is scheduled after a short pause
3. Poll `GET /sessions/{id}` (or call `POST /advance`) to see it play

## Error Codes

| Code | Description |
|------|-------------|
| `NOT_YOUR_TURN` | It is the opponent's turn |
| `CARD_NOT_LEGAL` | The card does not match the active card |
| `CARD_NOT_IN_HAND` | No such card in your hand |
| `WRONG_STATE` | Game over, or a color must be chosen first |
| `OPERATION_PENDING` | A draw or turn switch is still in flight |
| `INVALID_COLOR` | Not one of red, blue, green, yellow |
| `SESSION_NOT_FOUND` | Session does not exist |
        """,
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    if service is None:
        try:
            config = EngineConfig.from_env()
        except ValueError as e:
            logger.error("Invalid UNOPLAY_* environment (%s), using defaults", e)
            config = EngineConfig()
        service = APIService(session_manager=SessionManager(config=config))
    api_service = service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def to_http(response):
        """Map service results onto HTTP: 404 for unknown sessions, 409 for violations."""
        if isinstance(response, ErrorResponse):
            return make_error_response(response.error_code, response.error, status_code=404)
        if isinstance(response, ViolationResponse):
            return JSONResponse(status_code=409, content=response.model_dump(mode="json"))
        return response

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={400: {"model": ErrorResponse, "description": "Unknown personality"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        request: Optional[CreateSessionRequest] = None,
    ) -> Union[SessionResponse, JSONResponse]:
        """
        Create a new game session.

        A game is dealt immediately; the player moves first.
        """
        try:
            return api_service.create_session(request or CreateSessionRequest())
        except ValueError as e:
            return make_error_response(ErrorCode.INVALID_PERSONALITY, str(e))

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current game, after running any continuation that is due."""
        return to_http(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "ended",
    ) -> Union[EndSessionResponse, JSONResponse]:
        """End a game session and release resources."""
        if not api_service.end_session(session_id, reason):
            return make_error_response(
                ErrorCode.SESSION_NOT_FOUND, f"Session {session_id} not found", status_code=404
            )
        return EndSessionResponse(success=True, session_id=session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/new-game",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Deal a new game",
    )
    async def new_game(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Start over. Anything scheduled for the old game is cancelled."""
        return to_http(api_service.new_game(session_id))

    # =========================================================================
    # Move Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/play",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ViolationResponse}},
        tags=["Moves"],
        summary="Play a card",
    )
    async def play_card(session_id: str, request: PlayRequest) -> Union[SessionResponse, JSONResponse]:
        """Play a card from your hand onto the discard pile."""
        return to_http(api_service.play(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/draw",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ViolationResponse}},
        tags=["Moves"],
        summary="Draw a card",
    )
    async def draw_card(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """
        Draw a card.

        If it cannot be played, your turn ends after a short pause.
        """
        return to_http(api_service.draw(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/color",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}, 409: {"model": ViolationResponse}},
        tags=["Moves"],
        summary="Name the color after a wild card",
    )
    async def select_color(session_id: str, request: ColorRequest) -> Union[SessionResponse, JSONResponse]:
        return to_http(api_service.select_color(session_id, request))

    @app.post(
        "/api/v1/sessions/{session_id}/advance",
        response_model=AdvanceResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Moves"],
        summary="Run pending continuations now",
    )
    async def advance(session_id: str) -> Union[AdvanceResponse, JSONResponse]:
        """Skip the pacing delays and let the opponent finish its turn."""
        return to_http(api_service.advance(session_id))

    # =========================================================================
    # Rules & Health
    # =========================================================================

    @app.get(
        "/api/v1/rules",
        response_model=RulesResponse,
        tags=["Rules"],
        summary="Rules summary",
    )
    async def get_rules() -> RulesResponse:
        return api_service.get_rules()

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="unoplay-engine",
            version="1.0.0",
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Unoplay Engine API",
            "version": "1.0.0",
            "environment": UNOPLAY_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    # Not a rule violation: let it surface as a 500
    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(request, exc: RuntimeError):
        logger.exception("Unhandled engine error")
        return make_error_response(ErrorCode.INTERNAL_ERROR, str(exc), status_code=500)

    return app


# For running directly: uvicorn unoplay.api.app:app
app = None
try:
    app = create_app()
except ImportError:
    # FastAPI not installed
    pass
