"""
FastAPI Application - WebSocket game server with a small REST surface.

Endpoints:
    WS     /ws                          Game socket (pairs with the next player)
    GET    /api/v1/sessions             List active sessions
    GET    /api/v1/sessions/{id}        Get session summary
    DELETE /api/v1/sessions/{id}        Abort a session
    GET    /health                      Health check

Game Flow over /ws:
    1. Connect; the socket waits until a second player connects
    2. Both receive gameStarted with their own empty board
    3. Each sends playerPut until 20 cells are placed
    4. Players alternate playerRoll until one fleet is gone
    5. Both receive gameResult; repeatGame starts over

All frames are JSON objects with a "type" field.
"""

from typing import Optional, Union
import logging
import os

from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..protocol import IncorrectRequestMessage, encode_server_message
from ..session import Phase, SessionManager, TransportSendError
from .schemas import (
    ErrorCode,
    ErrorResponse,
    SessionInfo,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
)
from .websocket import WebSocketConnection

# Environment configuration
SEABATTLE_ENV = os.getenv("SEABATTLE_ENV", "development")
SEABATTLE_LOG_LEVEL = os.getenv("SEABATTLE_LOG_LEVEL", "INFO")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(manager: Optional[SessionManager] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        manager: Optional SessionManager instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Sea Battle Server",
        description="Two-player naval battle sessions over WebSocket.",
        version=__version__,
        docs_url="/api/docs" if SEABATTLE_ENV != "production" else None,
        redoc_url=None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    session_manager = manager or SessionManager()
    app.state.session_manager = session_manager

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(error=message, error_code=error_code).model_dump(),
        )

    # =========================================================================
    # Game socket
    # =========================================================================

    @app.websocket("/ws")
    async def game_socket(websocket: WebSocket):
        """
        One player's game connection.

        Frames received before an opponent arrives are answered with
        incorrectRequest. Everything else goes to the session actor.
        """
        await websocket.accept()
        connection = WebSocketConnection(websocket)
        session_manager.join(connection)

        try:
            while True:
                frame = await websocket.receive()
                if frame["type"] == "websocket.disconnect":
                    break

                raw = frame.get("text")
                if raw is None:
                    raw = frame.get("bytes")

                actor = session_manager.session_for(connection)
                if actor is None:
                    await connection.send_text(encode_server_message(
                        IncorrectRequestMessage(message="Waiting for an opponent")
                    ))
                    continue
                actor.on_message(connection, raw)
        except TransportSendError as e:
            logger.warning("%s dropped: %s", connection, e)
        finally:
            session_manager.disconnect(connection)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = session_manager.list_active_sessions()
        return SessionListResponse(
            sessions=sessions,
            count=len(sessions),
            waiting=session_manager.waiting_count,
        )

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionInfo,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session summary",
    )
    async def get_session(session_id: str) -> Union[SessionInfo, JSONResponse]:
        """Get the phase, turn and readiness of a session."""
        actor = session_manager.get_session(session_id)
        if actor is None:
            return make_error_response(
                ErrorCode.SESSION_NOT_FOUND,
                f"Session {session_id} not found",
                status_code=404,
            )
        return _session_info(actor.session)

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Abort a session",
    )
    async def end_session(session_id: str) -> Union[EndSessionResponse, JSONResponse]:
        """Abort a session; both players are notified and disconnected."""
        if not session_manager.end_session(session_id):
            return make_error_response(
                ErrorCode.SESSION_NOT_FOUND,
                f"Session {session_id} not found",
                status_code=404,
            )
        return EndSessionResponse(success=True, session_id=session_id)

    # =========================================================================
    # Health Check
    # =========================================================================

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
            service="seabattle",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Sea Battle Server",
            "version": __version__,
            "socket": "/ws",
            "health": "/health",
        }

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _session_info(session) -> SessionInfo:
        return SessionInfo(
            session_id=session.session_id,
            phase=session.phase.value,
            current_turn=(
                session.current_turn.value if session.phase == Phase.COMBAT else None
            ),
            winner=session.winner.value if session.winner else None,
            players_ready={
                role.value: board.is_ready for role, board in session.boards.items()
            },
            created_at=session.created_at,
        )

    return app


# For running directly: uvicorn seabattle.api.app:app
app = create_app()
