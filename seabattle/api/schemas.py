"""
Pydantic Schemas for the HTTP side of the API.

The game itself runs over the WebSocket (see seabattle.protocol); these
models only cover the operational endpoints.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has already ended
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    api_version: str = Field("v1", description="API version")


class SessionInfo(BaseModel):
    """Summary of one live session."""
    session_id: str
    phase: str = Field(description="placement, combat, finished")
    current_turn: Optional[str] = Field(None, description="Seat that fires next, in combat")
    winner: Optional[str] = None
    players_ready: dict[str, bool] = Field(default_factory=dict)
    created_at: float = 0.0
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int
    waiting: int = Field(0, description="Connections waiting for an opponent")


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
