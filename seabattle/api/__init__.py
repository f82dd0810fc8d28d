"""
API Module - Network interface for game clients.

Players connect over a WebSocket and are paired into sessions. A small
REST surface lists, inspects and aborts sessions for operators.
"""

from .schemas import (
    ErrorCode,
    ErrorResponse,
    SessionInfo,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
)
from .websocket import WebSocketConnection
from .app import create_app

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "SessionInfo",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "WebSocketConnection",
    "create_app",
]
