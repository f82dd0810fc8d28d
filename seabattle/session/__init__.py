"""
Session Module - Manages ephemeral match sessions.

A session represents one match between two connections:
- Created when two connections are paired
- Holds both boards and the turn pointer
- Applies moves one at a time through its actor
- Destroyed when either side leaves or it is ended explicitly

Sessions are EPHEMERAL:
- No persistence
- No reconnection
- A finished match can be restarted in place
"""

from .session import Session, Phase, PlayerRole, Outbound
from .actor import SessionActor
from .manager import SessionManager
from .transport import Connection, TransportSendError

__all__ = [
    "Session",
    "Phase",
    "PlayerRole",
    "Outbound",
    "SessionActor",
    "SessionManager",
    "Connection",
    "TransportSendError",
]
