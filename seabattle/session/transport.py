"""
Transport - The connection contract sessions talk through.

A Connection is one persistent, bidirectional link to a player. The
session layer only needs to send text frames and close the link;
receiving is driven by whoever owns the socket, which feeds frames to
SessionActor.on_message / on_close.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import uuid


class TransportSendError(Exception):
    """Raised when a frame cannot be delivered or a link cannot be closed."""


class Connection(ABC):
    """Abstract player connection."""

    def __init__(self, connection_id: str | None = None):
        self.connection_id = connection_id or uuid.uuid4().hex

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether frames can still be sent."""

    @abstractmethod
    async def send_text(self, data: str) -> None:
        """Send one text frame. Raises TransportSendError on failure."""

    @abstractmethod
    async def close(self) -> None:
        """Close the link. Raises TransportSendError on failure."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.connection_id})"
