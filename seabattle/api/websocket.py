"""
WebSocket Connection - Starlette WebSocket behind the Connection contract.
"""

from __future__ import annotations

from fastapi import WebSocket
from fastapi.websockets import WebSocketState

from ..session.transport import Connection, TransportSendError


class WebSocketConnection(Connection):
    """A player connected through the game WebSocket."""

    def __init__(self, websocket: WebSocket, connection_id: str | None = None):
        super().__init__(connection_id)
        self.websocket = websocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send_text(self, data: str) -> None:
        try:
            await self.websocket.send_text(data)
        except Exception as e:
            raise TransportSendError(str(e) or type(e).__name__) from e

    async def close(self) -> None:
        try:
            await self.websocket.close()
        except Exception as e:
            raise TransportSendError(str(e) or type(e).__name__) from e
