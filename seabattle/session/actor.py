"""
Session Actor - Serializes everything that happens to one session.

Both connections feed a single mailbox:
- on_message / on_close / destroy only enqueue
- One worker task applies events to the Session, in order
- Outbound messages go to a per-connection outbox

Each outbox is drained by its own writer task, so the worker never waits
on a send and frames to one connection keep their order. A failed send is
logged and dropped; the state change that produced it stands.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable
import asyncio
import logging

from ..protocol.codec import decode_client_message, encode_server_message
from ..protocol.messages import ServerMessage
from .session import Outbound, PlayerRole, Session
from .transport import Connection, TransportSendError


logger = logging.getLogger(__name__)


@dataclass
class _Inbound:
    role: PlayerRole
    raw: Any


@dataclass
class _Closed:
    role: PlayerRole


class _Abort:
    pass


# Outbox sentinel: close the connection and stop writing.
_CLOSE = object()


class SessionActor:
    """
    Mailbox and workers around one Session.

    Usage:
        actor = SessionActor(Session(), {PlayerRole.FIRST: a, PlayerRole.SECOND: b})
        actor.start()                    # inside a running event loop
        actor.on_message(a, raw_frame)
        actor.on_close(b)
        await actor.wait_closed()
    """

    def __init__(
        self,
        session: Session,
        connections: dict[PlayerRole, Connection],
        on_destroyed: Callable[[SessionActor], None] | None = None,
    ):
        self.session = session
        self.connections = connections
        self._roles = {conn.connection_id: role for role, conn in connections.items()}
        self._on_destroyed = on_destroyed

        self._mailbox: asyncio.Queue = asyncio.Queue()
        self._outboxes: dict[PlayerRole, asyncio.Queue] = {
            role: asyncio.Queue() for role in connections
        }
        self._worker: asyncio.Task | None = None
        self._writers: dict[PlayerRole, asyncio.Task] = {}
        self._abort_requested = False

    @property
    def session_id(self) -> str:
        return self.session.session_id

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Send the opening broadcast and start the workers. Needs a running loop."""
        self._writers = {
            role: asyncio.create_task(self._write(role)) for role in self.connections
        }
        self._dispatch(self.session.start())
        self._worker = asyncio.create_task(self._run())

    def destroy(self) -> None:
        """Request teardown. Safe to call any number of times."""
        if self._abort_requested or self.session.destroyed:
            return
        self._abort_requested = True
        self._mailbox.put_nowait(_Abort())

    async def wait_closed(self) -> None:
        """Wait until the session is torn down and all writers have exited."""
        if self._worker is not None:
            await self._worker

    # =========================================================================
    # Inbound hooks
    # =========================================================================

    def on_message(self, connection: Connection, raw: Any) -> None:
        role = self._roles.get(connection.connection_id)
        if role is None or self.session.destroyed:
            return
        self._mailbox.put_nowait(_Inbound(role, raw))

    def on_close(self, connection: Connection) -> None:
        role = self._roles.get(connection.connection_id)
        if role is None or self.session.destroyed:
            return
        self._mailbox.put_nowait(_Closed(role))

    # =========================================================================
    # Workers
    # =========================================================================

    async def _run(self) -> None:
        while not self.session.destroyed:
            event = await self._mailbox.get()
            try:
                outbound = self._apply(event)
            except Exception:
                # Scoped to this event; the session keeps serving.
                logger.exception(
                    "Session %s: failed to apply %s", self.session_id, type(event).__name__,
                )
                continue
            self._dispatch(outbound)

        for outbox in self._outboxes.values():
            outbox.put_nowait(_CLOSE)
        try:
            results = await asyncio.gather(*self._writers.values(), return_exceptions=True)
            for role, result in zip(self._writers, results):
                if isinstance(result, BaseException):
                    logger.error(
                        "Session %s: writer for %s failed: %r",
                        self.session_id, role.value, result,
                    )
        finally:
            if self._on_destroyed is not None:
                self._on_destroyed(self)

    def _apply(self, event) -> list[Outbound]:
        if isinstance(event, _Inbound):
            return self.session.handle(event.role, decode_client_message(event.raw))
        if isinstance(event, _Closed):
            logger.info("Session %s: %s disconnected", self.session_id, event.role.value)
            return self.session.connection_closed(event.role)
        return self.session.teardown()

    async def _write(self, role: PlayerRole) -> None:
        connection = self.connections[role]
        outbox = self._outboxes[role]

        while True:
            item = await outbox.get()
            if item is _CLOSE:
                break
            await self._send(connection, item)

        if connection.is_open:
            try:
                await connection.close()
            except TransportSendError as e:
                logger.warning(
                    "Session %s: closing %s failed: %s", self.session_id, connection, e,
                )

    async def _send(self, connection: Connection, message: ServerMessage) -> None:
        try:
            await connection.send_text(encode_server_message(message))
        except TransportSendError as e:
            logger.warning(
                "Session %s: sending %s to %s failed: %s",
                self.session_id, message.type, connection, e,
            )

    def _dispatch(self, outbound: list[Outbound]) -> None:
        for item in outbound:
            self._outboxes[item.role].put_nowait(item.message)
