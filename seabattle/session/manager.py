"""
Session Manager - Pairs connections and tracks live sessions.

LIFECYCLE:
1. A connection joins and waits for an opponent
2. The next connection to join completes the pair
3. A Session + SessionActor are created, gameStarted goes to both
4. During the game every frame is routed to the pair's actor
5. Either side disconnects, or the session is ended explicitly:
   - the other side gets gameAborted and is closed
   - the session is forgotten, ALL state dropped

PERSISTENCE RULES:
- Sessions are in-memory only
- Nothing survives a process restart
- A dropped connection cannot rejoin its session
"""

from __future__ import annotations
import logging

from .actor import SessionActor
from .session import PlayerRole, Session
from .transport import Connection


logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Pair waiting connections
    - Create sessions for pairs
    - Route connections to their session
    - Clean up ended sessions
    """

    def __init__(self):
        self._sessions: dict[str, SessionActor] = {}
        self._by_connection: dict[str, SessionActor] = {}
        self._waiting: Connection | None = None

    def create_session(self, connection_a: Connection, connection_b: Connection) -> SessionActor:
        """
        Create and start a session for two connections.

        The first connection takes the first seat and fires first.
        Must be called from within the running event loop.
        """
        session = Session()
        actor = SessionActor(
            session,
            {PlayerRole.FIRST: connection_a, PlayerRole.SECOND: connection_b},
            on_destroyed=self._forget,
        )

        self._sessions[actor.session_id] = actor
        self._by_connection[connection_a.connection_id] = actor
        self._by_connection[connection_b.connection_id] = actor

        logger.info(
            "Session %s created for %s and %s",
            actor.session_id, connection_a, connection_b,
        )
        actor.start()
        return actor

    def join(self, connection: Connection) -> SessionActor | None:
        """
        Pair a connection with the waiting one, or make it wait.

        Returns the new session's actor, or None if the connection waits.
        """
        waiting = self._waiting
        if (
            waiting is not None
            and waiting.connection_id != connection.connection_id
            and waiting.is_open
        ):
            self._waiting = None
            return self.create_session(waiting, connection)

        self._waiting = connection
        logger.debug("%s waiting for an opponent", connection)
        return None

    def session_for(self, connection: Connection) -> SessionActor | None:
        return self._by_connection.get(connection.connection_id)

    def disconnect(self, connection: Connection) -> None:
        """Forward a closed connection to its session, or stop it waiting."""
        if self._waiting is not None and self._waiting.connection_id == connection.connection_id:
            self._waiting = None
            return

        actor = self._by_connection.get(connection.connection_id)
        if actor is not None:
            actor.on_close(connection)

    def get_session(self, session_id: str) -> SessionActor | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        Abort a session from outside.

        Both players get gameAborted and are disconnected. Returns False
        if there is no such session.
        """
        actor = self._sessions.get(session_id)
        if actor is None:
            return False
        actor.destroy()
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions that are not torn down."""
        return [
            sid for sid, actor in self._sessions.items()
            if not actor.session.destroyed
        ]

    @property
    def waiting_count(self) -> int:
        return 1 if self._waiting is not None else 0

    def _forget(self, actor: SessionActor) -> None:
        self._sessions.pop(actor.session_id, None)
        for connection in actor.connections.values():
            self._by_connection.pop(connection.connection_id, None)
        logger.info("Session %s removed", actor.session_id)
