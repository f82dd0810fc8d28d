"""
Pytest fixtures for Sea Battle tests.
"""

import json

import pytest

from ..protocol.messages import Move, PlayerPutMessage
from ..session.session import PlayerRole, Session
from ..session.transport import Connection, TransportSendError


# Rows 1 and 2, fully occupied: 20 cells.
FLEET_CELLS = [(row, col) for row in (1, 2) for col in range(1, 11)]


class FakeConnection(Connection):
    """In-memory connection that records decoded frames."""

    def __init__(self, name: str, fail_sends: bool = False):
        super().__init__(name)
        self.sent: list[dict] = []
        self.open = True
        self.fail_sends = fail_sends
        self.close_calls = 0

    @property
    def is_open(self) -> bool:
        return self.open

    async def send_text(self, data: str) -> None:
        if self.fail_sends or not self.open:
            raise TransportSendError("connection refused")
        self.sent.append(json.loads(data))

    async def close(self) -> None:
        self.close_calls += 1
        self.open = False

    def types(self) -> list[str]:
        return [message["type"] for message in self.sent]


@pytest.fixture
def fleet_cells() -> list[tuple[int, int]]:
    return list(FLEET_CELLS)


@pytest.fixture
def connection_factory():
    """Build FakeConnection instances."""
    return FakeConnection


@pytest.fixture
def session() -> Session:
    """A session with the opening broadcast already sent."""
    session = Session(session_id="test_session")
    session.start()
    return session


@pytest.fixture
def combat_session(session: Session) -> Session:
    """A session where both players have placed rows 1-2 and combat has begun."""
    for role in PlayerRole:
        for row, col in FLEET_CELLS:
            session.handle(role, PlayerPutMessage(move=Move(row=row, col=col)))
    return session
