"""
Session - The state machine for one paired match.

PHASES:
1. PLACEMENT - each player fills their own board, independently
2. COMBAT    - players alternate firing at the opponent's board
3. FINISHED  - one fleet is gone; only a restart is accepted

The session is synchronous and transport-agnostic:
- handle() applies one decoded client message
- It returns the outbound messages, addressed by player role
- It never waits on a send

Both boards live in slots indexed by PlayerRole. A connection is mapped
to its role once, by whoever owns the connections (see SessionActor).
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import time
import uuid

from ..engine_core.board import Board, BOARD_SIZE, PLACEMENT_TARGET
from ..engine_core.errors import GameError, InvalidPhaseError, OutOfTurnError
from ..protocol.codec import DecodedMessage, MalformedMessage
from ..protocol.messages import (
    Move,
    GameState,
    PlayerPutMessage,
    PlayerRollMessage,
    RepeatGameMessage,
    ServerMessage,
    GameStartedMessage,
    ChangePlayerMessage,
    ResultPutMessage,
    GameResultMessage,
    GameAbortedMessage,
    IncorrectRequestMessage,
)


logger = logging.getLogger(__name__)


class Phase(Enum):
    """Phase of a match."""
    PLACEMENT = "placement"
    COMBAT = "combat"
    FINISHED = "finished"


class PlayerRole(Enum):
    """Seat in the match. FIRST fires first."""
    FIRST = "player_1"
    SECOND = "player_2"

    @property
    def opponent(self) -> PlayerRole:
        return PlayerRole.SECOND if self is PlayerRole.FIRST else PlayerRole.FIRST


@dataclass
class Outbound:
    """A server message addressed to one player."""
    role: PlayerRole
    message: ServerMessage


class Session:
    """
    One match between two players.

    Usage:
        session = Session()
        outbound = session.start()              # gameStarted x2
        outbound = session.handle(PlayerRole.FIRST, decoded_message)
        outbound = session.connection_closed(PlayerRole.SECOND)
    """

    def __init__(
        self,
        session_id: str | None = None,
        board_size: int = BOARD_SIZE,
        placement_target: int = PLACEMENT_TARGET,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.created_at = time.time()
        self.board_size = board_size
        self.placement_target = placement_target

        self.phase = Phase.PLACEMENT
        self.current_turn = PlayerRole.FIRST
        self.winner: PlayerRole | None = None
        self.boards: dict[PlayerRole, Board] = self._new_boards()

        self.destroyed = False
        self._connected: dict[PlayerRole, bool] = {role: True for role in PlayerRole}

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> list[Outbound]:
        """
        (Re)enter the placement phase with empty boards.

        Used at construction and for every restart request.
        """
        self.boards = self._new_boards()
        self.phase = Phase.PLACEMENT
        self.current_turn = PlayerRole.FIRST
        self.winner = None

        logger.info("Session %s: placement started", self.session_id)
        return [
            Outbound(role, self._board_update(GameStartedMessage, role))
            for role in PlayerRole
        ]

    def connection_closed(self, role: PlayerRole) -> list[Outbound]:
        """Record that a player's connection is gone and tear the session down."""
        self._connected[role] = False
        return self.teardown()

    def teardown(self) -> list[Outbound]:
        """
        Destroy the session. Safe to call more than once.

        Returns a gameAborted for every player still connected, only on
        the first call.
        """
        if self.destroyed:
            return []
        self.destroyed = True
        self.phase = Phase.FINISHED

        logger.info("Session %s: torn down", self.session_id)
        return [
            Outbound(role, GameAbortedMessage())
            for role in PlayerRole
            if self._connected[role]
        ]

    def is_connected(self, role: PlayerRole) -> bool:
        return self._connected[role]

    # =========================================================================
    # Message application
    # =========================================================================

    def handle(self, role: PlayerRole, message: DecodedMessage) -> list[Outbound]:
        """
        Apply one decoded message from a player.

        Rejections produce a single incorrectRequest to the sender and
        leave the session untouched.
        """
        if self.destroyed:
            return []

        if isinstance(message, MalformedMessage):
            return [self._reject(role, message.message)]

        handlers = {
            PlayerPutMessage: lambda: self._on_place(role, message.move),
            PlayerRollMessage: lambda: self._on_fire(role, message.move),
            RepeatGameMessage: self.start,
        }
        handler = handlers.get(type(message))
        if handler is None:
            return [self._reject(role, f"Unsupported message: {type(message).__name__}")]

        try:
            return handler()
        except GameError as e:
            logger.debug(
                "Session %s: rejected %s from %s: %s",
                self.session_id, message.type, role.value, e.code.value,
            )
            return [self._reject(role, e.message)]

    def _on_place(self, role: PlayerRole, move: Move) -> list[Outbound]:
        if self.phase == Phase.FINISHED:
            raise InvalidPhaseError("Game is over")
        if self.phase == Phase.COMBAT:
            raise InvalidPhaseError("Placement is over")

        self.boards[role].place(move.row, move.col)

        if self.boards[role].is_ready and self.boards[role.opponent].is_ready:
            self.phase = Phase.COMBAT
            logger.info(
                "Session %s: both boards ready, %s fires first",
                self.session_id, self.current_turn.value,
            )
            return [
                Outbound(role, self._board_update(ChangePlayerMessage, role)),
                Outbound(role.opponent, self._board_update(ChangePlayerMessage, role.opponent)),
            ]

        opponent = role.opponent
        return [
            Outbound(role, self._board_update(ChangePlayerMessage, role)),
            Outbound(
                opponent,
                ResultPutMessage(state=self._state_for(opponent), my_turn=self._my_turn(opponent)),
            ),
        ]

    def _on_fire(self, role: PlayerRole, move: Move) -> list[Outbound]:
        if self.phase == Phase.PLACEMENT:
            raise InvalidPhaseError("Pieces are still being placed")
        if self.phase == Phase.FINISHED:
            raise InvalidPhaseError("Game is over")
        if role != self.current_turn:
            raise OutOfTurnError()

        opponent = role.opponent
        target = self.boards[opponent]
        result = target.fire(move.row, move.col)
        logger.debug(
            "Session %s: %s fired at (%d, %d): %s",
            self.session_id, role.value, move.row, move.col, result.value,
        )

        if target.remaining_pieces() == 0:
            self.phase = Phase.FINISHED
            self.winner = role
            logger.info("Session %s: %s wins", self.session_id, role.value)
            return [
                Outbound(role, GameResultMessage(win=True)),
                Outbound(opponent, GameResultMessage(win=False)),
            ]

        self.current_turn = opponent
        return [
            Outbound(opponent, self._board_update(ChangePlayerMessage, opponent)),
            Outbound(role, self._board_update(ChangePlayerMessage, role)),
        ]

    # =========================================================================
    # Views
    # =========================================================================

    def _state_for(self, role: PlayerRole) -> GameState:
        return GameState(
            player_ready=self.boards[role].is_ready,
            opponent_ready=self.boards[role.opponent].is_ready,
        )

    def _my_turn(self, role: PlayerRole) -> bool:
        return self.phase != Phase.FINISHED and self.current_turn == role

    def _board_update(self, message_cls, role: PlayerRole):
        """Build a gameStarted/changePlayer for one recipient."""
        return message_cls(
            field=self.boards[role].view(reveal=True),
            field_opposite=self.boards[role.opponent].view(reveal=False),
            my_turn=self._my_turn(role),
            state=self._state_for(role),
        )

    def _reject(self, role: PlayerRole, text: str) -> Outbound:
        return Outbound(role, IncorrectRequestMessage(message=text))

    def _new_boards(self) -> dict[PlayerRole, Board]:
        return {
            role: Board(size=self.board_size, target=self.placement_target)
            for role in PlayerRole
        }
