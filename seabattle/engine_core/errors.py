"""
Game Errors - Rule violations raised by the board and the session.

Every error here is scoped to a single incoming message:
- The sender gets an incorrectRequest carrying the message text
- No state is mutated
- The session keeps running
"""

from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable rejection codes."""
    MALFORMED_MESSAGE = "MALFORMED_MESSAGE"
    OUT_OF_TURN = "OUT_OF_TURN"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    ALREADY_TARGETED = "ALREADY_TARGETED"
    CELL_OCCUPIED = "CELL_OCCUPIED"
    BOARD_FULL = "BOARD_FULL"
    INVALID_PHASE = "INVALID_PHASE"


class GameError(Exception):
    """Base class for rejected moves."""

    code: ErrorCode = ErrorCode.MALFORMED_MESSAGE
    default_message = "Incorrect request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class OutOfTurnError(GameError):
    code = ErrorCode.OUT_OF_TURN
    default_message = "Not your turn"


class OutOfRangeError(GameError):
    code = ErrorCode.OUT_OF_RANGE
    default_message = "Out of range"


class AlreadyTargetedError(GameError):
    code = ErrorCode.ALREADY_TARGETED
    default_message = "You have already moved there"


class CellOccupiedError(GameError):
    code = ErrorCode.CELL_OCCUPIED
    default_message = "A piece is already placed there"


class BoardFullError(GameError):
    code = ErrorCode.BOARD_FULL
    default_message = "All pieces are already placed"


class InvalidPhaseError(GameError):
    """Raised when an action does not belong to the current phase."""
    code = ErrorCode.INVALID_PHASE
    default_message = "Action not allowed in this phase"
