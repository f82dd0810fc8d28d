"""
Engine Core - Board model and rule errors.

The engine core is the leaf of the system:
1. Holds a player's grid
2. Validates placement and fire coordinates
3. Counts placed and remaining pieces
"""

from .board import Board, Cell, ShotResult, BOARD_SIZE, FLEET, PLACEMENT_TARGET
from .errors import (
    ErrorCode,
    GameError,
    OutOfTurnError,
    OutOfRangeError,
    AlreadyTargetedError,
    CellOccupiedError,
    BoardFullError,
    InvalidPhaseError,
)

__all__ = [
    "Board",
    "Cell",
    "ShotResult",
    "BOARD_SIZE",
    "FLEET",
    "PLACEMENT_TARGET",
    "ErrorCode",
    "GameError",
    "OutOfTurnError",
    "OutOfRangeError",
    "AlreadyTargetedError",
    "CellOccupiedError",
    "BoardFullError",
    "InvalidPhaseError",
]
