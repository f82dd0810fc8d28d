"""
Board - One player's private grid.

Design principles:
- Coordinates are 1-based, as they arrive on the wire
- Each cell leaves its initial state at most once
- The owner sees their pieces, the opponent only sees hits and misses
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .errors import (
    AlreadyTargetedError,
    BoardFullError,
    CellOccupiedError,
    OutOfRangeError,
)


BOARD_SIZE = 10

# One 4-cell, two 3-cell, three 2-cell and four 1-cell pieces.
FLEET: tuple[int, ...] = (4, 3, 3, 2, 2, 2, 1, 1, 1, 1)
PLACEMENT_TARGET = sum(FLEET)


class Cell(str, Enum):
    """Cell states, valued by their wire symbol."""
    EMPTY = ""
    OCCUPIED = "S"
    HIT = "X"
    MISS = "*"


class ShotResult(Enum):
    """Outcome of firing at a cell."""
    HIT = "hit"
    MISS = "miss"


def _empty_grid(size: int) -> list[list[Cell]]:
    return [[Cell.EMPTY for _ in range(size)] for _ in range(size)]


@dataclass
class Board:
    """
    A fixed N x N grid of cells.

    Placement mutates it until it is ready; after that only the
    opponent's fire does.
    """
    size: int = BOARD_SIZE
    target: int = PLACEMENT_TARGET
    grid: list[list[Cell]] = field(default_factory=list)

    def __post_init__(self):
        if not self.grid:
            self.grid = _empty_grid(self.size)

    # =========================================================================
    # Queries
    # =========================================================================

    def cell(self, row: int, col: int) -> Cell:
        self._check_bounds(row, col)
        return self.grid[row - 1][col - 1]

    def remaining_pieces(self) -> int:
        """Count of cells still occupied (placed and never hit)."""
        return self._count(Cell.OCCUPIED)

    def placed_pieces(self) -> int:
        """Count of cells that ever held a piece."""
        return self._count(Cell.OCCUPIED) + self._count(Cell.HIT)

    @property
    def is_ready(self) -> bool:
        return self.placed_pieces() == self.target

    @property
    def is_defeated(self) -> bool:
        return self.is_ready and self.remaining_pieces() == 0

    def view(self, reveal: bool = True) -> list[list[Cell]]:
        """
        Project the grid for a recipient.

        Args:
            reveal: True for the owner. When False, occupied cells
                are shown as empty.
        """
        if reveal:
            return [list(row) for row in self.grid]
        return [
            [Cell.EMPTY if cell == Cell.OCCUPIED else cell for cell in row]
            for row in self.grid
        ]

    # =========================================================================
    # Mutations
    # =========================================================================

    def place(self, row: int, col: int) -> None:
        """Place one piece cell. Raises GameError subclasses on rejection."""
        self._check_bounds(row, col)
        if self.is_ready:
            raise BoardFullError()
        if self.grid[row - 1][col - 1] != Cell.EMPTY:
            raise CellOccupiedError()
        self.grid[row - 1][col - 1] = Cell.OCCUPIED

    def fire(self, row: int, col: int) -> ShotResult:
        """Resolve a shot at this board."""
        self._check_bounds(row, col)
        current = self.grid[row - 1][col - 1]
        if current in (Cell.HIT, Cell.MISS):
            raise AlreadyTargetedError()

        if current == Cell.OCCUPIED:
            self.grid[row - 1][col - 1] = Cell.HIT
            return ShotResult.HIT
        self.grid[row - 1][col - 1] = Cell.MISS
        return ShotResult.MISS

    def reset(self) -> None:
        self.grid = _empty_grid(self.size)

    # =========================================================================
    # Helpers
    # =========================================================================

    def in_bounds(self, row: int, col: int) -> bool:
        return 1 <= row <= self.size and 1 <= col <= self.size

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfRangeError()

    def _count(self, state: Cell) -> int:
        return sum(1 for row in self.grid for cell in row if cell == state)
