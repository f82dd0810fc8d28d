"""
Tests for the board model.

Tests:
- Placement rules and the placement target
- Fire resolution
- Owner and opponent views
"""

import pytest

from ..engine_core.board import Board, Cell, ShotResult, BOARD_SIZE, FLEET, PLACEMENT_TARGET
from ..engine_core.errors import (
    AlreadyTargetedError,
    BoardFullError,
    CellOccupiedError,
    ErrorCode,
    OutOfRangeError,
)


@pytest.fixture
def full_board(fleet_cells) -> Board:
    board = Board()
    for row, col in fleet_cells:
        board.place(row, col)
    return board


class TestPlacement:
    """Tests for placing pieces."""

    def test_new_board_is_empty(self):
        board = Board()
        assert len(board.grid) == BOARD_SIZE
        assert all(len(row) == BOARD_SIZE for row in board.grid)
        assert board.remaining_pieces() == 0
        assert not board.is_ready

    def test_target_matches_fleet(self):
        """The fleet is 4 + 3*2 + 2*3 + 1*4 cells."""
        assert PLACEMENT_TARGET == 20
        assert sum(FLEET) == PLACEMENT_TARGET

    def test_place_marks_cell(self):
        board = Board()
        board.place(1, 1)
        assert board.cell(1, 1) == Cell.OCCUPIED
        assert board.remaining_pieces() == 1

    def test_place_on_occupied_cell_fails(self):
        board = Board()
        board.place(3, 4)
        with pytest.raises(CellOccupiedError):
            board.place(3, 4)
        assert board.remaining_pieces() == 1

    @pytest.mark.parametrize("row,col", [(0, 1), (1, 0), (11, 5), (5, 11), (-1, -1)])
    def test_place_out_of_range_fails(self, row, col):
        board = Board()
        with pytest.raises(OutOfRangeError) as exc:
            board.place(row, col)
        assert exc.value.code == ErrorCode.OUT_OF_RANGE
        assert board.remaining_pieces() == 0

    def test_corners_are_in_range(self):
        board = Board()
        board.place(1, 1)
        board.place(10, 10)
        assert board.remaining_pieces() == 2

    def test_ready_at_target(self, full_board):
        assert full_board.is_ready
        assert full_board.placed_pieces() == PLACEMENT_TARGET

    def test_full_board_refuses_placement(self, full_board):
        """Once ready, a board never accepts another piece."""
        with pytest.raises(BoardFullError):
            full_board.place(9, 9)
        assert full_board.cell(9, 9) == Cell.EMPTY
        assert full_board.placed_pieces() == PLACEMENT_TARGET

    def test_count_only_grows(self, fleet_cells):
        board = Board()
        counts = []
        for row, col in fleet_cells:
            board.place(row, col)
            counts.append(board.placed_pieces())
        assert counts == sorted(counts)
        assert counts[-1] == PLACEMENT_TARGET


class TestFire:
    """Tests for firing at a board."""

    def test_hit_on_occupied_cell(self, full_board):
        assert full_board.fire(1, 1) == ShotResult.HIT
        assert full_board.cell(1, 1) == Cell.HIT
        assert full_board.remaining_pieces() == PLACEMENT_TARGET - 1

    def test_miss_on_empty_cell(self, full_board):
        assert full_board.fire(5, 5) == ShotResult.MISS
        assert full_board.cell(5, 5) == Cell.MISS
        assert full_board.remaining_pieces() == PLACEMENT_TARGET

    @pytest.mark.parametrize("row,col", [(1, 1), (5, 5)])
    def test_repeat_fire_fails(self, full_board, row, col):
        """A cell leaves its initial state at most once."""
        full_board.fire(row, col)
        before = full_board.view()
        with pytest.raises(AlreadyTargetedError):
            full_board.fire(row, col)
        assert full_board.view() == before

    def test_fire_out_of_range_fails(self, full_board):
        with pytest.raises(OutOfRangeError):
            full_board.fire(11, 1)

    def test_readiness_survives_hits(self, full_board):
        full_board.fire(1, 1)
        assert full_board.is_ready
        assert full_board.placed_pieces() == PLACEMENT_TARGET

    def test_defeated_when_all_hit(self, full_board, fleet_cells):
        for row, col in fleet_cells:
            assert not full_board.is_defeated
            full_board.fire(row, col)
        assert full_board.remaining_pieces() == 0
        assert full_board.is_defeated

    def test_empty_board_is_not_defeated(self):
        assert not Board().is_defeated


class TestView:
    """Tests for owner/opponent projections."""

    def test_owner_sees_pieces(self, full_board):
        view = full_board.view(reveal=True)
        assert view[0][0] == "S"
        assert view[9][9] == ""

    def test_opponent_never_sees_pieces(self, full_board):
        full_board.fire(1, 1)
        full_board.fire(5, 5)
        view = full_board.view(reveal=False)

        assert view[0][0] == "X"
        assert view[4][4] == "*"
        assert all(cell != Cell.OCCUPIED for row in view for cell in row)

    def test_view_is_a_copy(self):
        board = Board()
        view = board.view()
        view[0][0] = Cell.OCCUPIED
        assert board.cell(1, 1) == Cell.EMPTY

    def test_reset(self, full_board):
        full_board.reset()
        assert full_board.remaining_pieces() == 0
        assert not full_board.is_ready
