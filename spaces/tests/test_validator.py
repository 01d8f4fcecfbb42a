"""
Tests for board validation.

Tests:
- Structural checks (size, grid shape, empty sequence)
- Movement and trap placement rules
- Supermove constraints
- Goal and full-traversal requirements
"""

import pytest

from ..engine_core.board import Board, BoardMove, MoveKind, Position
from ..engine_core.validator import (
    BoardValidationError,
    RejectReason,
    is_board_playable,
    validate_board,
    validate_board_or_raise,
)


FULL_2 = [["piece", "piece"], ["piece", "piece"]]
FULL_3 = [["piece"] * 3 for _ in range(3)]


class TestStructure:
    """Tests for size and grid checks."""

    def test_empty_sequence_rejected(self, make_board):
        """A board with no moves is not playable."""
        board = make_board([["empty", "empty"], ["empty", "empty"]], [])
        result = validate_board(board)
        assert not result.valid
        assert result.reason == RejectReason.EMPTY_SEQUENCE

    @pytest.mark.parametrize("size", [0, 1, 100])
    def test_size_out_of_range_rejected(self, make_board, size):
        """Board sizes outside 2..99 are rejected before anything else."""
        board = make_board([["piece"]], [("piece", 0, 0)], size=size)
        result = validate_board(board)
        assert result.reason == RejectReason.INVALID_SIZE

    def test_grid_smaller_than_size_rejected(self, make_board):
        """Grid must be exactly boardSize x boardSize."""
        board = make_board(FULL_2, [("piece", 1, 0)], size=3)
        assert validate_board(board).reason == RejectReason.GRID_MISMATCH

    def test_ragged_grid_rejected(self, make_board):
        """Every grid row must have boardSize cells."""
        board = make_board([["piece", "piece"], ["piece"]], [("piece", 1, 0)])
        assert validate_board(board).reason == RejectReason.GRID_MISMATCH


class TestValidBoards:
    """Boards that must be accepted."""

    def test_golden_board(self, golden_board):
        """Supermove on the start square, then up and out."""
        result = validate_board(golden_board)
        assert result.valid
        assert result.errors == []
        assert result.reason is None

    def test_orthogonal_moves_in_all_directions(self, make_board):
        """Up, right, down, right, up, up, left, then the goal."""
        board = make_board(
            FULL_3,
            [
                ("piece", 2, 0),
                ("piece", 1, 0),
                ("piece", 1, 1),
                ("piece", 2, 1),
                ("piece", 2, 2),
                ("piece", 1, 2),
                ("piece", 0, 2),
                ("piece", 0, 1),
                ("final", -1, 1),
            ],
        )
        assert is_board_playable(board)

    def test_trap_adjacent_then_avoided(self, make_board):
        """A trap beside the piece is fine as long as the piece walks around it."""
        board = make_board(
            [["empty", "piece", "empty"], ["empty", "piece", "empty"], ["trap", "piece", "empty"]],
            [("piece", 2, 1), ("trap", 2, 0), ("piece", 1, 1), ("piece", 0, 1), ("final", -1, 1)],
        )
        assert is_board_playable(board)

    def test_multiple_supermoves(self, make_board):
        """Each supermove followed by a move away is legal."""
        board = make_board(
            [["piece", "empty", "empty"], ["trap", "empty", "empty"], ["trap", "empty", "empty"]],
            [
                ("piece", 2, 0),
                ("trap", 2, 0),
                ("piece", 1, 0),
                ("trap", 1, 0),
                ("piece", 0, 0),
                ("final", -1, 0),
            ],
        )
        assert is_board_playable(board)

    def test_first_move_can_start_anywhere(self, make_board):
        """The first placement is not adjacency-checked."""
        board = make_board(FULL_2, [("piece", 0, 1), ("piece", 1, 1), ("final", -1, 1)])
        assert is_board_playable(board)

    def test_validation_is_idempotent(self, golden_board, make_board):
        """Validating twice gives the same answer."""
        bad = make_board(FULL_2, [("piece", 1, 0), ("piece", 0, 1)])
        assert validate_board(golden_board) == validate_board(golden_board)
        assert validate_board(bad) == validate_board(bad)


class TestMovementRules:
    """Tests for piece movement."""

    def test_out_of_bounds_rejected(self, make_board):
        board = make_board(FULL_2, [("piece", 2, 0), ("final", -1, 0)])
        result = validate_board(board)
        assert result.reason == RejectReason.OUT_OF_BOUNDS
        assert result.move_index == 0

    def test_piece_on_empty_cell_rejected(self, make_board):
        """A piece move must land on a piece or trap cell."""
        board = make_board(
            [["empty", "empty"], ["piece", "empty"]],
            [("piece", 1, 0), ("piece", 0, 0), ("final", -1, 0)],
        )
        result = validate_board(board)
        assert result.reason == RejectReason.CELL_MISMATCH
        assert result.move_index == 1

    def test_diagonal_move_rejected(self, make_board):
        board = make_board(
            [["empty", "piece"], ["piece", "empty"]],
            [("piece", 1, 0), ("piece", 0, 1), ("final", -1, 1)],
        )
        assert validate_board(board).reason == RejectReason.NOT_ADJACENT

    def test_diagonal_after_trap_rejected(self, make_board):
        """Placing a trap does not let the piece step diagonally."""
        board = make_board(
            [["piece", "empty"], ["trap", "piece"]],
            [("piece", 1, 1), ("trap", 1, 0), ("piece", 0, 0), ("final", -1, 0)],
        )
        result = validate_board(board)
        assert result.reason == RejectReason.NOT_ADJACENT
        assert result.move_index == 2

    def test_jump_rejected(self, make_board):
        """Moving two squares at once is illegal."""
        board = make_board(FULL_3, [("piece", 2, 0), ("piece", 0, 0), ("final", -1, 0)])
        assert validate_board(board).reason == RejectReason.NOT_ADJACENT

    def test_piece_into_trap_rejected(self, make_board):
        board = make_board(
            [["piece", "empty", "empty"], ["trap", "empty", "empty"], ["piece", "empty", "empty"]],
            [("piece", 2, 0), ("trap", 1, 0), ("piece", 1, 0), ("piece", 0, 0), ("final", -1, 0)],
        )
        result = validate_board(board)
        assert result.reason == RejectReason.MOVE_INTO_TRAP
        assert result.move_index == 2

    def test_piece_back_onto_supermove_square_rejected(self, make_board):
        """After leaving a supermove square the piece may not return to it."""
        board = make_board(
            [["piece", "empty", "empty"], ["piece", "empty", "empty"], ["trap", "empty", "empty"]],
            [
                ("piece", 2, 0),
                ("trap", 2, 0),
                ("piece", 1, 0),
                ("piece", 2, 0),
                ("final", -1, 0),
            ],
        )
        assert validate_board(board).reason == RejectReason.MOVE_INTO_TRAP


class TestTrapRules:
    """Tests for trap placement."""

    def test_trap_before_piece_rejected(self, make_board):
        board = make_board(
            [["piece", "empty"], ["trap", "piece"]],
            [("trap", 1, 0), ("piece", 1, 1), ("piece", 0, 1), ("final", -1, 1)],
        )
        assert validate_board(board).reason == RejectReason.TRAP_BEFORE_PIECE

    def test_trap_not_adjacent_rejected(self, make_board):
        board = make_board(
            [["trap", "empty", "empty"], ["piece", "empty", "empty"], ["piece", "empty", "empty"]],
            [("piece", 2, 0), ("trap", 0, 0), ("piece", 1, 0), ("final", -1, 0)],
        )
        assert validate_board(board).reason == RejectReason.TRAP_NOT_ADJACENT

    def test_trap_diagonal_rejected(self, make_board):
        board = make_board(
            [["empty", "empty", "empty"], ["piece", "trap", "empty"], ["piece", "empty", "empty"]],
            [("piece", 2, 0), ("trap", 1, 1), ("piece", 1, 0), ("final", -1, 0)],
        )
        assert validate_board(board).reason == RejectReason.TRAP_NOT_ADJACENT

    def test_trap_on_non_trap_cell_rejected(self, make_board):
        """A trap move must match a trap cell in the grid."""
        board = make_board(FULL_2, [("piece", 1, 0), ("trap", 1, 1)])
        assert validate_board(board).reason == RejectReason.CELL_MISMATCH

    def test_too_many_traps_rejected(self, make_board):
        """A 2x2 board allows a single trap."""
        board = make_board(
            [["piece", "empty"], ["trap", "trap"]],
            [
                ("piece", 1, 0),
                ("trap", 1, 1),
                ("trap", 1, 0),
                ("piece", 0, 0),
                ("final", -1, 0),
            ],
        )
        result = validate_board(board)
        assert result.reason == RejectReason.TOO_MANY_TRAPS
        assert result.move_index is None


class TestSupermove:
    """Tests for traps placed under the piece."""

    def test_supermove_then_goal_rejected(self, make_board):
        """The piece must leave the supermove square before reaching the goal."""
        board = make_board(
            [["piece", "empty"], ["trap", "empty"]],
            [("piece", 1, 0), ("trap", 1, 0), ("final", -1, 0)],
        )
        result = validate_board(board)
        assert result.reason == RejectReason.UNRESOLVED_SUPERMOVE
        assert result.move_index == 2

    def test_supermove_then_stay_rejected(self, make_board):
        board = make_board(
            [["piece", "empty"], ["trap", "empty"]],
            [("piece", 1, 0), ("trap", 1, 0), ("piece", 1, 0), ("piece", 0, 0), ("final", -1, 0)],
        )
        assert validate_board(board).reason == RejectReason.UNRESOLVED_SUPERMOVE

    def test_supermove_then_another_trap_rejected(self, make_board):
        board = make_board(
            [["piece", "empty", "empty"], ["piece", "empty", "empty"], ["trap", "trap", "empty"]],
            [("piece", 2, 0), ("trap", 2, 0), ("trap", 2, 1), ("piece", 1, 0), ("piece", 0, 0), ("final", -1, 0)],
        )
        assert validate_board(board).reason == RejectReason.UNRESOLVED_SUPERMOVE

    def test_double_supermove_rejected(self, make_board):
        board = make_board(
            [["piece", "empty"], ["trap", "empty"]],
            [("piece", 1, 0), ("trap", 1, 0), ("trap", 1, 0), ("piece", 0, 0), ("final", -1, 0)],
        )
        assert validate_board(board).reason == RejectReason.UNRESOLVED_SUPERMOVE

    def test_sequence_ending_on_supermove_rejected(self, make_board):
        board = make_board(
            [["piece", "empty"], ["trap", "empty"]],
            [("piece", 0, 0), ("piece", 1, 0), ("trap", 1, 0)],
        )
        result = validate_board(board)
        assert result.reason == RejectReason.UNRESOLVED_SUPERMOVE
        assert result.move_index is None


class TestGoalRules:
    """Tests for the final move and full traversal."""

    def test_missing_final_rejected(self, make_board):
        board = make_board(FULL_2, [("piece", 1, 0), ("piece", 0, 0)])
        assert validate_board(board).reason == RejectReason.MISSING_FINAL

    def test_final_off_goal_row_rejected(self, make_board):
        board = make_board(FULL_2, [("piece", 1, 0), ("piece", 0, 0), ("final", 0, 0)])
        assert validate_board(board).reason == RejectReason.INVALID_FINAL

    def test_final_column_out_of_bounds_rejected(self, make_board):
        board = make_board(FULL_2, [("piece", 1, 0), ("piece", 0, 0), ("final", -1, 2)])
        assert validate_board(board).reason == RejectReason.INVALID_FINAL

    def test_skipped_row_rejected(self, make_board):
        """Reaching the goal without visiting every row is illegal."""
        board = make_board(FULL_3, [("piece", 2, 0), ("piece", 2, 1), ("final", -1, 1)])
        result = validate_board(board)
        assert result.reason == RejectReason.ROWS_NOT_COVERED
        assert "0, 1" in result.errors[0]


class TestWarningsAndErrors:
    """Tests for warnings and the raising wrapper."""

    def test_order_mismatch_is_only_a_warning(self):
        board = Board(
            board_size=2,
            grid=FULL_2,
            sequence=[
                BoardMove(Position(1, 0), MoveKind.PIECE, 1),
                BoardMove(Position(0, 0), MoveKind.PIECE, 5),
                BoardMove(Position(-1, 0), MoveKind.FINAL, 3),
            ],
        )
        result = validate_board(board)
        assert result.valid
        assert any("order 5" in w for w in result.warnings)

    def test_moves_after_final_warn(self, make_board):
        board = make_board(FULL_2, [("piece", 1, 0), ("piece", 0, 0), ("final", -1, 0), ("piece", 0, 1)])
        result = validate_board(board)
        assert result.valid
        assert any("never played" in w for w in result.warnings)

    def test_raise_on_invalid(self, make_board):
        board = make_board(FULL_2, [("piece", 1, 0), ("piece", 0, 0)])
        with pytest.raises(BoardValidationError) as exc_info:
            validate_board_or_raise(board)
        assert exc_info.value.reason == RejectReason.MISSING_FINAL
        assert len(exc_info.value.errors) == 1

    def test_raise_passes_valid_board(self, golden_board):
        assert validate_board_or_raise(golden_board).valid
