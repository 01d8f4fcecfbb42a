"""
Pytest fixtures for Spaces tests.
"""

import pytest

from ..engine_core.board import Board, BoardMove, MoveKind, Position


def build_board(grid, moves, size=None) -> Board:
    """Build a board from grid rows and (kind, row, col) tuples, numbered from 1."""
    sequence = [
        BoardMove(position=Position(row, col), kind=MoveKind(kind), order=i)
        for i, (kind, row, col) in enumerate(moves, start=1)
    ]
    return Board(
        board_size=size if size is not None else len(grid),
        grid=grid,
        sequence=sequence,
    )


@pytest.fixture
def make_board():
    """Factory fixture for ad-hoc boards."""
    return build_board


@pytest.fixture
def golden_board() -> Board:
    """2x2 board with a supermove on the starting square."""
    return build_board(
        [["piece", "empty"], ["trap", "piece"]],
        [("piece", 1, 0), ("trap", 1, 0), ("piece", 0, 0), ("final", -1, 0)],
    )


@pytest.fixture
def winning_board() -> Board:
    """2x2 board that walks the whole bottom and top rows, then reaches the goal."""
    return build_board(
        [["piece", "piece"], ["piece", "piece"]],
        [
            ("piece", 1, 0),
            ("piece", 1, 1),
            ("piece", 0, 1),
            ("piece", 0, 0),
            ("final", -1, 0),
        ],
    )


@pytest.fixture
def losing_board() -> Board:
    """2x2 path that never reaches the goal (not playable on its own)."""
    return build_board(
        [["piece", "empty"], ["piece", "piece"]],
        [("piece", 1, 1), ("piece", 1, 0), ("piece", 0, 0)],
    )


@pytest.fixture
def column_board() -> Board:
    """2x2 board that climbs the right column straight to the goal."""
    return build_board(
        [["empty", "piece"], ["empty", "piece"]],
        [("piece", 1, 1), ("piece", 0, 1), ("final", -1, 1)],
    )
