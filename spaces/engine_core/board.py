"""
Board - Value types describing a pre-committed board.

A board is an NxN grid plus an ordered move sequence:
- piece moves walk the piece across the grid
- trap moves drop a trap next to (or under) the piece
- a single final move (row -1) takes the piece off the top edge to the goal

Design principles:
- Immutable: boards are shared between rounds and threads, never mutated
- Hashable positions: Position is used directly as a dict/set key
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


MIN_BOARD_SIZE = 2
MAX_BOARD_SIZE = 99

# Row used by the final move (the goal sits just beyond row 0)
GOAL_ROW = -1


def is_valid_board_size(size: object) -> bool:
    """Check a board size is an integer in [MIN_BOARD_SIZE, MAX_BOARD_SIZE]."""
    if isinstance(size, bool) or not isinstance(size, int):
        return False
    return MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE


class CellContent(str, Enum):
    """Marker stored in a grid cell."""
    EMPTY = "empty"
    PIECE = "piece"
    TRAP = "trap"
    FINAL = "final"  # Never legal on the grid; the goal is off-board


class MoveKind(str, Enum):
    """Kind of a sequence entry."""
    PIECE = "piece"
    TRAP = "trap"
    FINAL = "final"


@dataclass(frozen=True)
class Position:
    """A (row, col) square. Row -1 is the goal row used by final moves."""
    row: int
    col: int

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.row < size and 0 <= self.col < size

    def is_adjacent(self, other: Position) -> bool:
        """Exactly one square away along a single axis (no diagonals)."""
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def rotated(self, size: int) -> Position:
        """Rotate 180 degrees, mapping an opponent square into the player's frame."""
        return Position(size - 1 - self.row, size - 1 - self.col)

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True)
class BoardMove:
    """One entry of a board's move sequence."""
    position: Position
    kind: MoveKind
    order: int  # 1-based index in the sequence

    @classmethod
    def piece(cls, row: int, col: int, order: int) -> BoardMove:
        """Factory for a piece move."""
        return cls(position=Position(row, col), kind=MoveKind.PIECE, order=order)

    @classmethod
    def trap(cls, row: int, col: int, order: int) -> BoardMove:
        """Factory for a trap placement."""
        return cls(position=Position(row, col), kind=MoveKind.TRAP, order=order)

    @classmethod
    def final(cls, col: int, order: int) -> BoardMove:
        """Factory for the goal move."""
        return cls(position=Position(GOAL_ROW, col), kind=MoveKind.FINAL, order=order)


@dataclass(frozen=True)
class Board:
    """
    A complete board: size, grid and move sequence.

    Lists passed in are frozen into tuples, so a Board can be shared freely.
    Legality is not checked here; see validator.validate_board.
    """
    board_size: int
    grid: tuple[tuple[CellContent, ...], ...]
    sequence: tuple[BoardMove, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(
            self, "grid", tuple(tuple(CellContent(c) for c in row) for row in self.grid)
        )
        object.__setattr__(self, "sequence", tuple(self.sequence))

    def cell(self, position: Position) -> CellContent | None:
        """Grid content at a position, or None when off the grid."""
        if position.row < 0 or position.row >= len(self.grid):
            return None
        row = self.grid[position.row]
        if position.col < 0 or position.col >= len(row):
            return None
        return row[position.col]
