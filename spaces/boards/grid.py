"""
Grid derivation - builds a board's grid from its move sequence.

Rules:
- Every trap square is marked 'trap' (a trap overrides a piece waypoint)
- Every other piece square is marked 'piece'
- Final moves sit on the goal row and never touch the grid
"""

from __future__ import annotations
from dataclasses import replace
from typing import Iterable

from ..engine_core.board import Board, BoardMove, CellContent, MoveKind, Position


def generate_grid(sequence: Iterable[BoardMove], board_size: int) -> list[list[CellContent]]:
    """Return a fresh board_size x board_size grid for the sequence."""
    moves = list(sequence)
    grid = [[CellContent.EMPTY] * board_size for _ in range(board_size)]

    traps = {
        m.position for m in moves
        if m.kind == MoveKind.TRAP and m.position.in_bounds(board_size)
    }

    for move in moves:
        pos = move.position
        if move.kind == MoveKind.FINAL or not pos.in_bounds(board_size):
            continue
        if pos in traps:
            grid[pos.row][pos.col] = CellContent.TRAP
        elif move.kind == MoveKind.PIECE:
            grid[pos.row][pos.col] = CellContent.PIECE

    return grid


def create_board_from_sequence(sequence: Iterable[BoardMove], board_size: int) -> Board:
    """Build a complete Board whose grid is derived from the sequence."""
    moves = tuple(sequence)
    return Board(
        board_size=board_size,
        grid=generate_grid(moves, board_size),
        sequence=moves,
    )


def renumber(sequence: Iterable[BoardMove]) -> tuple[BoardMove, ...]:
    """Return the moves with dense 1-based order numbers."""
    return tuple(replace(move, order=i) for i, move in enumerate(sequence, start=1))


def piece_position_at(sequence: Iterable[BoardMove], step_number: int) -> Position | None:
    """
    Position of the piece after a given step (1-indexed by move order).

    Returns None if no piece move has happened by then.
    """
    moves = sorted((m for m in sequence if m.order <= step_number), key=lambda m: m.order)
    for move in reversed(moves):
        if move.kind == MoveKind.PIECE:
            return move.position
    return None
