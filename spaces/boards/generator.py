"""
Board Generator - exhaustive depth-first enumeration of legal boards.

The search starts the piece on each bottom-row square in turn and explores,
in order:
1. Piece moves up, left and right onto squares not visited yet
2. Trap drops up, left, right or under the piece (never on row 0)

Any trap forces a piece move next. Reaching row 0 ends the path with the
final move. Every finished sequence is validated before it is kept, so the
output only contains playable boards. The search is deterministic.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from math import ceil
from typing import Callable
import logging

from ..engine_core.board import Board, BoardMove, Position, is_valid_board_size
from ..engine_core.validator import is_board_playable
from .grid import create_board_from_sequence

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 500
PROGRESS_INTERVAL = 50

# Forward, then sideways. The piece never walks backward.
_STEPS = ((-1, 0), (0, -1), (0, 1))


@dataclass
class _BoardSearch:
    size: int
    limit: int
    progress: Callable[[int], None] | None = None
    boards: list[Board] = field(default_factory=list)

    @property
    def full(self) -> bool:
        return len(self.boards) >= self.limit

    def run(self, start_col: int) -> None:
        start = Position(self.size - 1, start_col)
        self._explore(
            start,
            [BoardMove.piece(start.row, start.col, 1)],
            visited={start},
            traps=frozenset(),
            must_move=False,
        )

    def _explore(
        self,
        current: Position,
        sequence: list[BoardMove],
        visited: set[Position],
        traps: frozenset[Position],
        must_move: bool,
    ) -> None:
        if self.full:
            return

        if current.row == 0 and not must_move:
            self._finish(sequence, current.col)
            return

        for d_row, d_col in _STEPS:
            if self.full:
                return
            target = Position(current.row + d_row, current.col + d_col)
            if not target.in_bounds(self.size) or target in visited or target in traps:
                continue
            self._explore(
                target,
                sequence + [BoardMove.piece(target.row, target.col, len(sequence) + 1)],
                visited | {target},
                traps,
                must_move=False,
            )

        if must_move or current.row == 0 or len(traps) >= self.size - 1:
            return

        for d_row, d_col in _STEPS + ((0, 0),):
            if self.full:
                return
            target = Position(current.row + d_row, current.col + d_col)
            if not target.in_bounds(self.size) or target.row == 0 or target in traps:
                continue
            self._explore(
                current,
                sequence + [BoardMove.trap(target.row, target.col, len(sequence) + 1)],
                visited,
                traps | {target},
                must_move=True,
            )

    def _finish(self, sequence: list[BoardMove], col: int) -> None:
        board = create_board_from_sequence(
            sequence + [BoardMove.final(col, len(sequence) + 1)], self.size
        )
        if not is_board_playable(board):
            return
        self.boards.append(board)
        if self.progress and len(self.boards) % PROGRESS_INTERVAL == 0:
            self.progress(len(self.boards))


def generate_all_boards(
    size: int,
    limit: int = DEFAULT_LIMIT,
    progress: Callable[[int], None] | None = None,
) -> list[Board]:
    """
    Generate up to `limit` legal boards of the given size.

    The limit is spread across starting columns for variety.

    Raises:
        ValueError: if size is not a valid board size or limit is negative
    """
    if not is_valid_board_size(size):
        raise ValueError(f"Invalid board size: {size!r}")
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")

    per_column = ceil(limit / size)
    boards: list[Board] = []

    for start_col in range(size):
        before = len(boards)
        search = _BoardSearch(
            size=size,
            limit=min(limit, before + per_column),
            progress=progress,
            boards=boards,
        )
        search.run(start_col)
        logger.debug("Start column %d: %d boards", start_col, len(boards) - before)
        if len(boards) >= limit:
            break

    return boards[:limit]
