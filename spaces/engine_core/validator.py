"""
Board Validation - Decides whether a board is a legal, playable program.

Validates that:
1. The board size and grid dimensions agree
2. Every move stays on the grid (final moves sit on the goal row)
3. The piece walks in orthogonal single steps and never enters a trap
4. Traps are dropped next to the piece, or under it (supermove)
5. A supermove is immediately followed by the piece moving away
6. At most boardSize - 1 traps are placed
7. The piece visits every row and the sequence reaches the goal

Validation is a single pass over the sequence and stops at the first
violation. It holds no state between calls.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .board import (
    Board,
    CellContent,
    MoveKind,
    Position,
    GOAL_ROW,
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    is_valid_board_size,
)


class RejectReason(str, Enum):
    """Why a board was rejected."""
    INVALID_SIZE = "invalid_size"
    GRID_MISMATCH = "grid_mismatch"
    EMPTY_SEQUENCE = "empty_sequence"
    OUT_OF_BOUNDS = "out_of_bounds"
    INVALID_FINAL = "invalid_final"
    CELL_MISMATCH = "cell_mismatch"
    NOT_ADJACENT = "not_adjacent"
    MOVE_INTO_TRAP = "move_into_trap"
    TRAP_BEFORE_PIECE = "trap_before_piece"
    TRAP_NOT_ADJACENT = "trap_not_adjacent"
    UNRESOLVED_SUPERMOVE = "unresolved_supermove"
    TOO_MANY_TRAPS = "too_many_traps"
    MISSING_FINAL = "missing_final"
    ROWS_NOT_COVERED = "rows_not_covered"


class BoardValidationError(Exception):
    """Raised when a board is not playable."""

    def __init__(self, errors: list[str], reason: RejectReason | None = None):
        self.errors = errors
        self.reason = reason
        super().__init__(f"Board validation failed: {'; '.join(errors)}")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    reason: RejectReason | None = None
    move_index: int | None = None  # Offending move, when the failure is tied to one


class _Rejected(Exception):
    def __init__(self, reason: RejectReason, message: str, move_index: int | None = None):
        self.reason = reason
        self.message = message
        self.move_index = move_index
        super().__init__(message)


def validate_board(board: Board) -> ValidationResult:
    """
    Validate a board.

    Returns a ValidationResult; never raises for rule violations.
    """
    warnings = _sequence_warnings(board)
    try:
        _check_structure(board)
        _check_sequence(board)
    except _Rejected as rejection:
        return ValidationResult(
            valid=False,
            errors=[rejection.message],
            warnings=warnings,
            reason=rejection.reason,
            move_index=rejection.move_index,
        )
    return ValidationResult(valid=True, warnings=warnings)


def is_board_playable(board: Board) -> bool:
    """True if the board can be handed to the simulator."""
    return validate_board(board).valid


def validate_board_or_raise(board: Board) -> ValidationResult:
    """Validate a board, raising BoardValidationError if it is not playable."""
    result = validate_board(board)
    if not result.valid:
        raise BoardValidationError(result.errors, result.reason)
    return result


def _check_structure(board: Board) -> None:
    if not is_valid_board_size(board.board_size):
        raise _Rejected(
            RejectReason.INVALID_SIZE,
            f"Board size must be an integer between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, "
            f"got {board.board_size!r}",
        )
    size = board.board_size
    if len(board.grid) != size or any(len(row) != size for row in board.grid):
        raise _Rejected(
            RejectReason.GRID_MISMATCH,
            f"Grid must be exactly {size}x{size}",
        )
    if not board.sequence:
        raise _Rejected(RejectReason.EMPTY_SEQUENCE, "Sequence is empty")


def _check_sequence(board: Board) -> None:
    size = board.board_size
    current: Position | None = None
    traps: set[Position] = set()
    supermove: Position | None = None
    rows_visited: set[int] = set()
    has_final = False

    for i, move in enumerate(board.sequence):
        pos = move.position

        if move.kind == MoveKind.FINAL:
            if pos.row != GOAL_ROW or not 0 <= pos.col < size:
                raise _Rejected(
                    RejectReason.INVALID_FINAL,
                    f"Move {i + 1}: final move must be on row {GOAL_ROW} within the board columns, got {pos}",
                    i,
                )
            if supermove is not None:
                raise _Rejected(
                    RejectReason.UNRESOLVED_SUPERMOVE,
                    f"Move {i + 1}: piece must leave the supermove square {supermove} before reaching the goal",
                    i,
                )
            has_final = True
            continue

        if not pos.in_bounds(size):
            raise _Rejected(
                RejectReason.OUT_OF_BOUNDS,
                f"Move {i + 1}: position {pos} is outside the {size}x{size} board",
                i,
            )

        content = board.cell(pos)

        if move.kind == MoveKind.PIECE:
            if content not in (CellContent.PIECE, CellContent.TRAP):
                raise _Rejected(
                    RejectReason.CELL_MISMATCH,
                    f"Move {i + 1}: piece move to {pos} but the grid cell is '{content.value}'",
                    i,
                )
            if supermove is not None:
                if pos == supermove:
                    raise _Rejected(
                        RejectReason.UNRESOLVED_SUPERMOVE,
                        f"Move {i + 1}: piece must move away from the supermove square {pos}",
                        i,
                    )
                supermove = None
            if current is not None:
                if not current.is_adjacent(pos):
                    raise _Rejected(
                        RejectReason.NOT_ADJACENT,
                        f"Move {i + 1}: piece must move one square orthogonally, {current} -> {pos}",
                        i,
                    )
                if pos in traps:
                    raise _Rejected(
                        RejectReason.MOVE_INTO_TRAP,
                        f"Move {i + 1}: piece cannot move into the trap at {pos}",
                        i,
                    )
            current = pos
            rows_visited.add(pos.row)

        elif move.kind == MoveKind.TRAP:
            if content != CellContent.TRAP:
                raise _Rejected(
                    RejectReason.CELL_MISMATCH,
                    f"Move {i + 1}: trap at {pos} but the grid cell is '{content.value}'",
                    i,
                )
            if current is None:
                raise _Rejected(
                    RejectReason.TRAP_BEFORE_PIECE,
                    f"Move {i + 1}: cannot place a trap before the piece is on the board",
                    i,
                )
            if pos == current:
                if supermove is not None:
                    raise _Rejected(
                        RejectReason.UNRESOLVED_SUPERMOVE,
                        f"Move {i + 1}: a supermove is already pending at {supermove}",
                        i,
                    )
                supermove = pos
            else:
                if not current.is_adjacent(pos):
                    raise _Rejected(
                        RejectReason.TRAP_NOT_ADJACENT,
                        f"Move {i + 1}: trap at {pos} is not adjacent to the piece at {current}",
                        i,
                    )
                if supermove is not None:
                    raise _Rejected(
                        RejectReason.UNRESOLVED_SUPERMOVE,
                        f"Move {i + 1}: piece must move after a supermove before placing another trap",
                        i,
                    )
            traps.add(pos)

    if len(traps) > size - 1:
        raise _Rejected(
            RejectReason.TOO_MANY_TRAPS,
            f"{len(traps)} traps placed, at most {size - 1} allowed",
        )
    if supermove is not None:
        raise _Rejected(
            RejectReason.UNRESOLVED_SUPERMOVE,
            f"Sequence ends on an unresolved supermove at {supermove}",
        )
    if not has_final:
        raise _Rejected(RejectReason.MISSING_FINAL, "Sequence never reaches the goal")
    missing = [r for r in range(size) if r not in rows_visited]
    if missing:
        raise _Rejected(
            RejectReason.ROWS_NOT_COVERED,
            f"Piece never visits row(s) {', '.join(str(r) for r in missing)}",
        )


def _sequence_warnings(board: Board) -> list[str]:
    """Non-fatal checks: order numbering and moves that can never execute."""
    warnings = []
    for i, move in enumerate(board.sequence):
        if move.order != i + 1:
            warnings.append(f"Move {i + 1} has order {move.order}, expected {i + 1}")

    finals = [i for i, move in enumerate(board.sequence) if move.kind == MoveKind.FINAL]
    if len(finals) > 1:
        warnings.append(f"Sequence has {len(finals)} final moves; only the first is played")
    if finals and finals[0] < len(board.sequence) - 1:
        warnings.append("Moves after the final move are never played")
    return warnings
