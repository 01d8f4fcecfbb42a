"""
Engine Core - Deterministic board validation and round simulation.

The engine:
1. Validates a board (validate_board)
2. Plays two valid boards against each other (simulate_round)
3. Plays a series of independent rounds (simulate_rounds)
4. Explains a round step by step (explain_round)
"""

from .board import (
    Board,
    BoardMove,
    CellContent,
    MoveKind,
    Position,
    GOAL_ROW,
    MIN_BOARD_SIZE,
    MAX_BOARD_SIZE,
    is_valid_board_size,
)
from .result import GameResult, RoundResult, SimulationDetails, Winner
from .validator import (
    BoardValidationError,
    RejectReason,
    ValidationResult,
    is_board_playable,
    validate_board,
    validate_board_or_raise,
)
from .simulator import SILENT, SimulationOptions, simulate_round
from .rounds import ArityMismatchError, simulate_rounds
from .explain import explain_round

__all__ = [
    "Board",
    "BoardMove",
    "CellContent",
    "MoveKind",
    "Position",
    "GOAL_ROW",
    "MIN_BOARD_SIZE",
    "MAX_BOARD_SIZE",
    "is_valid_board_size",
    "GameResult",
    "RoundResult",
    "SimulationDetails",
    "Winner",
    "BoardValidationError",
    "RejectReason",
    "ValidationResult",
    "is_board_playable",
    "validate_board",
    "validate_board_or_raise",
    "SILENT",
    "SimulationOptions",
    "simulate_round",
    "ArityMismatchError",
    "simulate_rounds",
    "explain_round",
]
