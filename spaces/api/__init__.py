"""
API Module - JSON interchange for boards and round results.

Callers outside the engine (the CLI, training harnesses, UIs) exchange
boards as JSON. This module converts between that format and the engine's
value types.
"""

from .schemas import (
    PositionModel,
    BoardMoveModel,
    BoardModel,
    SimulationDetailsModel,
    RoundResultModel,
    GameResultModel,
    parse_board,
    parse_boards,
    load_board,
    load_boards,
    dump_boards,
)

__all__ = [
    "PositionModel",
    "BoardMoveModel",
    "BoardModel",
    "SimulationDetailsModel",
    "RoundResultModel",
    "GameResultModel",
    "parse_board",
    "parse_boards",
    "load_board",
    "load_boards",
    "dump_boards",
]
