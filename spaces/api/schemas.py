"""
Pydantic Schemas - JSON interchange for boards and results.

Boards are exchanged in the camelCase shape used by the board files:

    {
      "boardSize": 2,
      "grid": [["piece", "empty"], ["trap", "piece"]],
      "sequence": [
        {"position": {"row": 1, "col": 0}, "type": "piece", "order": 1},
        ...
      ]
    }

These models only check JSON structure. Whether a board is playable is
decided by engine_core.validator.
"""

from __future__ import annotations
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from ..engine_core.board import Board, BoardMove, CellContent, MoveKind, Position
from ..engine_core.result import GameResult, RoundResult, Winner


_CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


# =============================================================================
# Board Models
# =============================================================================

class PositionModel(BaseModel):
    """A square. Row -1 is the goal row."""
    row: int
    col: int

    def to_position(self) -> Position:
        return Position(self.row, self.col)

    @classmethod
    def from_position(cls, position: Position) -> PositionModel:
        return cls(row=position.row, col=position.col)


class BoardMoveModel(BaseModel):
    """One sequence entry."""
    position: PositionModel
    type: MoveKind = Field(description="piece, trap or final")
    order: int = Field(description="1-based position in the sequence")

    def to_move(self) -> BoardMove:
        return BoardMove(position=self.position.to_position(), kind=self.type, order=self.order)

    @classmethod
    def from_move(cls, move: BoardMove) -> BoardMoveModel:
        return cls(
            position=PositionModel.from_position(move.position),
            type=move.kind,
            order=move.order,
        )


class BoardModel(BaseModel):
    """A board as stored in JSON files."""
    board_size: int
    grid: list[list[CellContent]]
    sequence: list[BoardMoveModel] = Field(default_factory=list)
    name: Optional[str] = Field(None, description="Optional label, ignored by the engine")

    model_config = _CAMEL

    def to_board(self) -> Board:
        return Board(
            board_size=self.board_size,
            grid=self.grid,
            sequence=tuple(m.to_move() for m in self.sequence),
        )

    @classmethod
    def from_board(cls, board: Board, name: Optional[str] = None) -> BoardModel:
        return cls(
            board_size=board.board_size,
            grid=[list(row) for row in board.grid],
            sequence=[BoardMoveModel.from_move(m) for m in board.sequence],
            name=name,
        )


# =============================================================================
# Result Models
# =============================================================================

class SimulationDetailsModel(BaseModel):
    """Per-round diagnostics."""
    player_moves: int
    opponent_moves: int
    player_hit_trap: bool
    opponent_hit_trap: bool
    player_last_step: int
    opponent_last_step: int
    player_trap_position: Optional[PositionModel] = None
    opponent_trap_position: Optional[PositionModel] = None

    model_config = _CAMEL


class RoundResultModel(BaseModel):
    """A round result. Opponent positions are in the player's frame."""
    round: int
    winner: Winner
    player_board: BoardModel
    opponent_board: BoardModel
    player_final_position: PositionModel
    opponent_final_position: PositionModel
    player_points: int = Field(ge=0)
    opponent_points: int = Field(ge=0)
    collision: bool
    simulation_details: SimulationDetailsModel

    model_config = _CAMEL

    @classmethod
    def from_result(cls, result: RoundResult) -> RoundResultModel:
        return cls(
            round=result.round,
            winner=result.winner,
            player_board=BoardModel.from_board(result.player_board),
            opponent_board=BoardModel.from_board(result.opponent_board),
            player_final_position=PositionModel.from_position(result.player_final_position),
            opponent_final_position=PositionModel.from_position(result.opponent_final_position),
            player_points=result.player_points,
            opponent_points=result.opponent_points,
            collision=result.collision,
            simulation_details=SimulationDetailsModel(**asdict(result.simulation_details)),
        )


class GameResultModel(BaseModel):
    """Results of a series of rounds with totals."""
    rounds: list[RoundResultModel]
    final_player_score: int
    final_opponent_score: int
    winner: Winner

    model_config = _CAMEL

    @classmethod
    def from_game(cls, game: GameResult) -> GameResultModel:
        return cls(
            rounds=[RoundResultModel.from_result(r) for r in game.rounds],
            final_player_score=game.final_player_score,
            final_opponent_score=game.final_opponent_score,
            winner=game.winner,
        )


# =============================================================================
# File helpers
# =============================================================================

_BOARD_LIST = TypeAdapter(list[BoardModel])


def parse_board(text: str) -> Board:
    """Parse one board from JSON text."""
    return BoardModel.model_validate_json(text).to_board()


def parse_boards(text: str) -> list[Board]:
    """Parse a JSON list of boards."""
    return [m.to_board() for m in _BOARD_LIST.validate_json(text)]


def load_board(path: Union[str, Path]) -> Board:
    """Load one board from a JSON file."""
    return parse_board(Path(path).read_text(encoding="utf-8"))


def load_boards(path: Union[str, Path]) -> list[Board]:
    """Load a JSON list of boards from a file."""
    return parse_boards(Path(path).read_text(encoding="utf-8"))


def dump_boards(boards: list[Board]) -> str:
    """Serialize boards to a JSON list in the file format."""
    models = [BoardModel.from_board(b) for b in boards]
    return _BOARD_LIST.dump_json(models, by_alias=True, exclude_none=True, indent=2).decode("utf-8")
