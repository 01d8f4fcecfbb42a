"""
Round results - immutable records produced by the simulator.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .board import Board, Position


class Winner(str, Enum):
    """Outcome of a round (or a whole game)."""
    PLAYER = "player"
    OPPONENT = "opponent"
    TIE = "tie"

    @classmethod
    def from_scores(cls, player_score: int, opponent_score: int) -> Winner:
        if player_score > opponent_score:
            return cls.PLAYER
        if opponent_score > player_score:
            return cls.OPPONENT
        return cls.TIE


@dataclass(frozen=True)
class SimulationDetails:
    """Diagnostics about how a round played out."""
    player_moves: int
    opponent_moves: int
    player_hit_trap: bool
    opponent_hit_trap: bool
    player_last_step: int  # -1 if the player never executed a step
    opponent_last_step: int
    player_trap_position: Position | None = None
    opponent_trap_position: Position | None = None


@dataclass(frozen=True)
class RoundResult:
    """
    Result of one simulated round.

    Opponent positions are reported in the player's frame (rotated 180 degrees).
    """
    round: int
    winner: Winner
    player_board: Board
    opponent_board: Board
    player_final_position: Position
    opponent_final_position: Position
    player_points: int
    opponent_points: int
    collision: bool
    simulation_details: SimulationDetails


@dataclass(frozen=True)
class GameResult:
    """Totals over a series of independent rounds."""
    rounds: tuple[RoundResult, ...]
    final_player_score: int
    final_opponent_score: int
    winner: Winner

    @classmethod
    def from_rounds(cls, rounds: list[RoundResult]) -> GameResult:
        player_total = sum(r.player_points for r in rounds)
        opponent_total = sum(r.opponent_points for r in rounds)
        return cls(
            rounds=tuple(rounds),
            final_player_score=player_total,
            final_opponent_score=opponent_total,
            winner=Winner.from_scores(player_total, opponent_total),
        )
