"""
Multi-round play - runs independent rounds in order.
"""

from __future__ import annotations
import logging

from .board import Board
from .result import GameResult, RoundResult
from .simulator import SimulationOptions, simulate_round

logger = logging.getLogger(__name__)


class ArityMismatchError(ValueError):
    """Raised when player and opponent supply different numbers of boards."""

    def __init__(self, player_count: int, opponent_count: int):
        self.player_count = player_count
        self.opponent_count = opponent_count
        super().__init__(
            "Player and opponent must have same number of boards "
            f"(got {player_count} and {opponent_count})"
        )


def simulate_rounds(
    player_boards: list[Board],
    opponent_boards: list[Board],
    options: SimulationOptions | None = None,
) -> list[RoundResult]:
    """
    Simulate one round per board pair, numbered from 1.

    Rounds share no state; the results are returned in order, unmodified.
    """
    if len(player_boards) != len(opponent_boards):
        raise ArityMismatchError(len(player_boards), len(opponent_boards))

    options = options or SimulationOptions()
    if not options.silent:
        logger.info("Starting %d rounds", len(player_boards))

    results = [
        simulate_round(round_number, player_board, opponent_board, options)
        for round_number, (player_board, opponent_board) in enumerate(
            zip(player_boards, opponent_boards), start=1
        )
    ]

    if not options.silent:
        totals = GameResult.from_rounds(results)
        logger.info(
            "Complete: Player %d - Opponent %d",
            totals.final_player_score,
            totals.final_opponent_score,
        )
    return results
