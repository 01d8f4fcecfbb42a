"""
Round Simulator - Plays two boards against each other.

Rules:
- Both sequences are replayed step by step, one entry per side per step
- +1 point for each forward piece move (toward the side's goal)
- +1 point for reaching the goal (final move)
- Collision: both pieces on the same square, both lose 1 point, round ends
- Stepping onto an opponent trap: -1 point, that side stops playing
- Points never drop below 0

The opponent board is authored in its own frame (row 0 is its goal side), so
every opponent square is rotated 180 degrees into the player's frame.

Boards are assumed to be valid (see validator.validate_board). The simulator
never re-validates: an invalid board yields an unspecified result, not an
exception, as long as its squares stay within the declared grid.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Callable
import logging

from .board import Board, BoardMove, MoveKind, Position
from .result import RoundResult, SimulationDetails, Winner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationOptions:
    """Per-call simulation options."""
    silent: bool = False  # Suppress diagnostic log lines


SILENT = SimulationOptions(silent=True)


@dataclass
class SideState:
    """Mutable state for one side during a single round."""
    score: int = 0
    position: Position | None = None
    ended: bool = False
    goal_reached: bool = False
    hit_trap: bool = False
    trap_position: Position | None = None
    moves: int = 0
    last_step: int = -1

    # Square -> step at which this side placed a trap there
    traps: dict[Position, int] = field(default_factory=dict)

    def lose_point(self) -> None:
        if self.score > 0:
            self.score -= 1

    @property
    def status(self) -> str:
        if self.hit_trap:
            return " (trapped)"
        if self.goal_reached:
            return " (goal)"
        return ""


@dataclass
class RoundContext:
    """All transient state of one round. Discarded once the result is built."""
    size: int
    player: SideState = field(default_factory=SideState)
    opponent: SideState = field(default_factory=SideState)

    @property
    def goal_reached(self) -> bool:
        return self.player.goal_reached or self.opponent.goal_reached


def player_forward(previous: Position, new: Position) -> bool:
    """The player advances toward row 0."""
    return new.row < previous.row


def opponent_forward(previous: Position, new: Position) -> bool:
    """The rotated opponent advances toward row N-1."""
    return new.row > previous.row


def play_move(
    side: SideState,
    move: BoardMove,
    position: Position,
    step: int,
    is_forward: Callable[[Position, Position], bool],
) -> None:
    """Apply one sequence entry to a side. `position` is already in the player's frame."""
    if move.kind == MoveKind.PIECE:
        if side.position is not None and is_forward(side.position, position):
            side.score += 1
        side.position = position
        side.moves += 1
    elif move.kind == MoveKind.TRAP:
        side.traps[position] = step
    elif move.kind == MoveKind.FINAL:
        side.goal_reached = True
        side.position = position  # Off-board goal marker
        side.score += 1
        side.ended = True
    side.last_step = step


def check_trap_hit(side: SideState, enemy_traps: dict[Position, int], step: int) -> None:
    """End the side's round if it stands on an enemy trap that is already placed."""
    if side.ended or side.position is None:
        return
    placed_at = enemy_traps.get(side.position)
    if placed_at is not None and placed_at <= step:
        side.lose_point()
        side.hit_trap = True
        side.trap_position = side.position
        side.ended = True


def collided(ctx: RoundContext) -> bool:
    """Both pieces on one square while neither side has reached its goal."""
    return (
        not ctx.goal_reached
        and ctx.player.position is not None
        and ctx.player.position == ctx.opponent.position
    )


def _run_steps(ctx: RoundContext, player_board: Board, opponent_board: Board) -> None:
    player_seq = player_board.sequence
    opponent_seq = opponent_board.sequence
    max_steps = max(len(player_seq), len(opponent_seq))

    for step in range(max_steps):
        if not ctx.player.ended and step < len(player_seq):
            move = player_seq[step]
            play_move(ctx.player, move, move.position, step, player_forward)

        if not ctx.opponent.ended and step < len(opponent_seq):
            move = opponent_seq[step]
            play_move(
                ctx.opponent, move, move.position.rotated(ctx.size), step, opponent_forward
            )

        if collided(ctx):
            ctx.player.lose_point()
            ctx.opponent.lose_point()
            break

        check_trap_hit(ctx.player, ctx.opponent.traps, step)
        check_trap_hit(ctx.opponent, ctx.player.traps, step)

        if ctx.player.ended and ctx.opponent.ended:
            break
        if ctx.goal_reached:
            break


def simulate_round(
    round_number: int,
    player_board: Board,
    opponent_board: Board,
    options: SimulationOptions | None = None,
    *,
    silent: bool | None = None,
) -> RoundResult:
    """
    Simulate a complete round between player and opponent.

    Args:
        round_number: Round number reported in the result
        player_board: Player's board (player's frame)
        opponent_board: Opponent's board (opponent's own frame, rotated here)
        options: SimulationOptions; defaults to logging enabled
        silent: Shortcut that overrides options.silent when given

    Returns:
        RoundResult with winner, points, final positions and diagnostics
    """
    options = options or SimulationOptions()
    if silent is not None:
        options = replace(options, silent=silent)
    size = player_board.board_size

    if not options.silent:
        logger.info("Round %d", round_number)

    ctx = RoundContext(size=size)
    _run_steps(ctx, player_board, opponent_board)

    player, opponent = ctx.player, ctx.opponent
    winner = Winner.from_scores(player.score, opponent.score)

    # Canonical starting corners for a side that never placed its piece
    player_final = player.position or Position(size - 1, 0)
    opponent_final = opponent.position or Position(0, size - 1)

    if not options.silent:
        logger.info(
            "Round %d result: %s | Player: %dpts%s | Opponent: %dpts%s",
            round_number,
            winner.value,
            player.score,
            player.status,
            opponent.score,
            opponent.status,
        )

    return RoundResult(
        round=round_number,
        winner=winner,
        player_board=player_board,
        opponent_board=opponent_board,
        player_final_position=player_final,
        opponent_final_position=opponent_final,
        player_points=player.score,
        opponent_points=opponent.score,
        collision=player_final == opponent_final,
        simulation_details=SimulationDetails(
            player_moves=player.moves,
            opponent_moves=opponent.moves,
            player_hit_trap=player.hit_trap,
            opponent_hit_trap=opponent.hit_trap,
            player_last_step=player.last_step,
            opponent_last_step=opponent.last_step,
            player_trap_position=player.trap_position,
            opponent_trap_position=opponent.trap_position,
        ),
    )
