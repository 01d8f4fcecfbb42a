"""
Round explanation - a step-by-step narrative of a simulated round.

The explanation replays both boards with the simulator's own rules and
reports what happened at each step. Opponent squares are given in the
player's frame, like everything else in a RoundResult.
"""

from __future__ import annotations

from .board import BoardMove, MoveKind, Position
from .result import RoundResult
from .simulator import (
    RoundContext,
    SideState,
    check_trap_hit,
    collided,
    opponent_forward,
    play_move,
    player_forward,
)


def _describe_move(label: str, side: SideState, move: BoardMove, position: Position, gained: int) -> list[str]:
    if move.kind == MoveKind.FINAL:
        return [f"{label} reaches the goal!", f"  {label} +1 point (goal reached)"]
    if move.kind == MoveKind.TRAP:
        return [f"{label} places trap at {position}"]
    if side.moves == 1:
        return [f"{label} starts with piece at {position}"]
    lines = [f"{label} moves to {position}"]
    if gained:
        lines.append(f"  {label} +1 point (forward movement)")
    return lines


def _ending(ctx: RoundContext, collision: bool) -> str:
    """Why the round stopped, read from the final side states."""
    player, opponent = ctx.player, ctx.opponent
    if collision:
        return "Collision occurred"
    if player.goal_reached:
        return "Player reached the goal"
    if opponent.goal_reached:
        return "Opponent reached the goal"
    if player.hit_trap and opponent.hit_trap:
        return "Both pieces are trapped"
    if player.hit_trap:
        return "Player is trapped, Opponent sequence complete"
    if opponent.hit_trap:
        return "Opponent is trapped, Player sequence complete"
    return "Both sequences complete"


def explain_round(result: RoundResult) -> list[str]:
    """
    Narrate a round result.

    Returns a list of human-readable lines, one event per line.
    """
    player_board = result.player_board
    opponent_board = result.opponent_board
    ctx = RoundContext(size=player_board.board_size)
    lines: list[str] = [f"Round {result.round}"]
    collision = False

    sides = (
        ("Player", ctx.player, player_board.sequence, False, player_forward),
        ("Opponent", ctx.opponent, opponent_board.sequence, True, opponent_forward),
    )
    max_steps = max(len(player_board.sequence), len(opponent_board.sequence))

    for step in range(max_steps):
        lines.append(f"Step {step + 1}:")
        for label, side, sequence, rotate, forward in sides:
            if side.ended or step >= len(sequence):
                continue
            move = sequence[step]
            position = move.position.rotated(ctx.size) if rotate else move.position
            before = side.score
            play_move(side, move, position, step, forward)
            lines.extend("  " + line for line in _describe_move(label, side, move, position, side.score - before))

        if collided(ctx):
            lines.append(f"    Collision at {ctx.player.position}! Player -1 point, Opponent -1 point")
            collision = True
            break

        for label, side, enemy in (("Player", ctx.player, ctx.opponent), ("Opponent", ctx.opponent, ctx.player)):
            already_hit = side.hit_trap
            check_trap_hit(side, enemy.traps, step)
            if side.hit_trap and not already_hit:
                lines.append(f"    {label} hits a trap at {side.trap_position}! -1 point")

        if ctx.goal_reached or (ctx.player.ended and ctx.opponent.ended):
            break

    lines.append("")
    lines.append(f"Round ends - {_ending(ctx, collision)}")
    lines.append(
        f"Final score: Player {result.player_points} - Opponent {result.opponent_points} "
        f"({result.winner.value})"
    )
    return lines
