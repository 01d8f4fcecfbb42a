"""
Spaces CLI - Command-line interface for the engine.

Usage:
    spaces validate <board>                      Check a board is playable
    spaces simulate <player> <opponent>          Play one round
    spaces rounds <players> <opponents>          Play one round per board pair
    spaces generate --size N [--limit L]         Generate legal boards

A <board> argument is a path to a JSON file or an inline JSON object.
"""

from __future__ import annotations
from pathlib import Path
import argparse
import os
import sys

from pydantic import ValidationError

from .api.schemas import (
    GameResultModel,
    RoundResultModel,
    dump_boards,
    load_boards,
    parse_board,
)
from .boards.generator import DEFAULT_LIMIT, generate_all_boards
from .engine_core.board import Board
from .engine_core.explain import explain_round
from .engine_core.result import GameResult, RoundResult
from .engine_core.rounds import ArityMismatchError, simulate_rounds
from .engine_core.simulator import SimulationOptions, simulate_round
from .engine_core.validator import validate_board
from .utils import setup_logging

# Environment configuration
SPACES_LOG_LEVEL = os.getenv("SPACES_LOG_LEVEL", "WARNING")


class CLIError(Exception):
    """A user-facing error; reported on stderr."""

    def __init__(self, message: str, exit_code: int = 1):
        self.exit_code = exit_code
        super().__init__(message)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Spaces - board validation and round simulation",
        prog="spaces",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log simulation details")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check a board is playable")
    validate_parser.add_argument("board", help="Board JSON file or inline JSON")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play one round")
    simulate_parser.add_argument("player", help="Player board JSON file or inline JSON")
    simulate_parser.add_argument("opponent", help="Opponent board JSON file or inline JSON")
    simulate_parser.add_argument("--round", type=int, default=1, help="Round number")
    simulate_parser.add_argument("--explain", action="store_true", help="Print a step-by-step explanation")
    simulate_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # Rounds command
    rounds_parser = subparsers.add_parser("rounds", help="Play one round per board pair")
    rounds_parser.add_argument("players", help="JSON file with a list of player boards")
    rounds_parser.add_argument("opponents", help="JSON file with a list of opponent boards")
    rounds_parser.add_argument("--json", action="store_true", help="Print the results as JSON")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Generate legal boards")
    generate_parser.add_argument("--size", type=int, required=True, help="Board size")
    generate_parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help="Maximum boards")
    generate_parser.add_argument("--output", "-o", help="Output file (default: stdout)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "validate": cmd_validate,
        "simulate": cmd_simulate,
        "rounds": cmd_rounds,
        "generate": cmd_generate,
    }
    try:
        _configure_logging(args.verbose)
        return commands[args.command](args)
    except CLIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code


def cmd_validate(args) -> int:
    """Validate a single board."""
    board = _read_board(args.board)
    result = validate_board(board)

    for w in result.warnings:
        print(f"Warning: {w}")

    if result.valid:
        print(f"Valid board ({board.board_size}x{board.board_size}, {len(board.sequence)} moves)")
        return 0

    print("Invalid board:")
    for e in result.errors:
        print(f"  - {e}")
    return 1


def cmd_simulate(args) -> int:
    """Play one round between two boards."""
    player_board = _read_board(args.player)
    opponent_board = _read_board(args.opponent)
    _require_playable(player_board, "player")
    _require_playable(opponent_board, "opponent")
    if player_board.board_size != opponent_board.board_size:
        raise CLIError("Player and opponent boards must be the same size")

    result = simulate_round(
        args.round, player_board, opponent_board, SimulationOptions(silent=not args.verbose)
    )

    if args.json:
        print(RoundResultModel.from_result(result).model_dump_json(by_alias=True, exclude_none=True, indent=2))
        return 0

    print(_summarize(result))
    if args.explain:
        print()
        for line in explain_round(result):
            print(line)
    return 0


def cmd_rounds(args) -> int:
    """Play a series of independent rounds."""
    player_boards = _read_board_list(args.players)
    opponent_boards = _read_board_list(args.opponents)
    for i, board in enumerate(player_boards, start=1):
        _require_playable(board, f"player board {i}")
    for i, board in enumerate(opponent_boards, start=1):
        _require_playable(board, f"opponent board {i}")

    try:
        results = simulate_rounds(
            player_boards, opponent_boards, SimulationOptions(silent=not args.verbose)
        )
    except ArityMismatchError as e:
        raise CLIError(str(e), exit_code=2)

    game = GameResult.from_rounds(results)
    if args.json:
        print(GameResultModel.from_game(game).model_dump_json(by_alias=True, exclude_none=True, indent=2))
        return 0

    for result in results:
        print(_summarize(result))
    print(
        f"Total: Player {game.final_player_score} - Opponent {game.final_opponent_score} "
        f"({game.winner.value})"
    )
    return 0


def cmd_generate(args) -> int:
    """Generate legal boards and write them as a JSON list."""
    def report(count: int) -> None:
        print(f"Generated {count} boards...", file=sys.stderr)

    try:
        boards = generate_all_boards(args.size, args.limit, progress=report)
    except ValueError as e:
        raise CLIError(str(e))

    output = dump_boards(boards)
    if args.output:
        try:
            Path(args.output).write_text(output, encoding="utf-8")
        except OSError as e:
            raise CLIError(f"Cannot write {args.output}: {e.strerror or e}")
        print(f"Wrote {len(boards)} boards to {args.output}")
    else:
        print(output)
    return 0


def _configure_logging(verbose: bool) -> None:
    level = "INFO" if verbose else SPACES_LOG_LEVEL
    try:
        setup_logging(level)
    except ValueError:
        raise CLIError(f"Invalid SPACES_LOG_LEVEL: {level!r}")


def _read_board(source: str) -> Board:
    """Read a board from inline JSON or a file path."""
    try:
        if source.lstrip().startswith("{"):
            return parse_board(source)
        return parse_board(Path(source).read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CLIError(f"File not found: {source}")
    except OSError as e:
        raise CLIError(f"Cannot read {source}: {e.strerror or e}")
    except UnicodeDecodeError:
        raise CLIError(f"{source} is not a UTF-8 text file")
    except ValidationError as e:
        raise CLIError(f"Invalid board JSON in {source}: {e}")


def _read_board_list(path: str) -> list[Board]:
    try:
        return load_boards(path)
    except FileNotFoundError:
        raise CLIError(f"File not found: {path}")
    except OSError as e:
        raise CLIError(f"Cannot read {path}: {e.strerror or e}")
    except UnicodeDecodeError:
        raise CLIError(f"{path} is not a UTF-8 text file")
    except ValidationError as e:
        raise CLIError(f"Invalid board list JSON in {path}: {e}")


def _require_playable(board: Board, label: str) -> None:
    result = validate_board(board)
    if not result.valid:
        raise CLIError(f"The {label} board cannot be played: {'; '.join(result.errors)}")


def _summarize(result: RoundResult) -> str:
    details = result.simulation_details
    flags = []
    if result.collision:
        flags.append("collision")
    if details.player_hit_trap:
        flags.append(f"player trapped at {details.player_trap_position}")
    if details.opponent_hit_trap:
        flags.append(f"opponent trapped at {details.opponent_trap_position}")
    suffix = f" [{', '.join(flags)}]" if flags else ""
    return (
        f"Round {result.round}: {result.winner.value} | "
        f"Player {result.player_points} - Opponent {result.opponent_points}{suffix}"
    )


if __name__ == "__main__":
    sys.exit(main())
