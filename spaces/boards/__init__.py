"""Board construction helpers - grid derivation and board generation."""

from .grid import create_board_from_sequence, generate_grid, piece_position_at, renumber
from .generator import DEFAULT_LIMIT, generate_all_boards

__all__ = [
    "create_board_from_sequence",
    "generate_grid",
    "piece_position_at",
    "renumber",
    "DEFAULT_LIMIT",
    "generate_all_boards",
]
