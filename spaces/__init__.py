"""
Spaces - Board validation and round simulation engine

Each player designs a board in advance: a piece path, optional traps and a
goal move. Two boards are then played against each other deterministically.
The package provides:
- Board validation
- Deterministic round simulation
- Multi-round play
- Board generation and JSON interchange
"""

__version__ = "0.1.0"
