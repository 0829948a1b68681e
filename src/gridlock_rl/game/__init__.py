"""Game module for Gridlock RL.

Exports the puzzle engine and supporting classes:
- Level: level parsing, occupancy queries and piece moves
- Piece / Orientation: straight pieces sliding along their own axis
- ExitEdge: grid border the main piece has to reach
- LevelCatalog / LevelEntry: ordered level descriptions
- ProgressStore: solved flags per level
- GridlockGame / GameConfig: puzzle session used by the UI and the env
"""

from .errors import (
    AxisViolationError,
    BlockedMoveError,
    FormatError,
    GridlockError,
    MoveError,
    NoPieceError,
)
from .pieces import Orientation, Piece
from .level import ExitEdge, Level, format_level, print_level
from .catalog import LevelCatalog, LevelEntry
from .progress import ProgressStore
from .core import GameConfig, GridlockGame

__all__ = [
    "AxisViolationError",
    "BlockedMoveError",
    "FormatError",
    "GridlockError",
    "MoveError",
    "NoPieceError",
    "Orientation",
    "Piece",
    "ExitEdge",
    "Level",
    "format_level",
    "print_level",
    "LevelCatalog",
    "LevelEntry",
    "ProgressStore",
    "GameConfig",
    "GridlockGame",
]
