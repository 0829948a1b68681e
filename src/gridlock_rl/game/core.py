from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .catalog import LevelCatalog
from .errors import MoveError
from .level import MAIN_CHAR, Level
from .pieces import Piece
from .progress import ProgressStore

logger = logging.getLogger(__name__)

SolvedCallback = Callable[[int, "GridlockGame"], None]


@dataclass
class GameConfig:
    main_char: str = MAIN_CHAR
    cell_size: int = 80
    margin: int = 20
    progress_path: Optional[str] = None
    # Environment settings
    grid_size: int = 6
    max_pieces: int = 16
    max_episode_steps: int = 200


class GridlockGame:
    """Puzzle session: one catalog, one current level, solved progress.

    Moves that the engine rejects are no-ops here; malformed levels are not
    and propagate as FormatError.
    """

    def __init__(self, config: Optional[GameConfig] = None, catalog: Optional[LevelCatalog] = None,
                 progress: Optional[ProgressStore] = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.catalog = catalog if catalog is not None else LevelCatalog.default()
        if progress is None:
            progress = ProgressStore.load(self.config.progress_path, len(self.catalog))
        else:
            progress.resize(len(self.catalog))
        self.progress = progress
        self.level_index = 0
        self.level: Optional[Level] = None
        self.moves = 0
        self.solved = False
        self._callbacks: List[SolvedCallback] = []
        self.load_level(0)

    def on_solved(self, callback: SolvedCallback) -> None:
        self._callbacks.append(callback)

    def load_level(self, index: int) -> Level:
        self.level = self.catalog.load(index, self.config.main_char)
        self.level_index = index
        self.moves = 0
        self.solved = False
        logger.info("Loaded level %d (%dx%d, %d pieces)", index, self.level.n, self.level.n,
                    len(self.level.pieces))
        return self.level

    def restart(self) -> Level:
        return self.load_level(self.level_index)

    def next_level(self) -> Level:
        return self.load_level((self.level_index + 1) % len(self.catalog))

    def previous_level(self) -> Level:
        return self.load_level((self.level_index - 1) % len(self.catalog))

    def piece_at(self, x: int, y: int) -> Optional[Piece]:
        assert self.level is not None
        return self.level.piece_at(x, y)

    def try_move(self, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
        """Apply a drag; False when the engine rejected it (partial moves still count)."""
        assert self.level is not None
        piece = self.level.piece_at(from_x, from_y)
        before = (piece.x, piece.y) if piece is not None else None
        ok = True
        try:
            self.level.move(from_x, from_y, to_x, to_y)
        except MoveError as e:
            logger.debug("Move rejected: %s", e)
            ok = False
        if piece is not None and (piece.x, piece.y) != before:
            self.moves += 1
            self._check_solved()
        return ok

    def _check_solved(self) -> None:
        assert self.level is not None
        if self.solved or not self.level.is_solved():
            return
        self.solved = True
        logger.info("Level %d solved in %d moves", self.level_index, self.moves)
        try:
            self.progress.mark_solved(self.level_index)
        finally:
            for callback in self._callbacks:
                callback(self.level_index, self)

    def get_state(self) -> dict:
        assert self.level is not None
        return {
            "level_index": self.level_index,
            "n": self.level.n,
            "exit": self.level.exit.value,
            "pieces": [piece.to_dict() for piece in self.level.pieces],
            "moves": self.moves,
            "solved": self.solved,
            "progress": list(self.progress.solved),
        }
