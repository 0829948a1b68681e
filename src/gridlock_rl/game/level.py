from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from .errors import AxisViolationError, BlockedMoveError, FormatError, NoPieceError
from .pieces import Orientation, Piece

logger = logging.getLogger(__name__)

EMPTY = "."
MAIN_CHAR = "R"


class ExitEdge(Enum):
    RIGHT = "right"
    LEFT = "left"
    TOP = "top"
    BOTTOM = "bottom"

    @property
    def horizontal(self) -> bool:
        return self in (ExitEdge.RIGHT, ExitEdge.LEFT)


class Level:
    """Square n x n board of straight pieces.

    Pieces are kept in first-seen order and are only ever repositioned,
    never created or removed, once the level is parsed.
    """

    def __init__(self, n: int, pieces: List[Piece], exit: ExitEdge = ExitEdge.RIGHT) -> None:
        self.n = int(n)
        self.pieces = pieces
        self.exit = exit

    # e.g.
    #
    # WWEEEB
    # ..F..B
    # RRF..D
    # ..F..D
    # XYY.Z.
    # X...Z.
    #
    # gives n=6 and nine pieces, R being (0, 2) horizontal of size 2.
    @classmethod
    def parse(cls, description: str, exit: ExitEdge = ExitEdge.RIGHT, main_char: str = MAIN_CHAR) -> "Level":
        if not description.strip():
            raise FormatError("empty level description")
        rows = description.strip().split("\n")
        n = len(rows)

        seen: Dict[str, Piece] = {}
        for row_index, row in enumerate(rows):
            if len(row) != n:
                raise FormatError(f"expected square grid of size {n}, row {row_index} has {len(row)} cells")
            for col_index, cell in enumerate(row):
                if cell == EMPTY:
                    continue
                piece = seen.get(cell)
                if piece is None:
                    seen[cell] = Piece(name=cell, x=col_index, y=row_index)
                    continue
                # Scan order means a straight piece only ever grows at its far end
                if row_index == piece.y and col_index == piece.x + piece.size and (piece.size == 1 or piece.horizontal):
                    piece.orientation = Orientation.HORIZONTAL
                elif col_index == piece.x and row_index == piece.y + piece.size and (piece.size == 1 or not piece.horizontal):
                    piece.orientation = Orientation.VERTICAL
                else:
                    raise FormatError(f"non-straight-line piece {cell!r}")
                piece.size += 1

        main = seen.get(main_char)
        if main is None:
            raise FormatError(f"did not find main piece {main_char!r}")
        main.main = True
        if main.horizontal != exit.horizontal:
            raise FormatError(f"main piece {main_char!r} cannot reach the {exit.value} exit")

        return cls(n, list(seen.values()), exit)

    # ---------- Queries ----------
    @property
    def main_piece(self) -> Piece:
        for piece in self.pieces:
            if piece.main:
                return piece
        raise AssertionError("level has no main piece")

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.n and 0 <= y < self.n

    def piece_at(self, x: int, y: int) -> Optional[Piece]:
        found = [piece for piece in self.pieces if piece.contains(x, y)]
        assert len(found) <= 1, f"overlapping pieces at {(x, y)}: {[p.name for p in found]}"
        return found[0] if found else None

    def can_move_to(self, x: int, y: int) -> bool:
        return self.is_inside(x, y) and self.piece_at(x, y) is None

    def can_step(self, piece_idx: int, direction: int) -> bool:
        if piece_idx < 0 or piece_idx >= len(self.pieces) or direction not in (-1, 1):
            return False
        return self.can_move_to(*self.pieces[piece_idx].edge_beyond(direction))

    def legal_steps(self) -> List[Tuple[int, int]]:
        """List of (piece_idx, direction) single steps currently possible"""
        return [
            (piece_idx, direction)
            for piece_idx in range(len(self.pieces))
            for direction in (-1, 1)
            if self.can_step(piece_idx, direction)
        ]

    def is_solved(self) -> bool:
        main = self.main_piece
        if self.exit is ExitEdge.RIGHT:
            return main.horizontal and main.x == self.n - main.size
        if self.exit is ExitEdge.LEFT:
            return main.horizontal and main.x == 0
        if self.exit is ExitEdge.BOTTOM:
            return not main.horizontal and main.y == self.n - main.size
        return not main.horizontal and main.y == 0

    def occupancy(self, dtype: Optional[np.dtype] = None) -> np.ndarray:
        """n x n grid with 0 for empty cells and piece index + 1 elsewhere.

        The default dtype is the smallest unsigned type holding every piece index.
        """
        if dtype is None:
            dtype = np.min_scalar_type(len(self.pieces))
        grid = np.zeros((self.n, self.n), dtype=dtype)
        for idx, piece in enumerate(self.pieces):
            for x, y in piece.cells():
                grid[y, x] = idx + 1
        return grid

    # ---------- Moves ----------
    def step_one(self, x: int, y: int, direction: int) -> Piece:
        if direction != 1 and direction != -1:
            raise ValueError("can only move by 1")

        piece = self.piece_at(x, y)
        if piece is None:
            raise NoPieceError(f"no piece at {(x, y)}")

        dest = piece.edge_beyond(direction)
        if not self.can_move_to(*dest):
            raise BlockedMoveError(f"can't move {piece.name!r} to {dest}")
        piece.shift(direction)
        return piece

    def move(self, x: int, y: int, to_x: int, to_y: int) -> Piece:
        """Slide the piece grabbed at (x, y) so that cell lands on (to_x, to_y).

        Every intermediate cell is checked one step at a time. When a step is
        blocked the piece stays wherever the last good step left it.
        """
        piece = self.piece_at(x, y)
        if piece is None:
            raise NoPieceError(f"no piece at {(x, y)}")

        if piece.horizontal:
            if to_y != piece.y:
                raise AxisViolationError(f"{piece.name!r} moves along row {piece.y}, not to {(to_x, to_y)}")
            distance = to_x - x
        else:
            if to_x != piece.x:
                raise AxisViolationError(f"{piece.name!r} moves along column {piece.x}, not to {(to_x, to_y)}")
            distance = to_y - y

        direction = 1 if distance > 0 else -1
        for _ in range(abs(distance)):
            self.step_one(piece.x, piece.y, direction)
        if distance:
            logger.debug("moved %s to %s", piece.name, (piece.x, piece.y))
        return piece

    def copy(self) -> "Level":
        return Level(self.n, copy.deepcopy(self.pieces), self.exit)


def format_level(level: Level) -> str:
    rows = [[EMPTY] * level.n for _ in range(level.n)]
    for piece in level.pieces:
        for x, y in piece.cells():
            rows[y][x] = piece.name
    return "\n".join("".join(row) for row in rows)


def print_level(level: Level) -> None:
    print(format_level(level))
