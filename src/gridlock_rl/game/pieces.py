from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


Cell = Tuple[int, int]


@dataclass
class Piece:
    """Straight 1xN piece sliding along its own axis.

    (x, y) is the top-left cell. A one-cell piece stays HORIZONTAL since
    nothing in the layout tells otherwise.
    """

    name: str
    x: int
    y: int
    orientation: Orientation = Orientation.HORIZONTAL
    size: int = 1
    main: bool = False

    @property
    def horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    def contains(self, x: int, y: int) -> bool:
        if self.horizontal:
            return y == self.y and self.x <= x < self.x + self.size
        return x == self.x and self.y <= y < self.y + self.size

    def cells(self) -> List[Cell]:
        if self.horizontal:
            return [(self.x + i, self.y) for i in range(self.size)]
        return [(self.x, self.y + i) for i in range(self.size)]

    def edge_beyond(self, direction: int) -> Cell:
        """Cell just past the leading (+1) or trailing (-1) end of the piece."""
        if self.horizontal:
            dest_x = self.x - 1 if direction == -1 else self.x + self.size
            return dest_x, self.y
        dest_y = self.y - 1 if direction == -1 else self.y + self.size
        return self.x, dest_y

    def shift(self, direction: int) -> None:
        if self.horizontal:
            self.x += direction
        else:
            self.y += direction

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "orientation": self.orientation.value,
            "size": self.size,
            "main": self.main,
        }
