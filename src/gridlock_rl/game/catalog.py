from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Sequence

from .errors import FormatError
from .level import MAIN_CHAR, ExitEdge, Level

logger = logging.getLogger(__name__)

EXIT_DIRECTIVE = "# exit:"


@dataclass(frozen=True)
class LevelEntry:
    description: str
    exit: ExitEdge = ExitEdge.RIGHT


BUILTIN_LEVELS: List[LevelEntry] = [
    LevelEntry(
        "A.....\n"
        "A..B..\n"
        "RR.B..\n"
        "...B..\n"
        "..CC..\n"
        "......"
    ),
    LevelEntry(
        "AAB.FF\n"
        "..B.C.\n"
        "RRB.C.\n"
        "...DDD\n"
        ".....E\n"
        ".....E"
    ),
    LevelEntry(
        "......\n"
        "AAA..B\n"
        ".....B\n"
        "..R...\n"
        "..R.CC\n"
        "......",
        exit=ExitEdge.TOP,
    ),
    LevelEntry(
        "A.DD.\n"
        "A.B..\n"
        "RRB..\n"
        "..CCC\n"
        "....."
    ),
]


class LevelCatalog:
    """Ordered, index-addressable sequence of level descriptions."""

    def __init__(self, entries: Sequence[LevelEntry]) -> None:
        self.entries = list(entries)

    @classmethod
    def default(cls) -> "LevelCatalog":
        return cls(BUILTIN_LEVELS)

    @classmethod
    def from_text(cls, text: str, main_char: str = MAIN_CHAR) -> "LevelCatalog":
        """Read blank-line separated levels.

        A ``# exit: top`` line inside a block sets that level's exit edge.
        Every level is parsed once here so malformed input fails at load time.
        """
        entries: List[LevelEntry] = []
        for block in _split_blocks(text):
            exit = ExitEdge.RIGHT
            rows: List[str] = []
            for line in block:
                if line.startswith(EXIT_DIRECTIVE):
                    value = line[len(EXIT_DIRECTIVE):].strip().lower()
                    try:
                        exit = ExitEdge(value)
                    except ValueError:
                        raise FormatError(f"unknown exit edge {value!r}") from None
                else:
                    rows.append(line)
            entry = LevelEntry("\n".join(rows), exit)
            Level.parse(entry.description, entry.exit, main_char)
            entries.append(entry)
        return cls(entries)

    @classmethod
    def from_file(cls, path: str | Path, main_char: str = MAIN_CHAR) -> "LevelCatalog":
        text = Path(path).read_text(encoding="utf-8")
        catalog = cls.from_text(text, main_char)
        logger.info("Loaded %d levels from %s", len(catalog), path)
        return catalog

    def load(self, index: int, main_char: str = MAIN_CHAR) -> Level:
        entry = self[index]
        return Level.parse(entry.description, entry.exit, main_char)

    def __getitem__(self, index: int) -> LevelEntry:
        if index < 0 or index >= len(self.entries):
            raise IndexError(f"level {index} out of range (0..{len(self.entries) - 1})")
        return self.entries[index]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[LevelEntry]:
        return iter(self.entries)


def _split_blocks(text: str) -> List[List[str]]:
    blocks: List[List[str]] = []
    current: List[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            if current:
                blocks.append(current)
                current = []
            continue
        current.append(line)
    if current:
        blocks.append(current)
    return blocks
