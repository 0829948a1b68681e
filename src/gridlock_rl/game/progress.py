from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class ProgressStore:
    """One solved flag per level index, optionally persisted as a JSON list."""

    def __init__(self, solved: List[bool], path: Optional[str | Path] = None) -> None:
        self.solved = list(solved)
        self.path = Path(path) if path is not None else None

    @classmethod
    def load(cls, path: Optional[str | Path], count: int) -> "ProgressStore":
        solved: List[bool] = []
        if path is not None and os.path.exists(path):
            with open(path, "r", encoding="utf-8") as f:
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise ValueError(f"Unreadable progress file '{path}': {e}") from e
            if not isinstance(data, list):
                raise ValueError(f"Progress file '{path}' must hold a JSON list")
            solved = [bool(v) for v in data]
            logger.debug("Loaded progress for %d levels from %s", len(solved), path)
        store = cls(solved, path)
        store.resize(count)
        return store

    def resize(self, count: int) -> None:
        """Pad with unsolved flags or trim to the catalog size."""
        self.solved = (self.solved + [False] * count)[:count]

    def is_solved(self, index: int) -> bool:
        return self.solved[index]

    def mark_solved(self, index: int) -> None:
        if self.solved[index]:
            return
        self.solved[index] = True
        self.save()

    def solved_count(self) -> int:
        return sum(1 for v in self.solved if v)

    def save(self) -> None:
        if self.path is None:
            return
        if self.path.parent and not self.path.parent.exists():
            os.makedirs(self.path.parent, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.solved, f)
        logger.info("Saved progress to %s (%d solved)", self.path, self.solved_count())

    def __len__(self) -> int:
        return len(self.solved)
