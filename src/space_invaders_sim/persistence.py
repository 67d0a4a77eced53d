"""
High score storage
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from space_invaders_sim.errors import PersistenceError
from space_invaders_sim.utils import logger


class HighScoreStore(Protocol):
    """Where the best score survives between runs."""

    def load_high_score(self) -> int: ...

    def save_high_score(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """
    Keeps the high score for the life of the process
    """

    def __init__(self, score: int = 0):
        self._score = score

    def load_high_score(self) -> int:
        return self._score

    def save_high_score(self, score: int) -> None:
        self._score = int(score)


class JsonHighScoreStore:
    """
    Keeps the high score in a small JSON file: {"highscore": 1234}
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load_high_score(self) -> int:
        """
        Read the stored high score. A missing file means no score yet.

        :raise PersistenceError: If the file cannot be read or parsed

        :return: int
        """
        if not self.path.exists():
            return 0

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return int(data.get("highscore", 0))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            raise PersistenceError(f"Failed to read {self.path}: {e}") from e

    def save_high_score(self, score: int) -> None:
        """
        :param score: Score to store
        :type score: int

        :raise PersistenceError: If the file cannot be written
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump({"highscore": int(score)}, f)
        except OSError as e:
            raise PersistenceError(f"Failed to write {self.path}: {e}") from e

        logger.debug(f"High score {score} saved to {self.path}")
