"""Shared constants and enumerations for the nonogram engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


DEFAULT_SIZE = 15
DEFAULT_MAX_RUNS = 2
DEFAULT_MAX_MISTAKES = 5


class CellState(str, Enum):
    """Solver knowledge about a single cell."""

    UNKNOWN = "UNKNOWN"
    FILLED = "FILLED"
    EMPTY = "EMPTY"


class PlayerMark(str, Enum):
    """What the player has put into a cell."""

    BLANK = "BLANK"
    FILLED = "FILLED"
    CROSSED = "CROSSED"


class ActionMode(str, Enum):
    """Input modes offered to the player."""

    FILL = "FILL"
    CROSS = "CROSS"


class SessionStatus(str, Enum):
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


class Axis(str, Enum):
    """Line orientation inside a grid."""

    ROW = "ROW"
    COLUMN = "COLUMN"


@dataclass(frozen=True)
class Bounds:
    """Simple square bounds helper."""

    size: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size
