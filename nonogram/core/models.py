"""Data models shared by the engine and the game session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .constants import CellState, PlayerMark, SessionStatus


@dataclass(frozen=True)
class Run:
    """A maximal span of filled cells inside one line."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length - 1


@dataclass
class LineSolution:
    """Intersection of every placement that survived the known cells."""

    cells: List[CellState]
    placements: int


@dataclass
class ActionResult:
    """Outcome of a single player action on the board."""

    row: int
    col: int
    applied: bool
    mark: PlayerMark
    mistake: bool = False
    auto_crossed: List[Tuple[int, int]] = field(default_factory=list)
    status: SessionStatus = SessionStatus.PLAYING
