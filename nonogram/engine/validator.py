"""Line-logic solvability validation for generated puzzles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..core.constants import Axis, CellState
from ..core.exceptions import LineConflictError
from .grid import PuzzleGrid
from .line_solver import solve_line
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

Knowledge = List[List[CellState]]


@dataclass
class SolvabilityReport:
    solved: bool
    rounds: int
    unknown_cells: int
    determined_cells: int
    conflicts: List[Tuple[Axis, int]] = field(default_factory=list)


class SolvabilityChecker:
    """Propagates line solutions across rows and columns until nothing changes.

    The solution grid is only read to derive hints; all deductions happen in
    a private knowledge grid that starts fully unknown.
    """

    def __init__(self, max_rounds: Optional[int] = None) -> None:
        self.max_rounds = max_rounds

    def check(self, grid: PuzzleGrid) -> SolvabilityReport:
        size = grid.size
        row_hints = grid.row_hints()
        column_hints = grid.column_hints()
        knowledge: Knowledge = [[CellState.UNKNOWN] * size for _ in range(size)]
        conflicts: List[Tuple[Axis, int]] = []

        # Every round but the last determines at least one cell.
        limit = self.max_rounds if self.max_rounds is not None else size * size + 1
        rounds = 0
        changed = True
        while changed and rounds < limit:
            rounds += 1
            changed = False
            for r in range(size):
                if self._propagate(knowledge, Axis.ROW, r, row_hints[r], conflicts):
                    changed = True
            for c in range(size):
                if self._propagate(knowledge, Axis.COLUMN, c, column_hints[c], conflicts):
                    changed = True

        unknown = sum(row.count(CellState.UNKNOWN) for row in knowledge)
        report = SolvabilityReport(
            solved=unknown == 0,
            rounds=rounds,
            unknown_cells=unknown,
            determined_cells=size * size - unknown,
            conflicts=conflicts,
        )
        LOGGER.debug(
            "Propagation stalled after %d rounds: %d/%d cells determined",
            rounds,
            report.determined_cells,
            size * size,
        )
        return report

    @staticmethod
    def _propagate(
        knowledge: Knowledge,
        axis: Axis,
        index: int,
        line_hints: Sequence[int],
        conflicts: List[Tuple[Axis, int]],
    ) -> bool:
        size = len(knowledge)
        if axis == Axis.ROW:
            line = list(knowledge[index])
        else:
            line = [knowledge[r][index] for r in range(size)]
        if CellState.UNKNOWN not in line:
            return False

        try:
            solved = solve_line(line, line_hints)
        except LineConflictError as exc:
            LOGGER.debug("%s %d yields no update: %s", axis.value.lower(), index, exc)
            if (axis, index) not in conflicts:
                conflicts.append((axis, index))
            return False

        changed = False
        for i, value in enumerate(solved):
            if line[i] == CellState.UNKNOWN and value != CellState.UNKNOWN:
                if axis == Axis.ROW:
                    knowledge[index][i] = value
                else:
                    knowledge[i][index] = value
                changed = True
        return changed


def is_solvable_by_logic(grid: PuzzleGrid) -> bool:
    """Return whether line logic alone determines every cell of ``grid``."""
    return SolvabilityChecker().check(grid).solved
