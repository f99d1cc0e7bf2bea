"""Puzzle generation orchestration.

Two-phase approach:
  1. Stamp: OR a handful of random rectangles into an empty grid.
  2. Repair: merge runs across the narrowest gaps until every row and column
     holds at most ``max_runs`` runs, then check the fill balance.

``generate_validated`` additionally rejects boards that line logic cannot
fully determine.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, MutableSequence, Optional

from ..core.constants import DEFAULT_MAX_RUNS, DEFAULT_SIZE
from .grid import PuzzleGrid
from .hints import find_runs
from .validator import is_solvable_by_logic
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    size: int = DEFAULT_SIZE
    seed: Optional[int] = None
    min_stamps: int = 3
    max_stamps: int = 5
    min_stamp_size: int = 4
    max_stamp_size: int = 9
    max_runs: int = DEFAULT_MAX_RUNS
    max_repair_passes: int = 20
    min_filled: int = 20
    max_filled: int = 180
    retry_limit: int = 10
    validation_attempts: int = 100

    def validate(self) -> None:
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if not 0 < self.min_stamps <= self.max_stamps:
            raise ValueError(
                f"stamp count range [{self.min_stamps}, {self.max_stamps}] is invalid"
            )
        if not 0 < self.min_stamp_size <= self.max_stamp_size:
            raise ValueError(
                f"stamp size range [{self.min_stamp_size}, {self.max_stamp_size}] is invalid"
            )
        if self.max_runs < 1:
            raise ValueError(f"max_runs must be at least 1, got {self.max_runs}")
        if self.min_filled >= self.max_filled:
            raise ValueError(
                f"min_filled ({self.min_filled}) must be below max_filled ({self.max_filled})"
            )
        if self.retry_limit < 1 or self.validation_attempts < 1:
            raise ValueError("retry_limit and validation_attempts must be at least 1")


def merge_line(line: MutableSequence[bool], max_runs: int = DEFAULT_MAX_RUNS) -> bool:
    """Merge runs in place until ``line`` holds at most ``max_runs`` runs.

    The two runs separated by the narrowest gap are joined first; on equal
    gaps the leftmost pair wins. Only empty cells are ever filled. Returns
    whether the line changed.
    """
    changed = False
    runs = find_runs(line)
    while len(runs) > max_runs:
        merge_index = 0
        min_gap = len(line)
        for i in range(len(runs) - 1):
            gap = runs[i + 1].start - runs[i].end
            if gap < min_gap:
                min_gap = gap
                merge_index = i
        left, right = runs[merge_index], runs[merge_index + 1]
        for k in range(left.end + 1, right.start):
            line[k] = True
        changed = True
        runs = find_runs(line)
    return changed


class PuzzleGenerator:
    """Produces solution grids satisfying the run-count and balance rules."""

    def __init__(self, config: Optional[GeneratorConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GeneratorConfig()
        self.config.validate()
        self.rng = rng or random.Random(self.config.seed)
        # Set by the last generate / generate_validated call when it fell back.
        self.used_fallback = False
        self.validation_exhausted = False

    # ------------------------------------------------------------------
    # Public entrypoints
    # ------------------------------------------------------------------
    def generate(self) -> PuzzleGrid:
        self.used_fallback = False
        for attempt in range(1, self.config.retry_limit + 1):
            grid = PuzzleGrid(self.config.size)
            self.stamp(grid)
            converged = self.repair(grid)
            filled = grid.filled_count
            if converged and self.is_balanced(grid):
                LOGGER.debug(
                    "Generation attempt %s/%s accepted with %d filled cells",
                    attempt, self.config.retry_limit, filled,
                )
                return grid
            LOGGER.debug(
                "Generation attempt %s/%s rejected (filled=%d, repair converged=%s)",
                attempt, self.config.retry_limit, filled, converged,
            )
        self.used_fallback = True
        LOGGER.warning(
            "No balanced grid after %s attempts; using the last one (%d filled)",
            self.config.retry_limit, grid.filled_count,
        )
        return grid

    def generate_validated(self, max_attempts: Optional[int] = None) -> PuzzleGrid:
        attempts = max_attempts if max_attempts is not None else self.config.validation_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {attempts}")
        self.validation_exhausted = False
        for attempt in range(1, attempts + 1):
            grid = self.generate()
            if is_solvable_by_logic(grid):
                LOGGER.info("Logic-solvable puzzle found on attempt %s/%s", attempt, attempts)
                return grid
            LOGGER.debug("Attempt %s/%s needs guessing; regenerating", attempt, attempts)
        self.validation_exhausted = True
        LOGGER.warning(
            "Could not generate a purely logic-solvable board in %s attempts; using the last one",
            attempts,
        )
        return grid

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def stamp(self, grid: PuzzleGrid) -> None:
        """OR random rectangles into ``grid``; overlaps are allowed."""
        size = grid.size
        count = self.rng.randint(self.config.min_stamps, self.config.max_stamps)
        for _ in range(count):
            width = min(self.rng.randint(self.config.min_stamp_size, self.config.max_stamp_size), size)
            height = min(self.rng.randint(self.config.min_stamp_size, self.config.max_stamp_size), size)
            col = self.rng.randrange(size - width + 1)
            row = self.rng.randrange(size - height + 1)
            LOGGER.debug("Stamping %dx%d rectangle at (%d,%d)", height, width, row, col)
            for r in range(row, row + height):
                for c in range(col, col + width):
                    grid.cells[r][c] = True

    def repair(self, grid: PuzzleGrid) -> bool:
        """Run row and column merge passes until stable or out of passes.

        Returns ``True`` when a pass completed without changes, meaning every
        line now satisfies the run limit.
        """
        max_runs = self.config.max_runs
        for repair_pass in range(1, self.config.max_repair_passes + 1):
            changed = False
            for r in range(grid.size):
                row = grid.row(r)
                if merge_line(row, max_runs):
                    grid.set_row(r, row)
                    changed = True
            for c in range(grid.size):
                column = grid.column(c)
                if merge_line(column, max_runs):
                    grid.set_column(c, column)
                    changed = True
            if not changed:
                LOGGER.debug("Repair converged after %d passes", repair_pass)
                return True
        return False

    def is_balanced(self, grid: PuzzleGrid) -> bool:
        return self.config.min_filled < grid.filled_count < self.config.max_filled


def generate(config: Optional[GeneratorConfig] = None) -> PuzzleGrid:
    """Generate one solution grid with a fresh :class:`PuzzleGenerator`."""
    return PuzzleGenerator(config).generate()


def generate_validated(max_attempts: Optional[int] = None, config: Optional[GeneratorConfig] = None) -> PuzzleGrid:
    """Generate grids until one is solvable by line logic or attempts run out."""
    return PuzzleGenerator(config).generate_validated(max_attempts)


def line_run_counts(grid: PuzzleGrid) -> List[int]:
    """Run counts of every row followed by every column."""
    return [len(find_runs(line)) for line in grid.rows() + grid.columns()]
