"""Player-facing game session built on top of a generated solution.

The session owns everything that used to be process-wide state: the
player's marks, the mistake counter, the clock and the win/loss status.
Rendering and input translation stay with the caller, which only needs
:meth:`GameSession.apply_action`.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Tuple

from ..core.constants import ActionMode, DEFAULT_MAX_MISTAKES, PlayerMark, SessionStatus
from ..core.models import ActionResult
from ..engine.generator import GeneratorConfig, PuzzleGenerator
from ..engine.grid import PuzzleGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


class GameSession:
    """One round of play against a fixed solution grid.

    Wrong actions are corrected on the spot: filling an empty cell crosses
    it instead and crossing a filled cell fills it, each costing a mistake.
    Reaching ``max_mistakes`` loses the game.
    """

    def __init__(
        self,
        solution: PuzzleGrid,
        max_mistakes: int = DEFAULT_MAX_MISTAKES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_mistakes < 1:
            raise ValueError(f"max_mistakes must be at least 1, got {max_mistakes}")
        self.solution = solution.copy()
        self.max_mistakes = max_mistakes
        self.clock = clock
        size = self.solution.size
        self.player: List[List[PlayerMark]] = [[PlayerMark.BLANK] * size for _ in range(size)]
        self.mistakes = 0
        self.status = SessionStatus.PLAYING
        self.row_hints = self.solution.row_hints()
        self.column_hints = self.solution.column_hints()
        self._started_at = clock()
        self._finished_at: Optional[float] = None

    @classmethod
    def new(
        cls,
        config: Optional[GeneratorConfig] = None,
        validated: bool = True,
        max_mistakes: int = DEFAULT_MAX_MISTAKES,
    ) -> "GameSession":
        """Start a session on a freshly generated puzzle."""
        generator = PuzzleGenerator(config)
        solution = generator.generate_validated() if validated else generator.generate()
        return cls(solution, max_mistakes=max_mistakes)

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self.solution.size

    @property
    def is_over(self) -> bool:
        return self.status != SessionStatus.PLAYING

    @property
    def elapsed_seconds(self) -> float:
        end = self._finished_at if self._finished_at is not None else self.clock()
        return end - self._started_at

    def mark(self, row: int, col: int) -> PlayerMark:
        self._check_bounds(row, col)
        return self.player[row][col]

    # ------------------------------------------------------------------
    # Player input
    # ------------------------------------------------------------------
    def apply_action(self, row: int, col: int, mode: ActionMode) -> ActionResult:
        """Apply one fill or cross action to a blank cell."""
        self._check_bounds(row, col)
        current = self.player[row][col]
        if self.is_over or current != PlayerMark.BLANK:
            return ActionResult(row=row, col=col, applied=False, mark=current, status=self.status)

        should_fill = self.solution.cell(row, col)
        wants_fill = mode == ActionMode.FILL
        mistake = should_fill != wants_fill
        mark = PlayerMark.FILLED if should_fill else PlayerMark.CROSSED
        self.player[row][col] = mark

        result = ActionResult(row=row, col=col, applied=True, mark=mark, mistake=mistake)
        if mistake:
            self._register_mistake(row, col)
        else:
            result.auto_crossed = self._auto_cross(row, col)
        self._check_win()
        result.status = self.status
        return result

    def _register_mistake(self, row: int, col: int) -> None:
        self.mistakes += 1
        LOGGER.debug("Mistake %d/%d at (%d,%d)", self.mistakes, self.max_mistakes, row, col)
        if self.mistakes >= self.max_mistakes:
            self._finish(SessionStatus.LOST)

    def _auto_cross(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Cross the blanks of any line whose filled count is complete."""
        crossed: List[Tuple[int, int]] = []
        if self.is_over:
            return crossed
        size = self.size
        row_cells = [(row, c) for c in range(size)]
        col_cells = [(r, col) for r in range(size)]
        for cells in (row_cells, col_cells):
            target = sum(1 for r, c in cells if self.solution.cell(r, c))
            current = sum(1 for r, c in cells if self.player[r][c] == PlayerMark.FILLED)
            if target == 0 or target != current:
                continue
            for r, c in cells:
                if self.player[r][c] == PlayerMark.BLANK:
                    self.player[r][c] = PlayerMark.CROSSED
                    crossed.append((r, c))
        return crossed

    def _check_win(self) -> None:
        if self.is_over:
            return
        for r in range(self.size):
            for c in range(self.size):
                filled = self.player[r][c] == PlayerMark.FILLED
                if filled != self.solution.cell(r, c):
                    return
        self._finish(SessionStatus.WON)

    def _finish(self, status: SessionStatus) -> None:
        self.status = status
        self._finished_at = self.clock()
        LOGGER.info(
            "Game %s after %.0fs with %d mistakes",
            status.value.lower(), self.elapsed_seconds, self.mistakes,
        )

    def _check_bounds(self, row: int, col: int) -> None:
        if not self.solution.bounds.contains(row, col):
            raise IndexError(f"Cell ({row},{col}) outside {self.size}x{self.size} board")
