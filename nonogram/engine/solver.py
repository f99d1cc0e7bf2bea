"""CP-SAT whole-grid nonogram solver using OR-Tools.

Each line's hints are compiled into a small automaton over 0/1 labels and
attached to the line's cell variables. Unlike the line-logic checker this
solver searches, so it can tell whether a puzzle has exactly one solution.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from .grid import PuzzleGrid
from .hints import normalize_hints
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

Transition = Tuple[int, int, int]


def hints_automaton(line_hints: Sequence[int]) -> Tuple[List[Transition], List[int]]:
    """Build the transitions and final states accepting exactly ``line_hints``.

    State 0 reads leading empty cells. Every filled cell of every run gets its
    own state; after a run, a gap state loops on empty cells and hands over
    to the next run on a filled cell. The last run's end and its trailing gap
    are the accepting states.
    """
    runs = normalize_hints(line_hints)
    transitions: List[Transition] = [(0, 0, 0)]
    if not runs:
        return transitions, [0]

    next_state = 1
    entry = 0
    run_end = 0
    for run in runs:
        for _ in range(run):
            transitions.append((entry, 1, next_state))
            entry = next_state
            next_state += 1
        run_end = entry
        gap = next_state
        next_state += 1
        transitions.append((run_end, 0, gap))
        transitions.append((gap, 0, gap))
        entry = gap
    return transitions, [run_end, entry]


def _build_model(
    row_hints: Sequence[Sequence[int]],
    column_hints: Sequence[Sequence[int]],
) -> Tuple[cp_model.CpModel, List[List[cp_model.IntVar]]]:
    if len(row_hints) != len(column_hints):
        raise ValueError(
            f"Square puzzle expected, got {len(row_hints)} rows and {len(column_hints)} columns"
        )
    size = len(row_hints)
    model = cp_model.CpModel()
    cells = [[model.new_bool_var(f"x_{r}_{c}") for c in range(size)] for r in range(size)]

    for r, line_hints in enumerate(row_hints):
        transitions, finals = hints_automaton(line_hints)
        model.add_automaton(cells[r], 0, finals, transitions)
    for c, line_hints in enumerate(column_hints):
        transitions, finals = hints_automaton(line_hints)
        model.add_automaton([cells[r][c] for r in range(size)], 0, finals, transitions)
    return model, cells


def _exclude(model: cp_model.CpModel, cells: List[List[cp_model.IntVar]], grid: PuzzleGrid) -> None:
    """Forbid ``grid`` as a solution by requiring at least one flipped cell."""
    literals = []
    for r, row in enumerate(cells):
        for c, var in enumerate(row):
            literals.append(~var if grid.cell(r, c) else var)
    model.add_bool_or(literals)


def solve_puzzle(
    row_hints: Sequence[Sequence[int]],
    column_hints: Sequence[Sequence[int]],
    timeout: float = 10.0,
    exclude: Optional[Sequence[PuzzleGrid]] = None,
) -> Optional[PuzzleGrid]:
    """Solve a square puzzle from its hints.

    Args:
        row_hints: Hint sequence per row, top to bottom.
        column_hints: Hint sequence per column, left to right.
        timeout: Solver time limit in seconds.
        exclude: Grids that must not be returned.

    Returns:
        A solution grid, or None if none exists within the time limit.
    """
    model, cells = _build_model(row_hints, column_hints)
    for grid in exclude or ():
        _exclude(model, cells, grid)

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4

    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.debug("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        return None

    LOGGER.debug("CP-SAT: solution found in %.2fs", solver.wall_time)
    size = len(row_hints)
    grid = PuzzleGrid(size)
    for r in range(size):
        for c in range(size):
            grid.cells[r][c] = bool(solver.boolean_value(cells[r][c]))
    return grid


def distinct_solutions(
    row_hints: Sequence[Sequence[int]],
    column_hints: Sequence[Sequence[int]],
    limit: int = 2,
    timeout: float = 10.0,
) -> List[PuzzleGrid]:
    """Collect up to ``limit`` different solutions of the same hints."""
    found: List[PuzzleGrid] = []
    while len(found) < limit:
        grid = solve_puzzle(row_hints, column_hints, timeout=timeout, exclude=found)
        if grid is None:
            break
        found.append(grid)
    return found


def has_unique_solution(
    row_hints: Sequence[Sequence[int]],
    column_hints: Sequence[Sequence[int]],
    timeout: float = 10.0,
) -> bool:
    """Return whether the hints admit exactly one solution."""
    solutions = distinct_solutions(row_hints, column_hints, limit=2, timeout=timeout)
    if len(solutions) > 1:
        LOGGER.info("Puzzle has more than one solution")
    return len(solutions) == 1
