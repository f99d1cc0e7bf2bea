"""Run scanning and hint extraction for single lines."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from ..core.constants import CellState
from ..core.models import Run


def is_filled(value: object) -> bool:
    """Treat ``CellState.FILLED`` and truthy bits as filled cells."""
    if isinstance(value, CellState):
        return value == CellState.FILLED
    return bool(value)


def find_runs(line: Iterable[object]) -> List[Run]:
    runs: List[Run] = []
    start = -1
    index = -1
    for index, value in enumerate(line):
        if is_filled(value):
            if start < 0:
                start = index
        elif start >= 0:
            runs.append(Run(start=start, length=index - start))
            start = -1
    if start >= 0:
        runs.append(Run(start=start, length=index - start + 1))
    return runs


def count_runs(line: Iterable[object]) -> int:
    return len(find_runs(line))


def hints(line: Iterable[object]) -> List[int]:
    """Return the run lengths of ``line``, or ``[0]`` when nothing is filled.

    The result is never empty; every consumer relies on ``[0]`` standing for
    a blank line.
    """
    lengths = [run.length for run in find_runs(line)]
    return lengths or [0]


def normalize_hints(line_hints: Sequence[int]) -> Tuple[int, ...]:
    """Validate a hint sequence and return its positive run lengths.

    ``[0]`` normalizes to an empty tuple. Empty sequences, negative values and
    zeros mixed with runs are rejected with :class:`ValueError`.
    """
    values = tuple(int(value) for value in line_hints)
    if not values:
        raise ValueError("Hint sequence must not be empty; use [0] for a blank line")
    if values == (0,):
        return ()
    if any(value <= 0 for value in values):
        raise ValueError(f"Malformed hint sequence {list(values)}")
    return values


def min_line_length(line_hints: Sequence[int]) -> int:
    """Smallest line able to hold the runs with one separator between each."""
    runs = normalize_hints(line_hints)
    if not runs:
        return 0
    return sum(runs) + len(runs) - 1
