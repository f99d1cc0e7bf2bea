"""Exact single-line solver.

Every placement of a line's runs that agrees with the already-known cells is
enumerated; the cells on which all surviving placements agree are forced.
This finds everything single-line reasoning can prove and nothing that needs
cross-line guessing.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from ..core.constants import CellState
from ..core.exceptions import LineConflictError
from ..core.models import LineSolution
from .hints import min_line_length, normalize_hints

Placement = Tuple[CellState, ...]


def enumerate_placements(
    length: int,
    line_hints: Sequence[int],
    known: Optional[Sequence[CellState]] = None,
) -> Iterator[Placement]:
    """Yield every placement of ``line_hints`` consistent with ``known``.

    Runs are laid out left to right with at least one empty cell between
    consecutive runs. A run never starts past the point where the remaining
    runs and their separators would no longer fit, and a segment that
    contradicts a known cell is abandoned before recursing further.
    """
    runs = normalize_hints(line_hints)
    if known is None:
        known = [CellState.UNKNOWN] * length
    elif len(known) != length:
        raise ValueError(f"Known line has {len(known)} cells, expected {length}")
    if min_line_length(line_hints) > length:
        raise ValueError(f"Hints {list(line_hints)} cannot fit a line of length {length}")

    # room_after[i]: cells required by runs after run i, separators included.
    room_after = [0] * len(runs)
    for i in range(len(runs) - 2, -1, -1):
        room_after[i] = room_after[i + 1] + runs[i + 1] + 1

    def _fits(offset: int, segment: Sequence[CellState]) -> bool:
        for i, value in enumerate(segment):
            state = known[offset + i]
            if state != CellState.UNKNOWN and state != value:
                return False
        return True

    def _place(index: int, run_index: int, prefix: List[CellState]) -> Iterator[Placement]:
        if run_index == len(runs):
            tail = [CellState.EMPTY] * (length - index)
            if _fits(index, tail):
                yield tuple(prefix + tail)
            return

        block = runs[run_index]
        is_last = run_index == len(runs) - 1
        max_start = length - room_after[run_index] - block
        for start in range(index, max_start + 1):
            if start > index and known[start - 1] == CellState.FILLED:
                # A filled cell would fall into the leading gap, and so it
                # would for every later start.
                break
            segment = [CellState.EMPTY] * (start - index) + [CellState.FILLED] * block
            if not is_last:
                segment.append(CellState.EMPTY)
            if not _fits(index, segment):
                continue
            yield from _place(index + len(segment), run_index + 1, prefix + segment)

    yield from _place(0, 0, [])


def solve_line_detailed(known: Sequence[CellState], line_hints: Sequence[int]) -> LineSolution:
    """Intersect all consistent placements; see :func:`solve_line`."""
    result: Optional[List[CellState]] = None
    count = 0
    for placement in enumerate_placements(len(known), line_hints, known):
        count += 1
        if result is None:
            result = list(placement)
            continue
        for i, value in enumerate(placement):
            if result[i] != value:
                result[i] = CellState.UNKNOWN

    if result is None:
        raise LineConflictError(line_hints, known)
    return LineSolution(cells=result, placements=count)


def solve_line(known: Sequence[CellState], line_hints: Sequence[int]) -> List[CellState]:
    """Return the cells forced by ``line_hints`` given the ``known`` cells.

    Cells on which every surviving placement agrees take that value; the rest
    are ``CellState.UNKNOWN``. Raises :class:`LineConflictError` when the known
    cells rule out every placement.
    """
    return solve_line_detailed(known, line_hints).cells
