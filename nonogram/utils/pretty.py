"""Pretty-print helpers for nonogram grids."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING, List, Optional, Sequence

if TYPE_CHECKING:
    from ..engine.grid import PuzzleGrid
    from ..engine.validator import SolvabilityReport


FILLED = "#"
EMPTY = "."


def _hint_label(line_hints: Sequence[int]) -> str:
    return " ".join(str(h) for h in line_hints)


def format_grid(grid: PuzzleGrid, *, show_hints: bool = True) -> str:
    """Render the grid with row hints on the left and column hints on top."""
    size = grid.size
    row_labels = [_hint_label(h) for h in grid.row_hints()] if show_hints else [""] * size
    label_width = max(len(label) for label in row_labels)
    lines: List[str] = []

    if show_hints:
        column_hints = grid.column_hints()
        depth = max(len(h) for h in column_hints)
        for level in range(depth):
            cells = []
            for h in column_hints:
                offset = depth - len(h)
                cells.append(f"{h[level - offset]:>2}" if level >= offset else "  ")
            lines.append(" " * label_width + " | " + " ".join(cells))
        lines.append(" " * label_width + " +" + "-" * (3 * size))

    for r in range(size):
        cells = [f"{FILLED if value else EMPTY:>2}" for value in grid.row(r)]
        lines.append(row_labels[r].rjust(label_width) + " | " + " ".join(cells))
    return "\n".join(lines)


def pretty_print_grid(grid: PuzzleGrid, *, label: str | None = None, stream=None) -> None:
    """Print the puzzle grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def compute_stats(grid: PuzzleGrid, report: Optional[SolvabilityReport] = None) -> dict:
    total_cells = grid.size * grid.size
    filled = grid.filled_count
    runs_per_line = [len(h) if h != [0] else 0 for h in grid.row_hints() + grid.column_hints()]
    stats: dict = {
        "grid": {
            "size": grid.size,
            "total_cells": total_cells,
            "filled_cells": filled,
            "fill_pct": round(filled / total_cells * 100, 1),
        },
        "hints": {
            "max_runs_per_line": max(runs_per_line),
            "blank_lines": runs_per_line.count(0),
            "runs_distribution": {str(k): v for k, v in sorted(Counter(runs_per_line).items())},
        },
    }
    if report is not None:
        stats["logic"] = {
            "solvable": report.solved,
            "rounds": report.rounds,
            "determined_cells": report.determined_cells,
            "unknown_cells": report.unknown_cells,
        }
    return stats


def print_puzzle_stats(
    grid: PuzzleGrid,
    report: Optional[SolvabilityReport] = None,
    *,
    label: str | None = None,
    stream=None,
) -> None:
    """Print grid + stats for a generated puzzle."""

    stream = stream or sys.stdout
    stats = compute_stats(grid, report)
    pretty_print_grid(grid, label=label, stream=stream)

    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.size} x {grid.size} ({stats['grid']['total_cells']} cells)", file=stream)
    print(f"  Filled:        {stats['grid']['filled_cells']} ({stats['grid']['fill_pct']:.0f}%)", file=stream)

    print(file=stream)
    print("--- Hints ---", file=stream)
    print(f"  Max runs/line: {stats['hints']['max_runs_per_line']}", file=stream)
    print(f"  Blank lines:   {stats['hints']['blank_lines']}", file=stream)
    dist_parts = [f"{k}:{v}" for k, v in stats["hints"]["runs_distribution"].items()]
    print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)

    if report is not None:
        print(file=stream)
        print("--- Logic ---", file=stream)
        print(f"  Solvable:      {'yes' if report.solved else 'no'}", file=stream)
        print(f"  Rounds:        {report.rounds}", file=stream)
        print(f"  Determined:    {report.determined_cells}/{stats['grid']['total_cells']}", file=stream)
