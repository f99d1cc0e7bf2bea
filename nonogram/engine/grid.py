"""Solution grid representation and helper utilities."""

from __future__ import annotations

from typing import List, Sequence

from ..core.constants import Bounds
from .hints import hints


FILLED_SYMBOLS = frozenset("#X1")
EMPTY_SYMBOLS = frozenset(".-0 ")


class PuzzleGrid:
    """Square grid of filled/empty cells holding a puzzle solution."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.bounds = Bounds(size=size)
        self.cells: List[List[bool]] = [[False] * size for _ in range(size)]

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------
    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[object]]) -> "PuzzleGrid":
        size = len(rows)
        grid = cls(size)
        for r, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(
                    f"Row {r} has {len(row)} cells; a {size}x{size} grid needs {size}"
                )
            grid.cells[r] = [bool(value) for value in row]
        return grid

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "PuzzleGrid":
        """Build a grid from text rows using ``#`` for filled and ``.`` for empty."""
        rows: List[List[bool]] = []
        for line in lines:
            row: List[bool] = []
            for symbol in line:
                if symbol in FILLED_SYMBOLS:
                    row.append(True)
                elif symbol in EMPTY_SYMBOLS:
                    row.append(False)
                else:
                    raise ValueError(f"Unknown cell symbol {symbol!r} in {line!r}")
            rows.append(row)
        return cls.from_rows(rows)

    def copy(self) -> "PuzzleGrid":
        return PuzzleGrid.from_rows(self.cells)

    # ------------------------------------------------------------------
    # Cell and line access
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return self.bounds.size

    def cell(self, row: int, col: int) -> bool:
        if not self.bounds.contains(row, col):
            raise IndexError(f"Cell ({row},{col}) outside {self.size}x{self.size} grid")
        return self.cells[row][col]

    def set_cell(self, row: int, col: int, filled: bool = True) -> None:
        if not self.bounds.contains(row, col):
            raise IndexError(f"Cell ({row},{col}) outside {self.size}x{self.size} grid")
        self.cells[row][col] = bool(filled)

    def row(self, index: int) -> List[bool]:
        return list(self.cells[index])

    def column(self, index: int) -> List[bool]:
        return [self.cells[r][index] for r in range(self.size)]

    def set_row(self, index: int, values: Sequence[object]) -> None:
        self._check_line(values)
        self.cells[index] = [bool(value) for value in values]

    def set_column(self, index: int, values: Sequence[object]) -> None:
        self._check_line(values)
        for r, value in enumerate(values):
            self.cells[r][index] = bool(value)

    def rows(self) -> List[List[bool]]:
        return [self.row(r) for r in range(self.size)]

    def columns(self) -> List[List[bool]]:
        return [self.column(c) for c in range(self.size)]

    def _check_line(self, values: Sequence[object]) -> None:
        if len(values) != self.size:
            raise ValueError(f"Line has {len(values)} cells, expected {self.size}")

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------
    @property
    def filled_count(self) -> int:
        return sum(sum(1 for value in row if value) for row in self.cells)

    def row_hints(self) -> List[List[int]]:
        return [hints(row) for row in self.cells]

    def column_hints(self) -> List[List[int]]:
        return [hints(column) for column in self.columns()]

    def to_strings(self, filled: str = "#", empty: str = ".") -> List[str]:
        return ["".join(filled if value else empty for value in row) for row in self.cells]

    def to_jsonable(self) -> dict:
        return {
            "size": self.size,
            "cells": [[1 if value else 0 for value in row] for row in self.cells],
            "row_hints": self.row_hints(),
            "column_hints": self.column_hints(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PuzzleGrid):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        return f"PuzzleGrid(size={self.size}, filled={self.filled_count})"
