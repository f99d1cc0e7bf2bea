"""Custom exception hierarchy for the nonogram engine."""

from __future__ import annotations

from typing import Sequence


class NonogramError(Exception):
    """Base exception for engine failures."""


class LineConflictError(NonogramError):
    """Raised when the known cells of a line admit no placement of its hints."""

    def __init__(self, hints: Sequence[int], known: Sequence[object]) -> None:
        self.hints = list(hints)
        self.known = list(known)
        super().__init__(
            f"No placement of hints {self.hints} fits a line of length {len(self.known)}"
        )
