"""Nonogram puzzle generator and line-logic solver.

This package exposes the public API surface via:

- ``nonogram.engine.generator``: ``generate`` / ``generate_validated`` and the
  underlying ``PuzzleGenerator``.
- ``nonogram.engine.hints.hints``: run-length hints for a row or column.
- ``nonogram.engine.validator.is_solvable_by_logic``: line-logic solvability.
- ``nonogram.game.session.GameSession``: player state for one round.
"""

from .engine.generator import GeneratorConfig, PuzzleGenerator, generate, generate_validated
from .engine.grid import PuzzleGrid
from .engine.hints import hints
from .engine.line_solver import solve_line
from .engine.validator import SolvabilityChecker, is_solvable_by_logic
from .game.session import GameSession

__all__ = [
    "GameSession",
    "GeneratorConfig",
    "PuzzleGenerator",
    "PuzzleGrid",
    "SolvabilityChecker",
    "generate",
    "generate_validated",
    "hints",
    "is_solvable_by_logic",
    "solve_line",
]

__version__ = "0.1.0"
