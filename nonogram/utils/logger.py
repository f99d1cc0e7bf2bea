"""Logging setup shared by the generator, checker, solver and game session.

Every module holds a ``LOGGER`` under the ``nonogram`` namespace. Generation
attempts, repair passes and per-line conflicts go to DEBUG; accepted puzzles
and finished games to INFO; fallbacks to the last generated grid to WARNING.
"""

from __future__ import annotations

import logging
from typing import Optional


ROOT_LOGGER_NAME = "nonogram"


def configure_logging(level: int = logging.INFO) -> None:
    """Install one stream handler on the root logger at ``level``.

    The CLI calls this with the level parsed from ``--log-level``.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger below ``nonogram``.

    Defaults are installed only when the root logger has no handlers yet, so
    an application that configured logging first keeps its own setup.
    """

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or ROOT_LOGGER_NAME)
