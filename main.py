"""CLI entrypoint for the nonogram puzzle generator."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from nonogram.engine.generator import GeneratorConfig, PuzzleGenerator
from nonogram.engine.solver import has_unique_solution
from nonogram.engine.validator import SolvabilityChecker
from nonogram.utils.logger import configure_logging
from nonogram.utils.pretty import compute_stats, print_puzzle_stats


def build_parser() -> argparse.ArgumentParser:
    defaults = GeneratorConfig()
    parser = argparse.ArgumentParser(
        description="Generate nonogram puzzles solvable by line logic",
    )
    parser.add_argument("--size", type=int, default=defaults.size, help="Grid side length in cells")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip the line-logic solvability check",
    )
    parser.add_argument(
        "--max-attempts",
        type=int,
        default=defaults.validation_attempts,
        help="Generation attempts before accepting an unvalidated board",
    )
    parser.add_argument(
        "--min-filled",
        type=int,
        default=None,
        help="Reject boards with this many filled cells or fewer",
    )
    parser.add_argument(
        "--max-filled",
        type=int,
        default=None,
        help="Reject boards with this many filled cells or more",
    )
    parser.add_argument(
        "--check-unique",
        action="store_true",
        help="Also verify with CP-SAT that the hints admit a single solution",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--json", action="store_true", help="Print the JSON payload to stdout")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def scaled_bounds(size: int) -> tuple[int, int]:
    """Balance bounds of the 15x15 defaults scaled to another board size."""
    defaults = GeneratorConfig()
    ratio = (size * size) / (defaults.size * defaults.size)
    return int(defaults.min_filled * ratio), int(defaults.max_filled * ratio)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.size < 2:
        parser.error("--size must be at least 2")
    min_filled, max_filled = scaled_bounds(args.size)
    if args.min_filled is not None:
        min_filled = args.min_filled
    if args.max_filled is not None:
        max_filled = args.max_filled

    config = GeneratorConfig(
        size=args.size,
        seed=args.seed,
        min_stamp_size=min(GeneratorConfig.min_stamp_size, args.size),
        max_stamp_size=min(GeneratorConfig.max_stamp_size, args.size),
        min_filled=min_filled,
        max_filled=max_filled,
        validation_attempts=args.max_attempts,
    )
    try:
        generator = PuzzleGenerator(config)
    except ValueError as exc:
        parser.error(str(exc))

    grid = generator.generate() if args.no_validate else generator.generate_validated()
    report = SolvabilityChecker().check(grid)

    payload: Dict[str, Any] = {
        "seed": args.seed,
        "grid": grid.to_jsonable(),
        "stats": compute_stats(grid, report),
    }
    if args.check_unique:
        payload["unique"] = has_unique_solution(grid.row_hints(), grid.column_hints())

    output_text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    if args.json:
        print(output_text)
    else:
        seed_label = f", seed {args.seed}" if args.seed is not None else ""
        print_puzzle_stats(grid, report, label=f"Nonogram {grid.size}x{grid.size}{seed_label}")
        if args.check_unique:
            print(f"  Unique:        {'yes' if payload['unique'] else 'no'}")


if __name__ == "__main__":  # pragma: no cover
    main()
