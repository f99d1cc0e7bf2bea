import io
import json
import unittest
from contextlib import redirect_stdout

import main
from nonogram.engine import generator as generator_module
from nonogram.engine.generator import GeneratorConfig, PuzzleGenerator
from nonogram.engine.grid import PuzzleGrid
from nonogram.engine.validator import SolvabilityChecker
from nonogram.utils.logger import ROOT_LOGGER_NAME, get_logger
from nonogram.utils.pretty import compute_stats, format_grid, pretty_print_grid, print_puzzle_stats


class PuzzleGridTests(unittest.TestCase):
    def test_from_strings_reads_filled_and_empty(self) -> None:
        grid = PuzzleGrid.from_strings(["#.", ".#"])
        self.assertTrue(grid.cell(0, 0))
        self.assertFalse(grid.cell(0, 1))
        self.assertEqual(grid.filled_count, 2)
        self.assertEqual(grid.to_strings(), ["#.", ".#"])

    def test_non_square_input_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            PuzzleGrid.from_strings(["##", "#"])
        with self.assertRaises(ValueError):
            PuzzleGrid.from_strings(["#?", ".."])
        with self.assertRaises(ValueError):
            PuzzleGrid(0)

    def test_column_access_round_trips(self) -> None:
        grid = PuzzleGrid(3)
        grid.set_column(1, [1, 0, 1])
        self.assertEqual(grid.column(1), [True, False, True])
        self.assertEqual(grid.row(0), [False, True, False])
        with self.assertRaises(ValueError):
            grid.set_column(0, [1, 1])

    def test_row_access_round_trips(self) -> None:
        grid = PuzzleGrid(3)
        grid.set_row(2, [0, 1, 1])
        self.assertEqual(grid.row(2), [False, True, True])
        self.assertEqual(grid.column(2), [False, False, True])
        with self.assertRaises(ValueError):
            grid.set_row(0, [1, 1, 1, 1])

    def test_hints_follow_rows_and_columns(self) -> None:
        grid = PuzzleGrid.from_strings(["##.", "...", "#.#"])
        self.assertEqual(grid.row_hints(), [[2], [0], [1, 1]])
        self.assertEqual(grid.column_hints(), [[1, 1], [1], [1]])

    def test_copy_is_independent(self) -> None:
        grid = PuzzleGrid.from_strings(["#.", ".."])
        clone = grid.copy()
        clone.set_cell(1, 1)
        self.assertNotEqual(grid, clone)
        with self.assertRaises(IndexError):
            grid.set_cell(2, 0)

    def test_to_jsonable_is_serializable(self) -> None:
        grid = PuzzleGrid.from_strings(["#.", "##"])
        payload = grid.to_jsonable()
        self.assertEqual(payload["cells"], [[1, 0], [1, 1]])
        self.assertEqual(payload["row_hints"], [[1], [2]])
        json.dumps(payload)


class PrettyPrintTests(unittest.TestCase):
    def test_format_grid_renders_hints_and_cells(self) -> None:
        grid = PuzzleGrid.from_strings(["##.", "...", "#.#"])
        text = format_grid(grid)
        lines = text.splitlines()
        self.assertIn("1 1 |  #  .  #", lines)
        self.assertIn("  0 |  .  .  .", lines)

    def test_stats_include_logic_section(self) -> None:
        grid = PuzzleGrid.from_strings(["###", "#..", "###"])
        report = SolvabilityChecker().check(grid)
        stats = compute_stats(grid, report)
        self.assertEqual(stats["grid"]["filled_cells"], 7)
        self.assertEqual(stats["hints"]["max_runs_per_line"], 2)
        self.assertTrue(stats["logic"]["solvable"])

        stream = io.StringIO()
        print_puzzle_stats(grid, report, stream=stream)
        self.assertIn("Solvable:      yes", stream.getvalue())

    def test_pretty_print_grid_writes_label_above_grid(self) -> None:
        grid = PuzzleGrid.from_strings(["#.", "##"])
        stream = io.StringIO()
        pretty_print_grid(grid, label="Nonogram 2x2", stream=stream)
        lines = stream.getvalue().splitlines()
        self.assertEqual(lines[0], "Nonogram 2x2")
        self.assertEqual("\n".join(lines[1:]), format_grid(grid))


class LoggerTests(unittest.TestCase):
    def test_default_logger_is_package_root(self) -> None:
        self.assertEqual(get_logger().name, ROOT_LOGGER_NAME)
        self.assertTrue(generator_module.LOGGER.name.startswith(ROOT_LOGGER_NAME + "."))

    def test_fallback_warning_reaches_package_root(self) -> None:
        config = GeneratorConfig(seed=3, min_filled=0, max_filled=1, retry_limit=2)
        with self.assertLogs(ROOT_LOGGER_NAME, level="WARNING") as captured:
            PuzzleGenerator(config).generate()
        self.assertIn("using the last one", captured.output[0])


class CliTests(unittest.TestCase):
    def test_json_output(self) -> None:
        stream = io.StringIO()
        with redirect_stdout(stream):
            main.main(["--size", "10", "--seed", "3", "--no-validate", "--json", "--log-level", "ERROR"])
        payload = json.loads(stream.getvalue())
        self.assertEqual(payload["grid"]["size"], 10)
        self.assertEqual(len(payload["grid"]["row_hints"]), 10)
        self.assertIn("logic", payload["stats"])

    def test_text_output_labels_grid_and_prints_stats(self) -> None:
        stream = io.StringIO()
        with redirect_stdout(stream):
            main.main(["--size", "10", "--seed", "3", "--no-validate", "--log-level", "ERROR"])
        lines = stream.getvalue().splitlines()
        self.assertEqual(lines[0], "Nonogram 10x10, seed 3")
        self.assertIn("--- Logic ---", lines)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
