import unittest

from nonogram.core.constants import ActionMode, PlayerMark, SessionStatus
from nonogram.engine.generator import GeneratorConfig
from nonogram.engine.grid import PuzzleGrid
from nonogram.game.session import GameSession


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _solution() -> PuzzleGrid:
    return PuzzleGrid.from_strings([
        "###",
        "#..",
        "###",
    ])


class GameSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.session = GameSession(_solution(), clock=self.clock)

    def test_new_session_exposes_hints(self) -> None:
        self.assertEqual(self.session.row_hints, [[3], [1], [3]])
        self.assertEqual(self.session.column_hints, [[3], [1, 1], [1, 1]])
        self.assertEqual(self.session.status, SessionStatus.PLAYING)
        self.assertEqual(self.session.mark(1, 1), PlayerMark.BLANK)

    def test_correct_fill_marks_cell(self) -> None:
        result = self.session.apply_action(0, 0, ActionMode.FILL)
        self.assertTrue(result.applied)
        self.assertFalse(result.mistake)
        self.assertEqual(result.mark, PlayerMark.FILLED)
        self.assertEqual(self.session.mistakes, 0)

    def test_wrong_fill_is_corrected_to_cross(self) -> None:
        result = self.session.apply_action(1, 1, ActionMode.FILL)
        self.assertTrue(result.mistake)
        self.assertEqual(result.mark, PlayerMark.CROSSED)
        self.assertEqual(self.session.mark(1, 1), PlayerMark.CROSSED)
        self.assertEqual(self.session.mistakes, 1)

    def test_wrong_cross_is_corrected_to_fill(self) -> None:
        result = self.session.apply_action(0, 1, ActionMode.CROSS)
        self.assertTrue(result.mistake)
        self.assertEqual(self.session.mark(0, 1), PlayerMark.FILLED)

    def test_marked_cells_are_not_overwritten(self) -> None:
        self.session.apply_action(1, 2, ActionMode.CROSS)
        result = self.session.apply_action(1, 2, ActionMode.FILL)
        self.assertFalse(result.applied)
        self.assertEqual(result.mark, PlayerMark.CROSSED)
        self.assertEqual(self.session.mistakes, 0)

    def test_completed_line_crosses_remaining_blanks(self) -> None:
        result = self.session.apply_action(1, 0, ActionMode.FILL)
        self.assertEqual(result.auto_crossed, [(1, 1), (1, 2)])
        self.assertEqual(self.session.mark(1, 2), PlayerMark.CROSSED)

    def test_filling_every_cell_wins_and_freezes_clock(self) -> None:
        self.clock.now = 130.0
        for r in range(3):
            for c in range(3):
                if _solution().cell(r, c):
                    result = self.session.apply_action(r, c, ActionMode.FILL)
        self.assertEqual(result.status, SessionStatus.WON)
        self.assertTrue(self.session.is_over)
        self.clock.now = 500.0
        self.assertEqual(self.session.elapsed_seconds, 30.0)

    def test_too_many_mistakes_lose_the_game(self) -> None:
        session = GameSession(_solution(), max_mistakes=2, clock=self.clock)
        session.apply_action(1, 1, ActionMode.FILL)
        result = session.apply_action(1, 2, ActionMode.FILL)
        self.assertEqual(result.status, SessionStatus.LOST)
        ignored = session.apply_action(0, 0, ActionMode.FILL)
        self.assertFalse(ignored.applied)
        self.assertEqual(session.mark(0, 0), PlayerMark.BLANK)

    def test_out_of_range_cells_raise(self) -> None:
        with self.assertRaises(IndexError):
            self.session.apply_action(3, 0, ActionMode.FILL)
        with self.assertRaises(IndexError):
            self.session.mark(-1, 0)

    def test_solution_is_copied(self) -> None:
        solution = _solution()
        session = GameSession(solution)
        solution.set_cell(1, 1, True)
        self.assertFalse(session.solution.cell(1, 1))

    def test_new_builds_session_from_generator(self) -> None:
        session = GameSession.new(GeneratorConfig(seed=4), validated=False)
        self.assertEqual(session.size, 15)
        self.assertEqual(len(session.row_hints), 15)
        self.assertEqual(session.mistakes, 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
