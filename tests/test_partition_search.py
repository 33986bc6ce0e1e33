import unittest

from app.albumgrid.layout.assign import assign_positions
from app.albumgrid.layout.models import BorderFlags
from app.albumgrid.layout.search import (
    LayoutAttempt,
    _compositions,
    enumerate_attempts,
    find_optimal,
    score_attempt,
    target_height,
)


class TestEnumerateAttempts(unittest.TestCase):
    def test_compositions_are_ordered(self):
        self.assertEqual(list(_compositions(4, 2)), [(1, 3), (2, 2), (3, 1)])
        self.assertEqual(list(_compositions(3, 3)), [(1, 1, 1)])
        self.assertEqual(list(_compositions(2, 3)), [])

    def test_two_items_one_or_two_lines(self):
        attempts = enumerate_attempts([1.0, 1.0], 1.0, 800)
        self.assertEqual([a.line_counts for a in attempts], [(2,), (1, 1)])
        self.assertEqual(attempts[0].heights, (400.0,))
        self.assertEqual(attempts[1].heights, (800.0, 800.0))

    def test_single_line_beats_tall_stack(self):
        # cropped (1.0, 0.667): one row ~480 high vs two rows 800 + 1200
        attempts = enumerate_attempts([1.0, 0.66667], 1.1, 800)
        best = find_optimal(attempts, 800)
        self.assertEqual(best.line_counts, (2,))

    def test_line_caps(self):
        counts = {a.line_counts for a in enumerate_attempts([1.0] * 6, 1.0, 800)}
        self.assertIn((3, 3), counts)
        self.assertNotIn((1, 4, 1), counts)
        self.assertTrue(all(max(c) <= 3 for c in counts))
        self.assertTrue(all(1 <= len(c) <= 4 for c in counts))
        self.assertIn((3,), {a.line_counts for a in enumerate_attempts([1.0] * 3, 1.0, 800)})
        self.assertNotIn((4,), {a.line_counts for a in enumerate_attempts([1.0] * 4, 1.0, 800)})

    def test_portrait_group_allows_four_on_second_line(self):
        counts = {a.line_counts for a in enumerate_attempts([0.7] * 6, 0.7, 800)}
        self.assertIn((1, 4, 1), counts)
        self.assertNotIn((4, 1, 1), counts)
        self.assertNotIn((1, 1, 4), counts)

    def test_no_candidates_for_oversized_group(self):
        self.assertEqual(enumerate_attempts([1.0] * 13, 1.0, 800), [])
        self.assertIsNone(find_optimal([], 800))

    def test_line_height_fills_width(self):
        attempts = enumerate_attempts([1.5, 0.5, 1.0], 1.0, 800)
        self.assertEqual(attempts[0].line_counts, (3,))
        self.assertAlmostEqual(attempts[0].heights[0], 800 / 3.0)
        first = attempts[1]
        self.assertEqual(first.line_counts, (1, 2))
        self.assertAlmostEqual(first.heights[0], 800 / 1.5)
        self.assertAlmostEqual(first.heights[1], 800 / 1.5)


class TestScoring(unittest.TestCase):
    def test_target_height(self):
        self.assertAlmostEqual(target_height(800), 800 * 4 / 3)

    def test_penalties(self):
        base = LayoutAttempt((1, 2), (500.0, 300.0))
        inverted = LayoutAttempt((2, 1), (500.0, 300.0))
        thin = LayoutAttempt((1, 2), (600.0, 200.0))
        diff = abs(800.0 - target_height(800))
        self.assertAlmostEqual(score_attempt(base, 800), diff)
        self.assertAlmostEqual(score_attempt(inverted, 800), diff * 1.2)
        self.assertAlmostEqual(score_attempt(thin, 800), diff * 1.5)

    def test_ties_keep_first(self):
        first = LayoutAttempt((1, 1), (500.0, 500.0))
        second = LayoutAttempt((1, 1), (600.0, 400.0))
        self.assertIs(find_optimal([first, second], 800), first)


class TestAssignPositions(unittest.TestCase):
    def test_rounding_absorbed_by_edge_item(self):
        attempt = LayoutAttempt((2, 3), (400.0, 800 / 3))
        keys = [f"m{i}" for i in range(5)]
        ratios = [1.0] * 5

        incoming = assign_positions(attempt, ratios, ratios, keys, is_out=False, canvas_width=800)
        self.assertEqual([p.width_units for p in incoming.positions], [400, 400, 267, 267, 266])
        self.assertEqual(incoming.positions[4].span_size, 266)
        self.assertEqual(incoming.max_x, 2)

        outgoing = assign_positions(attempt, ratios, ratios, keys, is_out=True, canvas_width=800)
        self.assertEqual([p.width_units for p in outgoing.positions], [400, 400, 266, 267, 267])

    def test_flags_and_grid_coordinates(self):
        attempt = LayoutAttempt((2, 3), (400.0, 800 / 3))
        ratios = [1.0] * 5
        draft = assign_positions(attempt, ratios, ratios, list("abcde"), is_out=False, canvas_width=800)
        p = draft.positions
        self.assertEqual(p[0].flags, BorderFlags.TOP | BorderFlags.LEFT)
        self.assertEqual(p[1].flags, BorderFlags.TOP | BorderFlags.RIGHT)
        self.assertEqual(p[2].flags, BorderFlags.BOTTOM | BorderFlags.LEFT)
        self.assertEqual(p[3].flags, BorderFlags.BOTTOM)
        self.assertEqual(p[4].flags, BorderFlags.BOTTOM | BorderFlags.RIGHT)
        self.assertEqual([(x.col_min, x.row_min) for x in p], [(0, 0), (1, 0), (0, 1), (1, 1), (2, 1)])
        self.assertTrue(p[4].is_last)
        self.assertAlmostEqual(p[0].height_fraction, 400 / 814)

    def test_tall_line_height_is_capped(self):
        attempt = LayoutAttempt((1, 1), (1200.0, 800.0))
        ratios = [0.66667, 1.0]
        draft = assign_positions(attempt, ratios, [0.5, 1.0], ["a", "b"], is_out=False, canvas_width=800)
        self.assertEqual(draft.positions[0].height_fraction, 1.0)
        self.assertEqual(draft.positions[0].aspect_ratio, 0.5)


if __name__ == "__main__":
    unittest.main()
