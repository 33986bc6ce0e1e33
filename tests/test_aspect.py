import math
import unittest

from app.albumgrid.layout.aspect import (
    analyze,
    classify,
    cropped_ratios,
    normalize_ratio,
    ratio_from_size,
    round_half_up,
)
from app.albumgrid.layout.models import MediaItem


def _items(*ratios):
    return [MediaItem(f"m{i}", aspect_ratio=r) for i, r in enumerate(ratios)]


class TestAspectModel(unittest.TestCase):
    def test_unusable_ratios_become_neutral(self):
        for value in (None, 0, -1.5, math.nan, math.inf, "abc"):
            self.assertEqual(normalize_ratio(value), 1.0)
        self.assertEqual(normalize_ratio(1.75), 1.75)

    def test_ratio_from_size(self):
        self.assertEqual(ratio_from_size(200, 100), 2.0)
        self.assertEqual(ratio_from_size(0, 100), 1.0)
        self.assertEqual(ratio_from_size(100, 0), 1.0)
        self.assertEqual(ratio_from_size(-3, 4), 1.0)
        self.assertEqual(ratio_from_size(None, 4), 1.0)

    def test_classify_thresholds(self):
        self.assertEqual(classify(1.21), "w")
        self.assertEqual(classify(1.2), "q")
        self.assertEqual(classify(0.8), "q")
        self.assertEqual(classify(0.79), "n")

    def test_analyze_mean_and_force_calc(self):
        summary = analyze(_items(2.0, 1.0, 0.5))
        self.assertEqual(summary.proportions, "wqn")
        self.assertAlmostEqual(summary.average_aspect_ratio, 3.5 / 3)
        self.assertFalse(summary.force_calc)

        self.assertTrue(analyze(_items(2.01, 1.0)).force_calc)

    def test_analyze_substitutes_invalid_ratio(self):
        summary = analyze(_items(0, None, -2))
        self.assertEqual(summary.ratios, (1.0, 1.0, 1.0))
        self.assertEqual(summary.proportions, "qqq")

    def test_cropped_ratios_landscape_group(self):
        summary = analyze(_items(0.5, 3.0))
        self.assertEqual(cropped_ratios(summary), (1.0, 1.7))

    def test_cropped_ratios_portrait_group(self):
        summary = analyze(_items(0.5, 0.2, 1.5))
        self.assertEqual(cropped_ratios(summary), (0.66667, 0.66667, 1.0))

    def test_round_half_up(self):
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(2.49), 2)


class TestMediaItem(unittest.TestCase):
    def test_from_size(self):
        item = MediaItem.from_size("a", 1920, 1080)
        self.assertAlmostEqual(item.aspect_ratio, 1920 / 1080)
        self.assertEqual(MediaItem.from_size("b", 0, 0).aspect_ratio, 1.0)


if __name__ == "__main__":
    unittest.main()
