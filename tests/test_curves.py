"""
Unit tests for monotone curve interpolation.
"""

import unittest

from tempmatrix.curves import monotone_path, monotone_segments, sample_monotone


class TestMonotoneCurve(unittest.TestCase):
    """Test suite for the monotone cubic helpers."""

    def test_no_overshoot_between_points(self):
        """Every sample stays inside the y-range of its segment's end points."""
        points = [(0, 10), (1, 30), (2, 31), (3, 5), (4, 5), (5, 22), (6, 0)]
        xs, ys = sample_monotone(points, steps=20)
        for i in range(len(points) - 1):
            lo = min(points[i][1], points[i + 1][1]) - 1e-9
            hi = max(points[i][1], points[i + 1][1]) + 1e-9
            seg = ys[i * 20 : (i + 1) * 20 + 1]
            self.assertTrue(all(lo <= v <= hi for v in seg), f"overshoot in segment {i}")

    def test_curve_passes_through_points(self):
        points = [(0, 1), (1, 3), (2, 2)]
        xs, ys = sample_monotone(points, steps=4)
        self.assertAlmostEqual(ys[0], 1)
        self.assertAlmostEqual(ys[4], 3)
        self.assertAlmostEqual(ys[8], 2)
        self.assertAlmostEqual(xs[-1], 2)

    def test_path_shapes(self):
        self.assertEqual(monotone_path([]), "")
        self.assertEqual(monotone_path([(4, 5)]), "M4,5")
        self.assertEqual(monotone_path([(4, 5), (10, 7.5)]), "M4,5L10,7.5")
        path = monotone_path([(0, 0), (1, 1), (2, 0)])
        self.assertTrue(path.startswith("M0,0C"))
        self.assertEqual(path.count("C"), 2)

    def test_segment_count(self):
        self.assertEqual(monotone_segments([(0, 0)]), [])
        self.assertEqual(len(monotone_segments([(0, 0), (1, 1), (2, 4), (3, 9)])), 3)


if __name__ == "__main__":
    unittest.main()
