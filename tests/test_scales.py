"""
Unit tests for colour, band and linear scales.
"""

import unittest

from matplotlib.colors import to_rgb

from tempmatrix.config import CELL_HEIGHT, CELL_WIDTH
from tempmatrix.scales import BandScale, LinearScale, SequentialColorScale, build_scales


class TestColorScale(unittest.TestCase):
    """Test suite for SequentialColorScale."""

    def setUp(self):
        self.color = SequentialColorScale()

    def test_endpoints_are_palette_extremes(self):
        self.assertEqual(self.color(0), "#ffffcc")
        self.assertEqual(self.color(40), "#800026")

    def test_out_of_domain_clamps(self):
        self.assertEqual(self.color(-12), self.color(0))
        self.assertEqual(self.color(55), self.color(40))

    def test_warmth_increases_with_temperature(self):
        """Red and green never increase along the ramp; the hot end is darker."""
        rgbs = [to_rgb(self.color(t)) for t in range(0, 41)]
        for prev, cur in zip(rgbs, rgbs[1:]):
            self.assertLessEqual(cur[0], prev[0])
            self.assertLessEqual(cur[1], prev[1])
        self.assertLess(sum(rgbs[-1]), sum(rgbs[0]))

    def test_stops_cover_domain(self):
        stops = self.color.stops(10)
        self.assertEqual(len(stops), 11)
        self.assertEqual(stops[0], (0.0, "#ffffcc"))
        self.assertEqual(stops[-1], (1.0, "#800026"))


class TestBandScale(unittest.TestCase):
    """Test suite for BandScale."""

    def test_padding_and_positions(self):
        years = tuple(range(2014, 2024))
        x = BandScale(domain=years, range=(0.0, 1000.0), padding=0.05)
        step = 1000 / 10.05
        self.assertAlmostEqual(x.step, step)
        self.assertAlmostEqual(x.bandwidth, step * 0.95)
        self.assertAlmostEqual(x(2014), step * 0.05)
        self.assertAlmostEqual(x(2023), step * 0.05 + 9 * step)
        # symmetric outer gutters
        self.assertAlmostEqual(1000 - (x(2023) + x.bandwidth), x(2014))

    def test_unknown_key(self):
        x = BandScale(domain=(1, 2), range=(0.0, 10.0))
        self.assertIsNone(x(3))

    def test_build_scales_ranges(self):
        scales = build_scales([2022, 2023])
        self.assertEqual(scales.x.range, (0.0, float(CELL_WIDTH * 2)))
        self.assertEqual(scales.y.range, (0.0, float(CELL_HEIGHT * 12)))
        self.assertEqual(scales.y.domain, tuple(range(12)))
        self.assertLess(scales.x(2022), scales.x(2023))


class TestLinearScale(unittest.TestCase):
    """Test suite for LinearScale."""

    def test_inverted_range(self):
        y = LinearScale(domain=(0.0, 40.0), range=(66.0, 4.0))
        self.assertEqual(y(0), 66.0)
        self.assertEqual(y(40), 4.0)
        self.assertEqual(y(20), 35.0)

    def test_degenerate_domain_maps_to_midpoint(self):
        x = LinearScale(domain=(0.0, 0.0), range=(4.0, 90.0))
        self.assertEqual(x(0), 47.0)


if __name__ == "__main__":
    unittest.main()
