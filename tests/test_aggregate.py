"""
Unit tests for per-month aggregation.
"""

import itertools
import unittest
from datetime import date

from tempmatrix.aggregate import summarize_groups, summarize_month
from tempmatrix.models import DailyRecord, MonthKey


def _rec(day: int, hi: float, lo: float, month: int = 1, year: int = 2023) -> DailyRecord:
    return DailyRecord(date=date(year, month, day), max_temp=hi, min_temp=lo)


class TestSummarizeMonth(unittest.TestCase):
    """Test suite for summarize_month."""

    def test_two_day_example(self):
        """January 2023 with two days gives max 14, min 2."""
        day1 = _rec(1, 10, 2)
        day2 = _rec(2, 14, 4)
        summary = summarize_month([day2, day1])
        self.assertEqual(summary.year, 2023)
        self.assertEqual(summary.month, 0)
        self.assertEqual(summary.monthly_max, 14)
        self.assertEqual(summary.monthly_min, 2)
        self.assertEqual(summary.days, (day1, day2))

    def test_extrema_and_order_for_every_permutation(self):
        """Extrema are exact and days come back sorted for any input order."""
        records = [_rec(3, 18.5, 9.0), _rec(1, 21.0, 11.5), _rec(4, 12.0, -1.5), _rec(2, 30.2, 7.0)]
        for perm in itertools.permutations(records):
            summary = summarize_month(list(perm))
            self.assertEqual(summary.monthly_max, 30.2)
            self.assertEqual(summary.monthly_min, -1.5)
            self.assertEqual([d.date.day for d in summary.days], [1, 2, 3, 4])

    def test_does_not_mutate_input(self):
        """The caller's list keeps its order."""
        records = [_rec(2, 10, 5), _rec(1, 11, 6)]
        original = list(records)
        summarize_month(records)
        self.assertEqual(records, original)

    def test_empty_group_rejected(self):
        with self.assertRaises(ValueError):
            summarize_month([])

    def test_mixed_months_rejected(self):
        with self.assertRaises(ValueError):
            summarize_month([_rec(1, 10, 5, month=1), _rec(1, 10, 5, month=2)])


class TestSummarizeGroups(unittest.TestCase):
    """Test suite for summarize_groups."""

    def test_empty_groups_produce_no_cell(self):
        grouped = {2023: {0: [_rec(1, 10, 2)], 1: []}}
        cells = summarize_groups(grouped)
        self.assertIn(MonthKey(2023, 0), cells)
        self.assertNotIn(MonthKey(2023, 1), cells)
        self.assertEqual(len(cells), 1)


if __name__ == "__main__":
    unittest.main()
