"""
Unit tests for the Streamlit page: load errors and data-quality warnings.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

from streamlit.testing.v1 import AppTest

import tempmatrix
from tests.fixtures.sample_data import write_csv

APP_PATH = Path(tempmatrix.__file__).parent / "app.py"


class TestApp(unittest.TestCase):
    """Test suite for app.py."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        if self.test_dir.exists():
            shutil.rmtree(self.test_dir)

    def _run(self, source: Path) -> AppTest:
        at = AppTest.from_file(str(APP_PATH), default_timeout=30)
        at.session_state["source"] = str(source)
        return at.run()

    def test_missing_file_shows_error(self):
        at = self._run(self.test_dir / "nope.csv")
        self.assertFalse(at.exception)
        self.assertEqual(len(at.error), 1)
        self.assertIn("nope.csv", at.error[0].value)
        self.assertEqual(len(at.tabs), 0)

    def test_malformed_row_shows_warning(self):
        path = write_csv(
            self.test_dir / "t.csv",
            ["2023-01-01,10,2", "2023-01-02,warm,3", "2023-01-03,14,4"],
        )
        at = self._run(path)
        self.assertFalse(at.exception)
        self.assertEqual(len(at.error), 0)
        self.assertEqual(len(at.warning), 1)
        self.assertIn("1 malformed row(s) skipped", at.warning[0].value)
        self.assertEqual(len(at.tabs), 2)


if __name__ == "__main__":
    unittest.main()
