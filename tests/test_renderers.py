"""
Unit tests for the HTML, Plotly and PNG renderers and the CLI.
"""

import shutil
import tempfile
import unittest
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from tempmatrix import cli  # noqa: E402
from tempmatrix.models import TempField  # noqa: E402
from tempmatrix.renderers.plotly_matrix import render_plotly_matrix  # noqa: E402
from tempmatrix.renderers.static import render_static_matrix, save_static_matrix  # noqa: E402
from tempmatrix.renderers.svg_html import render_matrix_html, save_matrix_html  # noqa: E402
from tempmatrix.scales import SequentialColorScale  # noqa: E402
from tests.fixtures.sample_data import sample_dataset, write_csv  # noqa: E402


class TestHtmlRenderer(unittest.TestCase):
    """Test suite for the interactive HTML page."""

    def setUp(self):
        self.dataset = sample_dataset()
        self.html = render_matrix_html(self.dataset)

    def test_page_contains_host_elements(self):
        self.assertIn('id="tooltip"', self.html)
        self.assertIn('<div id="mode-label">', self.html)
        self.assertIn("<strong>Maximum</strong>", self.html)

    def test_cells_and_actions_serialised(self):
        self.assertEqual(self.html.count('class="cell"'), 23)
        self.assertEqual(self.html.count('data-on-click="toggle-mode"'), 23)
        self.assertIn('data-on-pointerenter="tooltip-show"', self.html)
        self.assertIn("transition: fill 400ms", self.html)

    def test_missing_month_absent(self):
        self.assertNotIn('data-key="2023-03"', self.html)

    def test_title_is_escaped(self):
        page = render_matrix_html(self.dataset, title="Highs & lows <2023>")
        self.assertIn("<h2>Highs &amp; lows &lt;2023&gt;</h2>", page)
        self.assertNotIn("<2023>", page)

    def test_save(self):
        out = Path(tempfile.mkdtemp())
        try:
            path = save_matrix_html(self.dataset, out / "nested" / "m.html")
            self.assertTrue(path.exists())
            self.assertIn("<svg", path.read_text(encoding="utf-8"))
        finally:
            shutil.rmtree(out)


class TestPlotlyRenderer(unittest.TestCase):
    """Test suite for the Plotly figure."""

    def setUp(self):
        self.fig = render_plotly_matrix(sample_dataset())

    def test_heatmap_has_gap_for_missing_month(self):
        heatmap = self.fig.data[0]
        self.assertEqual(len(heatmap.z), 12)
        self.assertIsNone(heatmap.z[2][1])  # March 2023
        self.assertIsNotNone(heatmap.z[2][0])  # March 2022

    def test_toggle_buttons(self):
        buttons = self.fig.layout.updatemenus[0].buttons
        self.assertEqual([b.label for b in buttons], ["Maximum", "Minimum"])
        min_z = buttons[1].args[0]["z"][0]
        self.assertLess(min_z[0][0], self.fig.data[0].z[0][0])

    def test_trend_traces(self):
        self.assertEqual(len(self.fig.data), 3)
        self.assertIn(None, self.fig.data[1].x)

    def test_colorscale_follows_colour_scale(self):
        colorscale = self.fig.data[0].colorscale
        self.assertGreater(len(colorscale), 32)
        stops = SequentialColorScale().stops(len(colorscale) - 1)
        for (offset, c), (expected_offset, expected) in zip(colorscale, stops):
            self.assertAlmostEqual(offset, expected_offset)
            self.assertEqual(c.lower(), expected.lower())
        self.assertEqual(colorscale[0][1].lower(), "#ffffcc")
        self.assertEqual(colorscale[-1][1].lower(), "#800026")

    def test_initial_field_min(self):
        fig = render_plotly_matrix(sample_dataset(), TempField.MIN)
        self.assertEqual(fig.layout.updatemenus[0].active, 1)
        self.assertIn("Min:", fig.data[0].hovertemplate)


class TestStaticRenderer(unittest.TestCase):
    """Test suite for the PNG renderer."""

    def setUp(self):
        self.out = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.out)

    def test_figure_has_one_patch_per_cell_plus_lines(self):
        fig = render_static_matrix(sample_dataset())
        ax = fig.axes[0]
        # 23 cells, each with two curves
        self.assertEqual(len(ax.patches), 23 * 3)
        plt.close(fig)

    def test_save_png(self):
        path = save_static_matrix(sample_dataset(), self.out / "m.png", TempField.MIN)
        self.assertTrue(path.exists())
        self.assertEqual(path.read_bytes()[:8], b"\x89PNG\r\n\x1a\n")


class TestCli(unittest.TestCase):
    """Test suite for the command line entry point."""

    def setUp(self):
        self.out = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.out)

    def test_writes_html_and_png(self):
        src = write_csv(self.out / "t.csv", ["2023-01-01,10,2", "2023-01-02,14,4"])
        code = cli.main([str(src), "--html", str(self.out / "m.html"), "--png", str(self.out / "m.png")])
        self.assertEqual(code, 0)
        self.assertTrue((self.out / "m.html").exists())
        self.assertTrue((self.out / "m.png").exists())

    def test_load_error_exit_code(self):
        self.assertEqual(cli.main([str(self.out / "missing.csv")]), 1)


if __name__ == "__main__":
    unittest.main()
