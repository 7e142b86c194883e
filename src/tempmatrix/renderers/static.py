"""Matplotlib static PNG renderer."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib import colormaps
from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch, PathPatch
from matplotlib.path import Path as MplPath

from tempmatrix.config import (
    CELL_HEIGHT,
    CELL_RADIUS,
    CELL_WIDTH,
    LEGEND_GUTTER,
    LEGEND_WIDTH,
    MARGIN,
    MONTH_NAMES,
    MONTHS_COUNT,
    TEMP_MAX,
    TEMP_MIN,
)
from tempmatrix.curves import monotone_segments
from tempmatrix.models import Dataset, TempField
from tempmatrix.renderers.matrix import canvas_size, trend_points
from tempmatrix.scales import build_scales

logger = logging.getLogger(__name__)

_ROOT = Path(__file__).parent.parent.parent.parent
_DPI = 100
_TEXT = "#333333"
_LINE_MAX = "#5a1a1a"
_LINE_MIN = "#2b5c8a"


def _curve_patch(points: list[tuple[float, float]], dx: float, dy: float, color: str) -> PathPatch | None:
    """Monotone curve through cell-local points, shifted to canvas pixels."""
    if len(points) < 2:
        return None
    verts = [(points[0][0] + dx, points[0][1] + dy)]
    codes = [MplPath.MOVETO]
    for c1, c2, end in monotone_segments(points):
        verts += [(c1[0] + dx, c1[1] + dy), (c2[0] + dx, c2[1] + dy), (end[0] + dx, end[1] + dy)]
        codes += [MplPath.CURVE4] * 3
    return PathPatch(MplPath(verts, codes), fill=False, edgecolor=color, linewidth=0.9)


def render_static_matrix(dataset: Dataset, temp_field: TempField = TempField.MAX) -> Figure:
    """Render a Dataset as a static matplotlib image in canvas pixel units.

    Args:
        dataset: Aggregated cells and selected years.
        temp_field: Aggregate used for cell colour.

    Returns:
        matplotlib Figure object.
    """
    scales = build_scales(dataset.years)
    width, height = canvas_size(len(dataset.years))
    fig = plt.figure(figsize=(width / _DPI, height / _DPI), dpi=_DPI)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # y grows downward, as on screen
    ax.axis("off")

    w, h = scales.x.bandwidth, scales.y.bandwidth
    for summary in dataset.summaries:
        x0 = MARGIN.left + scales.x(summary.year)
        y0 = MARGIN.top + scales.y(summary.month)
        ax.add_patch(
            FancyBboxPatch(
                (x0, y0),
                w,
                h,
                boxstyle=f"round,pad=0,rounding_size={CELL_RADIUS}",
                facecolor=scales.color(summary.value(temp_field)),
                edgecolor="white",
                linewidth=0.5,
            )
        )
        highs, lows = trend_points(summary.days, w, h)
        for points, color in ((lows, _LINE_MIN), (highs, _LINE_MAX)):
            patch = _curve_patch(points, x0, y0, color)
            if patch is not None:
                ax.add_patch(patch)

    for year in dataset.years:
        ax.text(
            MARGIN.left + scales.x(year) + w / 2, MARGIN.top - 6, str(year),
            ha="center", va="bottom", fontsize=9, color=_TEXT,
        )
    for month in range(MONTHS_COUNT):
        ax.text(
            MARGIN.left - 6, MARGIN.top + scales.y(month) + h / 2, MONTH_NAMES[month],
            ha="right", va="center", fontsize=9, color=_TEXT,
        )

    # Legend: same colormap and clamping as the cells, 0 °C at the top.
    lx = MARGIN.left + CELL_WIDTH * len(dataset.years) + LEGEND_GUTTER
    ly = MARGIN.top
    lh = CELL_HEIGHT * MONTHS_COUNT
    gradient = np.linspace(0.0, 1.0, 256).reshape(-1, 1)
    ax.imshow(
        gradient,
        cmap=colormaps[scales.color.palette],
        aspect="auto",
        origin="upper",
        extent=(lx, lx + LEGEND_WIDTH, ly + lh, ly),
    )
    ax.text(lx + LEGEND_WIDTH + 5, ly + 10, f"{TEMP_MIN:g} °C", fontsize=8, color=_TEXT, va="bottom")
    ax.text(lx + LEGEND_WIDTH + 5, ly + lh, f"{TEMP_MAX:g} °C", fontsize=8, color=_TEXT, va="bottom")
    ax.text(
        MARGIN.left, 14, f"Monthly {temp_field.indicator.lower()} temperature",
        fontsize=11, color=_TEXT, va="top",
    )
    # imshow resets limits; restore canvas coordinates
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    return fig


def save_static_matrix(
    dataset: Dataset,
    output_path: Path | None = None,
    temp_field: TempField = TempField.MAX,
) -> Path:
    """Save a Dataset as a PNG file.

    Args:
        dataset: Aggregated cells and selected years.
        output_path: Destination path. Auto-generated under results/ if None.
        temp_field: Aggregate used for cell colour.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        span = f"{dataset.years[0]}_{dataset.years[-1]}" if dataset.years else "empty"
        output_path = _ROOT / "results" / f"temperature_matrix__{span}__{temp_field.value}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_matrix(dataset, temp_field)
    fig.savefig(output_path, facecolor="white")
    plt.close(fig)
    logger.info(f"Saved static matrix: {output_path}")
    return output_path
