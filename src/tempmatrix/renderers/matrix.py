"""Matrix scene builder: axes, coloured cells, per-cell trend lines and legend.

Every output format (SVG/HTML, PNG) starts from the scene produced here so
that positions, colours and curves are computed once.
"""

from dataclasses import dataclass

from tempmatrix.config import (
    CELL_HEIGHT,
    CELL_RADIUS,
    CELL_WIDTH,
    LEGEND_GUTTER,
    LEGEND_STEPS,
    LEGEND_WIDTH,
    MARGIN,
    MINI_CHART_PADDING,
    MONTH_NAMES,
    MONTHS_COUNT,
    TEMP_MAX,
    TEMP_MIN,
)
from tempmatrix.curves import monotone_path
from tempmatrix.interaction import InteractionController, ViewMode, bind_cell
from tempmatrix.models import DailyRecord, Dataset
from tempmatrix.scales import LinearScale, Scales, SequentialColorScale, build_scales
from tempmatrix.surface import Node, Surface

GRADIENT_ID = "temp-gradient"


@dataclass
class MatrixScene:
    """Everything a renderer or test needs after drawing."""

    surface: Surface
    plot: Node  # margin-translated main group
    scales: Scales
    controller: InteractionController
    cells: list[Node]  # the coloured rects, one per MonthSummary


def canvas_size(year_count: int) -> tuple[int, int]:
    return (
        CELL_WIDTH * year_count + MARGIN.left + MARGIN.right,
        CELL_HEIGHT * MONTHS_COUNT + MARGIN.top + MARGIN.bottom,
    )


def mini_chart_scales(day_count: int, width: float, height: float) -> tuple[LinearScale, LinearScale]:
    """Cell-local (day index → x, temperature → y) scales.

    The y-scale is fixed to the global temperature domain so cells stay
    comparable; only the x-domain depends on the month's length.
    """
    pad = MINI_CHART_PADDING
    x = LinearScale(domain=(0.0, float(day_count - 1)), range=(pad, width - pad))
    y = LinearScale(domain=(TEMP_MIN, TEMP_MAX), range=(height - pad, pad))
    return x, y


def trend_points(days: tuple[DailyRecord, ...], width: float, height: float) -> tuple[list, list]:
    """Pixel points for the daily max and daily min lines."""
    x, y = mini_chart_scales(len(days), width, height)
    highs = [(x(i), y(d.max_temp)) for i, d in enumerate(days)]
    lows = [(x(i), y(d.min_temp)) for i, d in enumerate(days)]
    return highs, lows


def draw_axes(plot: Node, scales: Scales) -> None:
    """Year labels along the top, month names down the left; no domain lines."""
    top = plot.append("g", class_="axis axis-x")
    for year in scales.x.domain:
        top.append(
            "text",
            text=str(year),
            x=scales.x(year) + scales.x.bandwidth / 2,
            y=-6,
            text_anchor="middle",
        )
    left = plot.append("g", class_="axis axis-y")
    for month in scales.y.domain:
        left.append(
            "text",
            text=MONTH_NAMES[month],
            x=-6,
            y=scales.y(month) + scales.y.bandwidth / 2,
            text_anchor="end",
            dominant_baseline="middle",
        )


def draw_mini_chart(group: Node, days: tuple[DailyRecord, ...], width: float, height: float) -> None:
    if not days:
        return
    highs, lows = trend_points(days, width, height)
    group.append("path", class_="line-min", d=monotone_path(lows), fill="none")
    group.append("path", class_="line-max", d=monotone_path(highs), fill="none")


def draw_cells(plot: Node, dataset: Dataset, scales: Scales, controller: InteractionController) -> list[Node]:
    """One positioned, coloured, interactive cell per MonthSummary.

    Returns:
        The cell rects, in year-then-month order.
    """
    w, h = scales.x.bandwidth, scales.y.bandwidth
    rects: list[Node] = []
    for summary in dataset.summaries:
        x, y = scales.x(summary.year), scales.y(summary.month)
        if x is None or y is None:
            continue
        group = plot.group(x, y, class_="cell-group")
        rect = group.append(
            "rect",
            datum=summary,
            class_="cell",
            width=w,
            height=h,
            rx=CELL_RADIUS,
            fill=controller.fill_for(summary),
            data_key=summary.label,
            data_max=repr(summary.monthly_max),
            data_min=repr(summary.monthly_min),
            data_fill_max=scales.color(summary.monthly_max),
            data_fill_min=scales.color(summary.monthly_min),
        )
        bind_cell(rect)
        rects.append(rect)
        draw_mini_chart(group, summary.days, w, h)
    controller.bind(rects)
    return rects


def draw_legend(surface: Surface, plot: Node, color: SequentialColorScale, year_count: int) -> Node:
    """Vertical gradient bar right of the grid with 0 °C / 40 °C labels."""
    legend_height = CELL_HEIGHT * MONTHS_COUNT
    x = CELL_WIDTH * year_count + LEGEND_GUTTER
    surface.linear_gradient(GRADIENT_ID, color.stops(LEGEND_STEPS))
    legend = plot.append("g", class_="legend")
    legend.append(
        "rect",
        x=x,
        y=0,
        width=LEGEND_WIDTH,
        height=legend_height,
        rx=3,
        fill=f"url(#{GRADIENT_ID})",
    )
    legend.append("text", text=f"{TEMP_MIN:g} °C", class_="legend-label", x=x + LEGEND_WIDTH + 5, y=10)
    legend.append(
        "text", text=f"{TEMP_MAX:g} °C", class_="legend-label", x=x + LEGEND_WIDTH + 5, y=legend_height
    )
    return legend


def build_matrix_scene(dataset: Dataset, controller: InteractionController | None = None) -> MatrixScene:
    """Draw the whole matrix for a dataset.

    Args:
        dataset: Aggregated cells and selected years.
        controller: Existing controller to keep its mode; a fresh one
            (showing maxima) is created otherwise.

    Returns:
        MatrixScene with the surface, scales, controller and cell rects.
    """
    scales = build_scales(dataset.years)
    if controller is None:
        controller = InteractionController(scales.color, ViewMode())
    width, height = canvas_size(len(dataset.years))
    surface = Surface(width, height)
    plot = surface.root.group(MARGIN.left, MARGIN.top, class_="plot")
    draw_axes(plot, scales)
    cells = draw_cells(plot, dataset, scales, controller)
    draw_legend(surface, plot, scales.color, len(dataset.years))
    return MatrixScene(surface=surface, plot=plot, scales=scales, controller=controller, cells=cells)
