"""Plotly interactive matrix renderer.

Heatmap of the active monthly aggregate with per-cell trend lines overlaid.
Cells without data are left as gaps. A Maximum/Minimum button pair swaps the
heatmap values in place; trend lines and the colour bar are unaffected.
"""

import plotly.graph_objects as go

from tempmatrix.config import (
    BAND_PADDING,
    MONTH_NAMES,
    MONTHS_COUNT,
    TEMP_MAX,
    TEMP_MIN,
)
from tempmatrix.curves import sample_monotone
from tempmatrix.models import Dataset, TempField
from tempmatrix.scales import LinearScale, SequentialColorScale

_BG = "#ffffff"
_LINE_MAX = "#5a1a1a"
_LINE_MIN = "#2b5c8a"
_GAP_PX = 3
_COLOR_STEPS = 64  # colorscale stops; Plotly interpolates linearly between them
_INNER = 0.5 - BAND_PADDING  # half-extent of a cell's drawing area, in cell units


def _z_matrix(dataset: Dataset, temp_field: TempField) -> list[list[float | None]]:
    """months × years grid; None where a month has no records."""
    z: list[list[float | None]] = []
    for month in range(MONTHS_COUNT):
        row: list[float | None] = []
        for year in dataset.years:
            summary = dataset.get(year, month)
            row.append(summary.value(temp_field) if summary else None)
        z.append(row)
    return z


def _hovertemplate(temp_field: TempField) -> str:
    return f"<b>%{{customdata}}</b><br>{temp_field.label}: %{{z}} °C<extra></extra>"


def _trend_trace(dataset: Dataset, temp_field: TempField, color: str) -> go.Scatter:
    """All cells' daily lines for one field as a single None-separated trace."""
    xs: list[float | None] = []
    ys: list[float | None] = []
    for col, year in enumerate(dataset.years):
        for month in range(MONTHS_COUNT):
            summary = dataset.get(year, month)
            if summary is None:
                continue
            x = LinearScale(
                domain=(0.0, float(len(summary.days) - 1)),
                range=(col - _INNER, col + _INNER),
            )
            # y-axis is reversed (January on top), so larger °C → smaller y
            y = LinearScale(domain=(TEMP_MIN, TEMP_MAX), range=(month + _INNER, month - _INNER))
            points = [
                (x(i), y(d.max_temp if temp_field is TempField.MAX else d.min_temp))
                for i, d in enumerate(summary.days)
            ]
            px, py = sample_monotone(points)
            xs += [*px.tolist(), None]
            ys += [*py.tolist(), None]
    return go.Scatter(
        x=xs,
        y=ys,
        mode="lines",
        line=dict(color=color, width=1),
        hoverinfo="skip",
        name=f"daily {temp_field.label.lower()}",
    )


def render_plotly_matrix(dataset: Dataset, temp_field: TempField = TempField.MAX) -> go.Figure:
    """Render a Dataset as a Plotly heatmap with embedded trend lines.

    Args:
        dataset: Aggregated cells and selected years.
        temp_field: Aggregate shown initially.

    Returns:
        Plotly Figure object.
    """
    color = SequentialColorScale()
    labels = [
        [f"{year}-{month + 1:02d}" for year in dataset.years] for month in range(MONTHS_COUNT)
    ]
    heatmap = go.Heatmap(
        x=list(range(len(dataset.years))),
        y=list(range(MONTHS_COUNT)),
        z=_z_matrix(dataset, temp_field),
        zmin=TEMP_MIN,
        zmax=TEMP_MAX,
        colorscale=[[offset, c] for offset, c in color.stops(_COLOR_STEPS)],
        colorbar=dict(title="°C"),
        xgap=_GAP_PX,
        ygap=_GAP_PX,
        customdata=labels,
        hovertemplate=_hovertemplate(temp_field),
        hoverongaps=False,
        name="monthly",
    )
    fig = go.Figure(
        data=[
            heatmap,
            _trend_trace(dataset, TempField.MIN, _LINE_MIN),
            _trend_trace(dataset, TempField.MAX, _LINE_MAX),
        ]
    )

    buttons = [
        dict(
            label=f.indicator,
            method="restyle",
            args=[{"z": [_z_matrix(dataset, f)], "hovertemplate": [_hovertemplate(f)]}, [0]],
        )
        for f in (TempField.MAX, TempField.MIN)
    ]
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=90, r=40, t=50, b=20),
        height=760,
        xaxis=dict(
            side="top",
            tickmode="array",
            tickvals=list(range(len(dataset.years))),
            ticktext=[str(y) for y in dataset.years],
            showgrid=False,
            zeroline=False,
        ),
        yaxis=dict(
            autorange="reversed",
            tickmode="array",
            tickvals=list(range(MONTHS_COUNT)),
            ticktext=list(MONTH_NAMES),
            showgrid=False,
            zeroline=False,
        ),
        updatemenus=[
            dict(
                type="buttons",
                direction="right",
                active=0 if temp_field is TempField.MAX else 1,
                buttons=buttons,
                x=1.0,
                xanchor="right",
                y=1.08,
                yanchor="bottom",
            )
        ],
    )
    return fig
