"""Monotone cubic interpolation for the per-cell trend lines.

Tangents follow the Steffen/Fritsch–Carlson style limiter so the curve never
overshoots the local min/max of neighbouring points. Points must have
strictly increasing x (day index).
"""

from collections.abc import Sequence

import numpy as np

Point = tuple[float, float]
Segment = tuple[Point, Point, Point]  # control 1, control 2, end


def _sign(v: float) -> int:
    return (v > 0) - (v < 0)


def _tangents(points: Sequence[Point]) -> list[float]:
    n = len(points)
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    t = [0.0] * n
    for i in range(1, n - 1):
        h0 = xs[i] - xs[i - 1]
        h1 = xs[i + 1] - xs[i]
        s0 = (ys[i] - ys[i - 1]) / h0
        s1 = (ys[i + 1] - ys[i]) / h1
        p = (s0 * h1 + s1 * h0) / (h0 + h1)
        t[i] = (_sign(s0) + _sign(s1)) * min(abs(s0), abs(s1), 0.5 * abs(p))
    # End tangents from the one-sided three-point estimate.
    h = xs[1] - xs[0]
    t[0] = (3 * (ys[1] - ys[0]) / h - t[1]) / 2
    h = xs[-1] - xs[-2]
    t[-1] = (3 * (ys[-1] - ys[-2]) / h - t[-2]) / 2
    return t


def monotone_segments(points: Sequence[Point]) -> list[Segment]:
    """Cubic Bézier segments joining consecutive points.

    Fewer than three points yield straight segments (zero or one).
    """
    if len(points) < 2:
        return []
    if len(points) == 2:
        (x0, y0), (x1, y1) = points
        dx = (x1 - x0) / 3
        dy = (y1 - y0) / 3
        return [((x0 + dx, y0 + dy), (x1 - dx, y1 - dy), (x1, y1))]
    t = _tangents(points)
    segments: list[Segment] = []
    for i in range(len(points) - 1):
        (x0, y0), (x1, y1) = points[i], points[i + 1]
        dx = (x1 - x0) / 3
        segments.append(((x0 + dx, y0 + dx * t[i]), (x1 - dx, y1 - dx * t[i + 1]), (x1, y1)))
    return segments


def _fmt(v: float) -> str:
    return f"{v:.2f}".rstrip("0").rstrip(".")


def monotone_path(points: Sequence[Point]) -> str:
    """SVG path data (`M … C …`) for a monotone curve through `points`."""
    if not points:
        return ""
    x0, y0 = points[0]
    parts = [f"M{_fmt(x0)},{_fmt(y0)}"]
    if len(points) == 2:
        x1, y1 = points[1]
        parts.append(f"L{_fmt(x1)},{_fmt(y1)}")
        return "".join(parts)
    for c1, c2, end in monotone_segments(points):
        parts.append(
            "C" + ",".join(_fmt(v) for v in (*c1, *c2, *end))
        )
    return "".join(parts)


def sample_monotone(points: Sequence[Point], steps: int = 8) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate the monotone curve as a polyline, `steps` samples per segment.

    Used by renderers that draw polylines rather than Bézier paths.
    """
    if not points:
        return np.array([]), np.array([])
    xs = [points[0][0]]
    ys = [points[0][1]]
    start = points[0]
    u = np.linspace(0.0, 1.0, steps + 1)[1:]
    a, b, c, d = (1 - u) ** 3, 3 * (1 - u) ** 2 * u, 3 * (1 - u) * u**2, u**3
    for c1, c2, end in monotone_segments(points):
        xs.extend(a * start[0] + b * c1[0] + c * c2[0] + d * end[0])
        ys.extend(a * start[1] + b * c1[1] + c * c2[1] + d * end[1])
        start = end
    return np.asarray(xs), np.asarray(ys)
