"""Scale builders: value → colour and key/number → pixel mappings.

All scales are immutable once built. Toggling the view mode re-evaluates the
colour scale against another field; it never rebuilds a scale.
"""

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field

from matplotlib import colormaps
from matplotlib.colors import to_hex

from tempmatrix.config import (
    BAND_PADDING,
    CELL_HEIGHT,
    CELL_WIDTH,
    MONTHS_COUNT,
    PALETTE,
    TEMP_MAX,
    TEMP_MIN,
)


@dataclass(frozen=True)
class LinearScale:
    """Continuous linear mapping, unclamped."""

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            # Degenerate domain (single-day month): pin to the range midpoint.
            return (r0 + r1) / 2
        return r0 + (value - d0) / (d1 - d0) * (r1 - r0)


@dataclass(frozen=True)
class BandScale:
    """Discrete keys → equal-width bands with padding gutters.

    `padding` is used for both the inner gutter between bands and the outer
    gutter at each end; bands are centred in the range.
    """

    domain: tuple[Hashable, ...]
    range: tuple[float, float]
    padding: float = BAND_PADDING
    _index: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_index", {k: i for i, k in enumerate(self.domain)})

    @property
    def step(self) -> float:
        r0, r1 = self.range
        n = len(self.domain)
        return (r1 - r0) / max(1.0, n - self.padding + 2 * self.padding)

    @property
    def bandwidth(self) -> float:
        return self.step * (1 - self.padding)

    @property
    def start(self) -> float:
        r0, r1 = self.range
        n = len(self.domain)
        return r0 + (r1 - r0 - self.step * (n - self.padding)) / 2

    def __call__(self, key: Hashable) -> float | None:
        i = self._index.get(key)
        if i is None:
            return None
        return self.start + self.step * i


@dataclass(frozen=True)
class SequentialColorScale:
    """Temperature → hex colour through a sequential matplotlib colormap.

    Values outside the domain take the nearest endpoint colour.
    """

    domain: tuple[float, float] = (TEMP_MIN, TEMP_MAX)
    palette: str = PALETTE

    def __call__(self, value: float) -> str:
        d0, d1 = self.domain
        t = (value - d0) / (d1 - d0)
        t = max(0.0, min(1.0, t))
        return to_hex(colormaps[self.palette](t))

    def stops(self, steps: int) -> list[tuple[float, str]]:
        """`steps + 1` evenly spaced (fraction, colour) pairs across the domain."""
        d0, d1 = self.domain
        return [(i / steps, self(d0 + (d1 - d0) * i / steps)) for i in range(steps + 1)]


@dataclass(frozen=True)
class Scales:
    color: SequentialColorScale
    x: BandScale  # year → px
    y: BandScale  # month index → px


def build_scales(years: Sequence[int]) -> Scales:
    """Build the colour scale and the year/month band scales for a grid."""
    return Scales(
        color=SequentialColorScale(),
        x=BandScale(domain=tuple(years), range=(0.0, float(CELL_WIDTH * len(years)))),
        y=BandScale(
            domain=tuple(range(MONTHS_COUNT)),
            range=(0.0, float(CELL_HEIGHT * MONTHS_COUNT)),
        ),
    )
