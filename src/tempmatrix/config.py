"""Layout, domain and input constants shared by every layer."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class Margin:
    top: int
    right: int
    bottom: int
    left: int


# ==========================================
# LAYOUT
# ==========================================
MARGIN = Margin(top=50, right=120, bottom=20, left=90)
CELL_WIDTH = 100
CELL_HEIGHT = 70
YEARS_COUNT = 10  # most recent years shown
MONTHS_COUNT = 12
WIDTH = CELL_WIDTH * YEARS_COUNT + MARGIN.left + MARGIN.right
HEIGHT = CELL_HEIGHT * MONTHS_COUNT + MARGIN.top + MARGIN.bottom

BAND_PADDING = 0.05  # fraction of each band left as gutter
CELL_RADIUS = 2
MINI_CHART_PADDING = 4  # px inside each cell

LEGEND_GUTTER = 30  # px between the grid and the legend bar
LEGEND_WIDTH = 18
LEGEND_STEPS = 10  # gradient gets LEGEND_STEPS + 1 stops

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

# ==========================================
# TEMPERATURE DOMAIN / COLOUR
# ==========================================
TEMP_MIN = 0.0  # °C
TEMP_MAX = 40.0  # °C
PALETTE = "YlOrRd"  # light yellow → dark red
TRANSITION_MS = 400

# ==========================================
# INPUT
# ==========================================
COL_DATE = "date"
COL_MAX = "max_temperature"
COL_MIN = "min_temperature"
REQUIRED_COLUMNS = (COL_DATE, COL_MAX, COL_MIN)
DATE_FORMAT = "%Y-%m-%d"
HTTP_TIMEOUT = 10  # seconds

DEFAULT_SOURCE = "temperature_daily.csv"


def default_source() -> str:
    """Data source from TEMPMATRIX_SOURCE, falling back to DEFAULT_SOURCE."""
    return os.environ.get("TEMPMATRIX_SOURCE") or DEFAULT_SOURCE
