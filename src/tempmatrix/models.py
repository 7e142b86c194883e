"""Data model definitions — explicit boundaries between load, aggregate, and render layers."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


@dataclass(frozen=True)
class DailyRecord:
    """One parsed source row."""

    date: date
    max_temp: float  # °C
    min_temp: float  # °C


@dataclass(frozen=True, order=True)
class MonthKey:
    """Identifies one matrix cell."""

    year: int
    month: int  # 0 = January … 11 = December


class TempField(Enum):
    """Monthly aggregate that drives cell colour."""

    MAX = "max"
    MIN = "min"

    @property
    def label(self) -> str:
        """Short name used in the tooltip ("Max"/"Min")."""
        return "Max" if self is TempField.MAX else "Min"

    @property
    def indicator(self) -> str:
        """Long name written to the mode indicator ("Maximum"/"Minimum")."""
        return "Maximum" if self is TempField.MAX else "Minimum"


@dataclass(frozen=True)
class MonthSummary:
    """Aggregated (year, month) cell. `days` is never empty."""

    year: int
    month: int  # 0..11
    monthly_max: float  # max of daily max_temp
    monthly_min: float  # min of daily min_temp
    days: tuple[DailyRecord, ...]  # ascending by date

    @property
    def key(self) -> MonthKey:
        return MonthKey(self.year, self.month)

    @property
    def label(self) -> str:
        """`YYYY-MM` with a 1-based month."""
        return f"{self.year}-{self.month + 1:02d}"

    def value(self, temp_field: TempField) -> float:
        return self.monthly_max if temp_field is TempField.MAX else self.monthly_min


@dataclass(frozen=True)
class LoadReport:
    """Row accounting for one load. Counts only, no row contents."""

    total_rows: int = 0
    skipped_rows: int = 0  # bad date or non-numeric temperature
    duplicate_dates: int = 0  # rows replaced by a later row with the same date
    excluded_rows: int = 0  # valid rows outside the selected years


@dataclass(frozen=True)
class Dataset:
    """The sole input to renderers. Fully aggregated state."""

    years: tuple[int, ...]  # ascending, most recent N
    cells: dict[MonthKey, MonthSummary] = field(hash=False)
    report: LoadReport = LoadReport()

    def get(self, year: int, month: int) -> MonthSummary | None:
        return self.cells.get(MonthKey(year, month))

    @property
    def summaries(self) -> tuple[MonthSummary, ...]:
        """All cells ordered by year, then month."""
        return tuple(self.cells[k] for k in sorted(self.cells))
