"""Per-month aggregation of daily records."""

from collections.abc import Mapping, Sequence
from operator import attrgetter

from tempmatrix.models import DailyRecord, MonthKey, MonthSummary


def summarize_month(records: Sequence[DailyRecord]) -> MonthSummary:
    """Summarise one (year, month) group.

    The caller's sequence is left untouched; `days` is a new tuple produced
    by a stable sort on date.

    Args:
        records: Non-empty daily records that all fall in the same month.

    Returns:
        MonthSummary with monthly extrema and the ordered days.

    Raises:
        ValueError: If `records` is empty or spans more than one month.
    """
    if not records:
        raise ValueError("Cannot summarise an empty month")
    days = tuple(sorted(records, key=attrgetter("date")))
    first = days[0].date
    if any((d.date.year, d.date.month) != (first.year, first.month) for d in days):
        raise ValueError(f"Records span more than one month (first: {first:%Y-%m})")
    return MonthSummary(
        year=first.year,
        month=first.month - 1,
        monthly_max=max(d.max_temp for d in days),
        monthly_min=min(d.min_temp for d in days),
        days=days,
    )


def summarize_groups(
    grouped: Mapping[int, Mapping[int, Sequence[DailyRecord]]],
) -> dict[MonthKey, MonthSummary]:
    """Summarise every non-empty group of a year → month → records mapping."""
    cells: dict[MonthKey, MonthSummary] = {}
    for year in sorted(grouped):
        for month in sorted(grouped[year]):
            records = grouped[year][month]
            if not records:
                continue
            summary = summarize_month(records)
            cells[summary.key] = summary
    return cells
