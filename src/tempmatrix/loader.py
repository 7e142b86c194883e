"""Data loading layer — CSV fetch, row parsing, year-window selection and grouping."""

import asyncio
import io
import logging
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

import httpx
import numpy as np
import pandas as pd

from tempmatrix.aggregate import summarize_groups
from tempmatrix.config import (
    COL_DATE,
    COL_MAX,
    COL_MIN,
    DATE_FORMAT,
    HTTP_TIMEOUT,
    REQUIRED_COLUMNS,
    YEARS_COUNT,
)
from tempmatrix.models import DailyRecord, Dataset, LoadReport

logger = logging.getLogger(__name__)

Source = str | Path
Grouped = dict[int, dict[int, list[DailyRecord]]]


class DataLoadError(Exception):
    """Source missing, unreachable, or not a usable temperature table."""


def _is_url(source: Source) -> bool:
    return str(source).startswith(("http://", "https://"))


def _parse_csv(buffer, source: Source) -> pd.DataFrame:
    """Read CSV text or a file path as strings and check the header."""
    try:
        frame = pd.read_csv(buffer, dtype=str, skipinitialspace=True)
    except (OSError, ValueError) as e:
        # ValueError covers pandas EmptyDataError/ParserError and decode errors
        raise DataLoadError(f"Cannot read {source}: {e}") from e
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if missing:
        raise DataLoadError(
            f"{source} is missing columns {missing}. Available={list(frame.columns)}"
        )
    return frame


def read_source(source: Source) -> pd.DataFrame:
    """Fetch the raw table from a local path or an http(s) URL.

    Raises:
        DataLoadError: On HTTP failure, missing file, or malformed table.
    """
    if _is_url(source):
        try:
            resp = httpx.get(str(source), timeout=HTTP_TIMEOUT, follow_redirects=True)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise DataLoadError(f"Cannot fetch {source}: {e}") from e
        return _parse_csv(io.StringIO(resp.text), source)
    return _parse_csv(Path(source), source)


async def aread_source(source: Source) -> pd.DataFrame:
    """Async variant of read_source. The fetch is the only suspension point."""
    if not _is_url(source):
        return await asyncio.to_thread(read_source, source)
    try:
        async with httpx.AsyncClient(
            timeout=HTTP_TIMEOUT, follow_redirects=True
        ) as client:
            resp = await client.get(str(source))
            resp.raise_for_status()
    except httpx.HTTPError as e:
        raise DataLoadError(f"Cannot fetch {source}: {e}") from e
    return _parse_csv(io.StringIO(resp.text), source)


def parse_records(frame: pd.DataFrame) -> tuple[list[DailyRecord], LoadReport]:
    """Convert raw string rows into DailyRecords.

    Rows with an unparseable date or a non-numeric/non-finite temperature are
    dropped. When several rows share a date the last one wins.

    Returns:
        (records in source order, LoadReport with skipped/duplicate counts)
    """
    dates = pd.to_datetime(frame[COL_DATE], format=DATE_FORMAT, errors="coerce")
    highs = pd.to_numeric(frame[COL_MAX], errors="coerce").astype(float)
    lows = pd.to_numeric(frame[COL_MIN], errors="coerce").astype(float)

    valid = dates.notna() & np.isfinite(highs) & np.isfinite(lows)
    skipped = int((~valid).sum())

    clean = pd.DataFrame({"date": dates[valid], "max": highs[valid], "min": lows[valid]})
    before = len(clean)
    clean = clean.drop_duplicates(subset="date", keep="last")
    duplicates = before - len(clean)

    if skipped:
        logger.warning(f"Skipped {skipped} malformed row(s) (bad date or temperature)")
    if duplicates:
        logger.warning(f"Replaced {duplicates} row(s) with duplicate dates (last row wins)")

    records = [
        DailyRecord(date=ts.date(), max_temp=float(hi), min_temp=float(lo))
        for ts, hi, lo in zip(clean["date"], clean["max"], clean["min"])
    ]
    report = LoadReport(
        total_rows=len(frame), skipped_rows=skipped, duplicate_dates=duplicates
    )
    return records, report


def select_years(records: Iterable[DailyRecord], count: int = YEARS_COUNT) -> tuple[int, ...]:
    """Return the `count` most recent distinct years, ascending."""
    if count < 1:
        raise ValueError(f"Years count must be positive, got {count}")
    years = sorted({r.date.year for r in records})
    return tuple(years[-count:])


def group_by_month(records: Iterable[DailyRecord], years: Iterable[int]) -> tuple[Grouped, int]:
    """Group records of the selected years by year, then month index (0..11).

    Membership is exact: a year missing from `years` is excluded even when it
    falls between two selected years.

    Returns:
        (year → month → records, number of records excluded)
    """
    selected = set(years)
    grouped: Grouped = defaultdict(lambda: defaultdict(list))
    excluded = 0
    for r in records:
        if r.date.year not in selected:
            excluded += 1
            continue
        grouped[r.date.year][r.date.month - 1].append(r)
    return {y: dict(months) for y, months in grouped.items()}, excluded


def build_dataset(
    records: list[DailyRecord],
    years_count: int = YEARS_COUNT,
    report: LoadReport | None = None,
) -> Dataset:
    """Select the year window, group, and aggregate parsed records."""
    years = select_years(records, years_count)
    grouped, excluded = group_by_month(records, years)
    cells = summarize_groups(grouped)
    base = report or LoadReport(total_rows=len(records))
    report = LoadReport(
        total_rows=base.total_rows,
        skipped_rows=base.skipped_rows,
        duplicate_dates=base.duplicate_dates,
        excluded_rows=excluded,
    )
    logger.info(
        f"Loaded {len(cells)} month cell(s) for years {years[0] if years else '-'}"
        f"–{years[-1] if years else '-'} ({excluded} record(s) outside the window)"
    )
    return Dataset(years=years, cells=cells, report=report)


def load_dataset(source: Source, years_count: int = YEARS_COUNT) -> Dataset:
    """Top-level entry point: read a source and return an aggregated Dataset.

    Args:
        source: CSV path or http(s) URL with date/max_temperature/min_temperature.
        years_count: Number of most recent years to keep.

    Returns:
        Fully aggregated Dataset.

    Raises:
        DataLoadError: When the source cannot be read as a temperature table.
    """
    records, report = parse_records(read_source(source))
    return build_dataset(records, years_count, report)


async def aload_dataset(source: Source, years_count: int = YEARS_COUNT) -> Dataset:
    """Async variant of load_dataset; nothing is built before the fetch resolves."""
    frame = await aread_source(source)
    records, report = parse_records(frame)
    return build_dataset(records, years_count, report)
