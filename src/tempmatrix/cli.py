"""
Temperature matrix command line interface
=========================================

Renders a daily temperature CSV to an interactive HTML page and/or a PNG:

    tempmatrix temperature_daily.csv --html out/matrix.html --png out/matrix.png

The source may also be an http(s) URL. When no source is given,
TEMPMATRIX_SOURCE (environment or .env) is used.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from tempmatrix.config import default_source
from tempmatrix.loader import DataLoadError, load_dataset
from tempmatrix.models import TempField
from tempmatrix.renderers.static import save_static_matrix
from tempmatrix.renderers.svg_html import save_matrix_html

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="tempmatrix",
        description="Year × month temperature matrix renderer",
    )
    ap.add_argument("source", nargs="?", default=None, help="CSV path or URL")
    ap.add_argument("--html", type=Path, default=None, help="write interactive HTML here")
    ap.add_argument("--png", type=Path, default=None, help="write static PNG here")
    ap.add_argument(
        "--field",
        choices=[f.value for f in TempField],
        default=TempField.MAX.value,
        help="aggregate used for PNG colours (default: max)",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return ap


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = args.source or default_source()
    try:
        dataset = load_dataset(source)
    except DataLoadError as e:
        logger.error(str(e))
        return 1

    report = dataset.report
    print(
        f"{len(dataset.cells)} months across {len(dataset.years)} years "
        f"({report.skipped_rows} malformed, {report.duplicate_dates} duplicate row(s))"
    )

    html_path = args.html
    if html_path is None and args.png is None:
        html_path = Path("temperature_matrix.html")
    if html_path is not None:
        print(f"Saved: {save_matrix_html(dataset, html_path)}")
    if args.png is not None:
        print(f"Saved: {save_static_matrix(dataset, args.png, TempField(args.field))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
