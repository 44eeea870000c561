"""Command-line entrypoint for generating booking analytics outputs."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path

from hotel_bookings import DEFAULT_DATA_PATH, DEFAULT_DATE_RANGE, DashboardState, DateRange
from hotel_bookings.reporting import export_excel_report, build_pdf_report

logger = logging.getLogger("hotel_bookings.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate visitor analytics for the hotel bookings CSV.")
    parser.add_argument(
        "--csv",
        type=Path,
        default=DEFAULT_DATA_PATH,
        help="Path to the bookings CSV (defaults to the repository sample).",
    )
    parser.add_argument(
        "--start",
        type=date.fromisoformat,
        default=DEFAULT_DATE_RANGE.start,
        help="First arrival date to include, YYYY-MM-DD (inclusive).",
    )
    parser.add_argument(
        "--end",
        type=date.fromisoformat,
        default=DEFAULT_DATE_RANGE.end,
        help="Last arrival date to include, YYYY-MM-DD (inclusive).",
    )
    parser.add_argument(
        "--excel",
        type=Path,
        default=Path("hotel_booking_analytics.xlsx"),
        help="Destination path for the Excel analytics workbook.",
    )
    parser.add_argument(
        "--pdf",
        type=Path,
        default=Path("hotel_booking_analytics.pdf"),
        help="Destination path for the PDF summary report.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    state = DashboardState(source=args.csv, date_range=DateRange(start=args.start, end=args.end)).load()
    if state.has_error:
        print(state.error_message, file=sys.stderr)
        return 1

    series = state.series()
    for item in series:
        total = item.points["y"].sum()
        logger.info("%s: %d points, total %s", item.title, len(item.points), f"{total:g}")

    export_excel_report(state.records, state.filtered, series, path=args.excel)

    pdf_written = False
    try:
        pdf_bytes = build_pdf_report(state.records, state.filtered, series)
    except ImportError as exc:
        logger.warning("PDF export skipped: %s", exc)
    else:
        args.pdf.write_bytes(pdf_bytes)
        pdf_written = True

    print(
        f"Analytics generated for {state.date_range} ({len(state.filtered)} of {len(state.records)} bookings):\n"
        f" - Excel: {args.excel}\n"
        f" - PDF: {args.pdf if pdf_written else 'skipped'}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
