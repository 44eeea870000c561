"""Summary metrics for the hotel bookings dashboard."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List

import numpy as np
import pandas as pd

from .filters import data_coverage
from .preparation import COUNTRY_COLUMN, coerce_counts, text_column


@dataclass(slots=True)
class BookingSummary:
    """Lightweight container for headline analytics."""

    total_bookings: int
    total_visitors: int
    adults: int
    children: int
    babies: int
    countries: int
    first_arrival: date | None
    last_arrival: date | None
    report_date: pd.Timestamp


def build_summary(df: pd.DataFrame) -> BookingSummary:
    """Generate headline KPIs from a (prepared or filtered) bookings frame."""
    report_date = pd.Timestamp.now().normalize()
    if df.empty:
        return BookingSummary(
            total_bookings=0,
            total_visitors=0,
            adults=0,
            children=0,
            babies=0,
            countries=0,
            first_arrival=None,
            last_arrival=None,
            report_date=report_date,
        )

    adults = _column_total(df, "adults")
    children = _column_total(df, "children")
    babies = _column_total(df, "babies")
    coverage = data_coverage(df)

    return BookingSummary(
        total_bookings=int(len(df)),
        total_visitors=adults + children + babies,
        adults=adults,
        children=children,
        babies=babies,
        countries=_count_countries(df),
        first_arrival=coverage.start if coverage else None,
        last_arrival=coverage.end if coverage else None,
        report_date=report_date,
    )


def summary_to_frame(records: pd.DataFrame, filtered: pd.DataFrame) -> pd.DataFrame:
    """
    Convert summary metrics into a two-cohort dataframe.

    Columns: Metric, All bookings, Selected range.
    """
    cohorts: Dict[str, BookingSummary] = {
        "All bookings": build_summary(records),
        "Selected range": build_summary(filtered),
    }

    metrics: List[tuple[str, Callable[[BookingSummary], object]]] = [
        ("Bookings", lambda summary: summary.total_bookings),
        ("Visitors", lambda summary: summary.total_visitors),
        ("Adults", lambda summary: summary.adults),
        ("Children", lambda summary: summary.children),
        ("Babies", lambda summary: summary.babies),
        ("Countries", lambda summary: summary.countries),
        ("Visitors per booking", _visitors_per_booking),
        ("First arrival", lambda summary: summary.first_arrival),
        ("Last arrival", lambda summary: summary.last_arrival),
    ]

    rows: List[Dict[str, object]] = []
    for label, func in metrics:
        row = {"Metric": label}
        for cohort_label, summary in cohorts.items():
            row[cohort_label] = _format_metric_value(func(summary))
        rows.append(row)

    rows.append(
        {
            "Metric": "Report generated",
            "All bookings": cohorts["All bookings"].report_date.strftime("%Y-%m-%d"),
            "Selected range": "—",
        }
    )
    return pd.DataFrame(rows)


def _column_total(df: pd.DataFrame, column: str) -> int:
    total = float(coerce_counts(df, column).sum())
    # an overflowing sum of huge cells counts like any other unusable value
    return int(total) if math.isfinite(total) else 0


def _visitors_per_booking(summary: BookingSummary) -> float:
    if not summary.total_bookings:
        return float("nan")
    return summary.total_visitors / summary.total_bookings


def _count_countries(df: pd.DataFrame) -> int:
    countries = text_column(df, COUNTRY_COLUMN).str.strip()
    return int(countries[countries != ""].nunique())


def _format_metric_value(value: object) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return "—"
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, float):
        return f"{value:.2f}"
    if isinstance(value, (int, np.integer)):
        return f"{int(value):,}"
    return str(value)
