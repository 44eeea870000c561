"""Breakdown tables for the hotel bookings dashboard."""

from __future__ import annotations

import pandas as pd

from .preparation import COUNT_COLUMNS, COUNTRY_COLUMN, coerce_counts, compose_arrival_dates, text_column

_COUNT_LABELS = ["Bookings", "Adults", "Children", "Babies", "Visitors"]


def _count_frame(df: pd.DataFrame) -> pd.DataFrame:
    counts = pd.DataFrame({column: coerce_counts(df, column) for column in COUNT_COLUMNS}, index=df.index)
    counts["visitors"] = counts[list(COUNT_COLUMNS)].sum(axis=1)
    return counts


def _finalise(grouped: pd.DataFrame, label: str) -> pd.DataFrame:
    result = grouped.reset_index()
    result.columns = [label, *_COUNT_LABELS]
    result["Bookings"] = result["Bookings"].astype(int)
    for column in _COUNT_LABELS[1:]:
        result[column] = result[column].round(2)
    return result


def build_country_breakdown(df: pd.DataFrame, *, top_n: int | None = None) -> pd.DataFrame:
    """Visitor mix per country, busiest first."""
    if df.empty:
        return pd.DataFrame(columns=["Country", *_COUNT_LABELS])

    working = _count_frame(df)
    working["country"] = text_column(df, COUNTRY_COLUMN).replace("", "Unknown")
    grouped = working.groupby("country", sort=False).agg(
        bookings=("visitors", "size"),
        adults=("adults", "sum"),
        children=("children", "sum"),
        babies=("babies", "sum"),
        visitors=("visitors", "sum"),
    )
    result = _finalise(grouped, "Country")
    result = result.sort_values(["Visitors", "Bookings"], ascending=[False, False], kind="stable")
    if top_n is not None:
        result = result.head(top_n)
    return result.reset_index(drop=True)


def build_daily_breakdown(df: pd.DataFrame) -> pd.DataFrame:
    """Visitor mix per arrival date in chronological order; undatable rows are left out."""
    if df.empty:
        return pd.DataFrame(columns=["Arrival date", *_COUNT_LABELS])

    working = _count_frame(df)
    working["arrival_date"] = compose_arrival_dates(df)
    working = working.dropna(subset=["arrival_date"])
    if working.empty:
        return pd.DataFrame(columns=["Arrival date", *_COUNT_LABELS])

    grouped = working.groupby("arrival_date").agg(
        bookings=("visitors", "size"),
        adults=("adults", "sum"),
        children=("children", "sum"),
        babies=("babies", "sum"),
        visitors=("visitors", "sum"),
    )
    result = _finalise(grouped, "Arrival date")
    result["Arrival date"] = result["Arrival date"].dt.date
    return result.reset_index(drop=True)
