"""Group-by aggregation behind the dashboard's visitor series."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List, Mapping

import pandas as pd

from .preparation import (
    COUNT_COLUMNS,
    COUNTRY_COLUMN,
    DAY_COLUMN,
    MONTH_COLUMN,
    YEAR_COLUMN,
    as_booking_frame,
    coerce_counts,
    finite_or_zero,
    text_column,
)

KeyFn = Callable[[pd.DataFrame], pd.Series]
ValueFn = Callable[[pd.DataFrame], pd.Series]


def day_key(frame: pd.DataFrame) -> pd.Series:
    """``"{year}-{month}-{day}"`` built from the raw field text, e.g. ``"2015-July-1"``."""
    return (
        text_column(frame, YEAR_COLUMN)
        + "-"
        + text_column(frame, MONTH_COLUMN)
        + "-"
        + text_column(frame, DAY_COLUMN)
    )


def country_key(frame: pd.DataFrame) -> pd.Series:
    return text_column(frame, COUNTRY_COLUMN)


def sum_columns(*columns: str) -> ValueFn:
    """Value function adding the given count columns row by row."""

    def _sum(frame: pd.DataFrame) -> pd.Series:
        total = pd.Series(0.0, index=frame.index)
        for column in columns:
            total = total + coerce_counts(frame, column)
        return total

    return _sum


visitor_count = sum_columns(*COUNT_COLUMNS)
adult_count = sum_columns("adults")
children_count = sum_columns("children")


def aggregate_by_key(
    records: pd.DataFrame | Iterable[Mapping[str, object]],
    key_fn: KeyFn,
    value_fn: ValueFn,
) -> pd.DataFrame:
    """
    Sum ``value_fn`` per distinct ``key_fn`` value.

    ``key_fn`` and ``value_fn`` receive the whole frame and return one key / one
    number per row. Values that are not numeric count as zero. The result has
    columns ``x`` (key) and ``y`` (sum) with one row per key, in the order keys
    first appear in ``records``; gaps are not filled.
    """
    frame = as_booking_frame(records)
    if frame.empty:
        return pd.DataFrame({"x": pd.Series(dtype=object), "y": pd.Series(dtype=float)})

    keys = key_fn(frame).map(str)
    values = finite_or_zero(pd.to_numeric(value_fn(frame), errors="coerce"))
    grouped = values.groupby(keys.to_numpy(), sort=False).sum()
    return pd.DataFrame({"x": grouped.index.astype(object), "y": grouped.to_numpy(dtype=float)})


def visitors_per_day(records: pd.DataFrame | Iterable[Mapping[str, object]]) -> pd.DataFrame:
    return aggregate_by_key(records, day_key, visitor_count)


def visitors_per_country(records: pd.DataFrame | Iterable[Mapping[str, object]]) -> pd.DataFrame:
    return aggregate_by_key(records, country_key, visitor_count)


def adults_per_day(records: pd.DataFrame | Iterable[Mapping[str, object]]) -> pd.DataFrame:
    return aggregate_by_key(records, day_key, adult_count)


def children_per_day(records: pd.DataFrame | Iterable[Mapping[str, object]]) -> pd.DataFrame:
    return aggregate_by_key(records, day_key, children_count)


@dataclass(slots=True)
class ChartSeries:
    """One named series handed to the presentation layer."""

    name: str
    title: str
    axis: str
    chart_type: str
    points: pd.DataFrame

    def to_points(self) -> List[dict]:
        return [{"x": key, "y": _display_number(value)} for key, value in zip(self.points["x"], self.points["y"])]


def _display_number(value: float) -> int | float:
    number = float(value)
    return int(number) if number.is_integer() else number


def build_dashboard_series(filtered: pd.DataFrame | Iterable[Mapping[str, object]]) -> List[ChartSeries]:
    """The four dashboard series, in render order."""
    frame = as_booking_frame(filtered)
    return [
        ChartSeries(
            name="Visitors",
            title="Number of Visitors per Day",
            axis="datetime",
            chart_type="line",
            points=visitors_per_day(frame),
        ),
        ChartSeries(
            name="Visitors",
            title="Number of Visitors per Country",
            axis="category",
            chart_type="bar",
            points=visitors_per_country(frame),
        ),
        ChartSeries(
            name="Adults",
            title="Total Adult Visitors",
            axis="datetime",
            chart_type="line",
            points=adults_per_day(frame),
        ),
        ChartSeries(
            name="Children",
            title="Total Children Visitors",
            axis="datetime",
            chart_type="line",
            points=children_per_day(frame),
        ),
    ]
