"""Arrival-date range filtering for booking records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping

import pandas as pd

from .preparation import as_booking_frame, compose_arrival_dates

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DateRange:
    start: date
    end: date  # inclusive

    def __str__(self) -> str:
        return f"{self.start:%Y-%m-%d} to {self.end:%Y-%m-%d}"


DEFAULT_DATE_RANGE = DateRange(start=date(2015, 7, 1), end=date(2015, 8, 10))


def default_date_range() -> DateRange:
    return DEFAULT_DATE_RANGE


def filter_by_date_range(
    records: pd.DataFrame | Iterable[Mapping[str, object]],
    start: date | str | pd.Timestamp,
    end: date | str | pd.Timestamp,
) -> pd.DataFrame:
    """
    Keep the bookings whose composed arrival date lies within ``[start, end]``.

    Both bounds are inclusive and compared at day resolution. Rows whose year,
    month or day do not form a valid date are dropped rather than raising. The
    result keeps the input's row order and index labels; the input is not
    modified. An inverted range simply matches nothing.
    """
    frame = as_booking_frame(records)
    if frame.empty:
        return frame.copy()

    lower = pd.Timestamp(start).normalize()
    upper = pd.Timestamp(end).normalize()

    arrival = compose_arrival_dates(frame)
    unparseable = int(arrival.isna().sum())
    if unparseable:
        logger.debug("Excluded %d bookings with unparseable arrival dates", unparseable)

    mask = arrival.between(lower, upper, inclusive="both")
    return frame.loc[mask.to_numpy()].copy()


def filter_by_range(records: pd.DataFrame | Iterable[Mapping[str, object]], date_range: DateRange) -> pd.DataFrame:
    return filter_by_date_range(records, date_range.start, date_range.end)


def data_coverage(records: pd.DataFrame | Iterable[Mapping[str, object]]) -> DateRange | None:
    """Earliest and latest valid arrival dates, or ``None`` when no row has one."""
    frame = as_booking_frame(records)
    arrival = compose_arrival_dates(frame).dropna()
    if arrival.empty:
        return None
    return DateRange(start=arrival.min().date(), end=arrival.max().date())
