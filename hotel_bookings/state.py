"""Presentation-layer state for the bookings dashboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Callable, List

import pandas as pd

from .analytics.aggregation import ChartSeries, build_dashboard_series
from .analytics.filters import DateRange, default_date_range, filter_by_range
from .analytics.preparation import prepare_booking_dataframe
from .data_loader import BookingDataError, load_bookings

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Error loading data. Please check the CSV file and try again."

Loader = Callable[[object], pd.DataFrame]


@dataclass
class DashboardState:
    """
    Everything the dashboard renders from.

    ``load`` is the only operation that reads the source; ``apply_date_range``
    re-filters the records already held.
    """

    source: str | Path | IO[bytes] | None = None
    date_range: DateRange = field(default_factory=default_date_range)
    records: pd.DataFrame = field(default_factory=pd.DataFrame)
    filtered: pd.DataFrame = field(default_factory=pd.DataFrame)
    is_loading: bool = True
    has_error: bool = False
    error_message: str | None = None

    def load(self, loader: Loader = load_bookings) -> "DashboardState":
        self.is_loading = True
        self.has_error = False
        self.error_message = None
        try:
            raw = loader(self.source)
        except BookingDataError:
            logger.exception("Failed to load bookings")
            self.records = pd.DataFrame()
            self.filtered = pd.DataFrame()
            self.has_error = True
            self.error_message = LOAD_ERROR_MESSAGE
        else:
            self.records = prepare_booking_dataframe(raw)
            self._refilter()
        finally:
            self.is_loading = False
        return self

    def apply_date_range(self, date_range: DateRange) -> "DashboardState":
        self.date_range = date_range
        self._refilter()
        return self

    def series(self) -> List[ChartSeries]:
        return build_dashboard_series(self.filtered)

    def _refilter(self) -> None:
        if self.records.empty:
            self.filtered = self.records.copy()
            return
        self.filtered = filter_by_range(self.records, self.date_range)
        logger.debug("Selected %d of %d bookings for %s", len(self.filtered), len(self.records), self.date_range)
