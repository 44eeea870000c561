"""Hotel bookings visitor analytics package."""

from .data_loader import DEFAULT_DATA_PATH, BookingDataError, load_bookings
from .analytics.preparation import prepare_booking_dataframe
from .analytics.filters import DEFAULT_DATE_RANGE, DateRange, filter_by_date_range
from .analytics.aggregation import aggregate_by_key, build_dashboard_series
from .state import DashboardState

__all__ = [
    "DEFAULT_DATA_PATH",
    "BookingDataError",
    "load_bookings",
    "prepare_booking_dataframe",
    "DEFAULT_DATE_RANGE",
    "DateRange",
    "filter_by_date_range",
    "aggregate_by_key",
    "build_dashboard_series",
    "DashboardState",
]
