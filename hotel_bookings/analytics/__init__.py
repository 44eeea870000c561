"""Analytics helpers for the hotel bookings dashboard."""

from .preparation import (
    MONTH_NUMBERS,
    REQUIRED_COLUMNS,
    compose_arrival_dates,
    compose_booking_date,
    parse_month,
    prepare_booking_dataframe,
)
from .filters import DEFAULT_DATE_RANGE, DateRange, data_coverage, default_date_range, filter_by_date_range
from .aggregation import (
    ChartSeries,
    adults_per_day,
    aggregate_by_key,
    build_dashboard_series,
    children_per_day,
    country_key,
    day_key,
    sum_columns,
    visitors_per_country,
    visitors_per_day,
)
from .summaries import BookingSummary, build_summary, summary_to_frame
from .breakdowns import build_country_breakdown, build_daily_breakdown
from .timeseries import TrendResult, build_visitor_trend
from .visuals import build_series_chart, build_visitor_trend_chart, create_party_size_plot

__all__ = [
    "MONTH_NUMBERS",
    "REQUIRED_COLUMNS",
    "compose_arrival_dates",
    "compose_booking_date",
    "parse_month",
    "prepare_booking_dataframe",
    "DEFAULT_DATE_RANGE",
    "DateRange",
    "data_coverage",
    "default_date_range",
    "filter_by_date_range",
    "ChartSeries",
    "adults_per_day",
    "aggregate_by_key",
    "build_dashboard_series",
    "children_per_day",
    "country_key",
    "day_key",
    "sum_columns",
    "visitors_per_country",
    "visitors_per_day",
    "BookingSummary",
    "build_summary",
    "summary_to_frame",
    "build_country_breakdown",
    "build_daily_breakdown",
    "TrendResult",
    "build_visitor_trend",
    "build_series_chart",
    "build_visitor_trend_chart",
    "create_party_size_plot",
]
