from __future__ import annotations

from datetime import date

import pandas as pd

from hotel_bookings.analytics.filters import (
    DEFAULT_DATE_RANGE,
    DateRange,
    data_coverage,
    filter_by_date_range,
)


def _sample_records() -> pd.DataFrame:
    rows = [
        ("2015", "June", "30"),
        ("2015", "July", "1"),
        ("2015", "July", "20"),
        ("2015", "August", "10"),
        ("2015", "August", "11"),
        ("2015", "Jully", "5"),
        ("2015", "February", "30"),
        ("", "", ""),
    ]
    return pd.DataFrame(
        [
            {
                "arrival_date_year": year,
                "arrival_date_month": month,
                "arrival_date_day_of_month": day,
                "country": "PRT",
                "adults": "2",
                "children": "0",
                "babies": "0",
            }
            for year, month, day in rows
        ],
        index=range(10, 10 + len(rows)),
    )


def test_default_date_range_matches_sample_coverage():
    assert DEFAULT_DATE_RANGE == DateRange(start=date(2015, 7, 1), end=date(2015, 8, 10))


def test_filter_keeps_inclusive_bounds_and_drops_invalid_dates():
    records = _sample_records()
    filtered = filter_by_date_range(records, date(2015, 7, 1), date(2015, 8, 10))
    assert list(filtered.index) == [11, 12, 13]


def test_filter_returns_subset_of_input_rows():
    records = _sample_records()
    filtered = filter_by_date_range(records, "2015-07-01", "2015-08-10")
    assert set(filtered.index).issubset(records.index)
    pd.testing.assert_frame_equal(filtered, records.loc[filtered.index])


def test_filter_does_not_mutate_input():
    records = _sample_records()
    snapshot = records.copy()
    filter_by_date_range(records, date(2015, 7, 1), date(2015, 8, 10))
    pd.testing.assert_frame_equal(records, snapshot)


def test_filter_ignores_time_of_day_on_bounds():
    records = _sample_records()
    filtered = filter_by_date_range(records, pd.Timestamp("2015-07-01 18:00"), pd.Timestamp("2015-08-10 23:59"))
    assert list(filtered.index) == [11, 12, 13]


def test_inverted_range_matches_nothing():
    filtered = filter_by_date_range(_sample_records(), date(2015, 8, 10), date(2015, 7, 1))
    assert filtered.empty


def test_filter_accepts_row_mappings():
    records = [
        {"arrival_date_year": 2015, "arrival_date_month": "July", "arrival_date_day_of_month": 1},
        {"arrival_date_year": 2015, "arrival_date_month": "August", "arrival_date_day_of_month": 15},
    ]
    filtered = filter_by_date_range(records, date(2015, 7, 1), date(2015, 8, 10))
    assert len(filtered) == 1
    assert filtered.iloc[0]["arrival_date_month"] == "July"


def test_filter_on_empty_frame_returns_empty_frame():
    assert filter_by_date_range(pd.DataFrame(), date(2015, 7, 1), date(2015, 8, 10)).empty


def test_data_coverage_spans_valid_dates_only():
    coverage = data_coverage(_sample_records())
    assert coverage == DateRange(start=date(2015, 6, 30), end=date(2015, 8, 11))
    assert data_coverage(pd.DataFrame({"arrival_date_month": ["Smarch"]})) is None
