from __future__ import annotations

from datetime import date

import pandas as pd

from hotel_bookings.analytics.aggregation import (
    adults_per_day,
    aggregate_by_key,
    build_dashboard_series,
    children_per_day,
    country_key,
    day_key,
    visitor_count,
    visitors_per_country,
    visitors_per_day,
)
from hotel_bookings.analytics.filters import filter_by_date_range


def _booking(year, month, day, country, adults, children="0", babies="0") -> dict:
    return {
        "arrival_date_year": year,
        "arrival_date_month": month,
        "arrival_date_day_of_month": day,
        "country": country,
        "adults": adults,
        "children": children,
        "babies": babies,
    }


def _sample_frame() -> pd.DataFrame:
    return pd.DataFrame(
        [
            _booking("2015", "July", "3", "GBR", "2"),
            _booking("2015", "July", "1", "PRT", "2", "1"),
            _booking("2015", "July", "3", "PRT", "1", "0", "1"),
            _booking("2015", "July", "2", "", "abc", "NA"),
            _booking("2015", "July", "1", "GBR", " 3 ", "", ""),
        ]
    )


def test_end_to_end_scenario():
    records = [
        {
            "arrival_date_year": 2015,
            "arrival_date_month": "July",
            "arrival_date_day_of_month": 1,
            "country": "PRT",
            "adults": "2",
            "children": "0",
            "babies": "0",
        },
        {
            "arrival_date_year": 2015,
            "arrival_date_month": "July",
            "arrival_date_day_of_month": 1,
            "country": "PRT",
            "adults": "1",
            "children": "1",
            "babies": "0",
        },
        {
            "arrival_date_year": 2015,
            "arrival_date_month": "August",
            "arrival_date_day_of_month": 15,
            "country": "GBR",
            "adults": "1",
            "children": "0",
            "babies": "0",
        },
    ]
    filtered = filter_by_date_range(records, date(2015, 7, 1), date(2015, 8, 10))
    assert len(filtered) == 2

    daily, countries, adults, children = build_dashboard_series(filtered)
    assert daily.to_points() == [{"x": "2015-July-1", "y": 4}]
    assert countries.to_points() == [{"x": "PRT", "y": 4}]
    assert adults.to_points() == [{"x": "2015-July-1", "y": 3}]
    assert children.to_points() == [{"x": "2015-July-1", "y": 1}]


def test_dashboard_series_names_and_axes():
    series = build_dashboard_series(_sample_frame())
    assert [item.name for item in series] == ["Visitors", "Visitors", "Adults", "Children"]
    assert [item.axis for item in series] == ["datetime", "category", "datetime", "datetime"]
    assert [item.chart_type for item in series] == ["line", "bar", "line", "line"]


def test_keys_follow_first_seen_order():
    daily = visitors_per_day(_sample_frame())
    assert daily["x"].tolist() == ["2015-July-3", "2015-July-1", "2015-July-2"]

    countries = visitors_per_country(_sample_frame())
    assert countries["x"].tolist() == ["GBR", "PRT", ""]


def test_malformed_counts_contribute_zero():
    frame = _sample_frame()
    adults = adults_per_day(frame).set_index("x")["y"]
    assert adults["2015-July-2"] == 0
    assert adults["2015-July-1"] == 5

    children = children_per_day(frame).set_index("x")["y"]
    assert children["2015-July-2"] == 0
    assert children["2015-July-1"] == 1


def test_totals_are_conserved_and_keys_unique():
    frame = _sample_frame()
    for key_fn in (day_key, country_key):
        result = aggregate_by_key(frame, key_fn, visitor_count)
        assert result["x"].is_unique
        assert result["y"].sum() == visitor_count(frame).sum()
    assert visitors_per_day(frame)["y"].sum() == 10


def test_differently_spelled_months_form_distinct_keys():
    frame = pd.DataFrame(
        [
            _booking("2015", "July", "1", "PRT", "1"),
            _booking("2015", "july", "1", "PRT", "1"),
        ]
    )
    assert visitors_per_day(frame)["x"].tolist() == ["2015-July-1", "2015-july-1"]


def test_aggregation_is_idempotent():
    frame = _sample_frame()
    pd.testing.assert_frame_equal(visitors_per_day(frame), visitors_per_day(frame))
    pd.testing.assert_frame_equal(visitors_per_country(frame), visitors_per_country(frame))


def test_custom_value_function_is_coerced():
    frame = pd.DataFrame({"country": ["PRT", "PRT", "GBR"]})
    result = aggregate_by_key(frame, country_key, lambda f: pd.Series(["1", "x", None], index=f.index))
    assert result.to_dict("records") == [{"x": "PRT", "y": 1.0}, {"x": "GBR", "y": 0.0}]


def test_empty_input_yields_empty_series():
    result = visitors_per_day(pd.DataFrame())
    assert list(result.columns) == ["x", "y"]
    assert result.empty
    assert build_dashboard_series([])[0].to_points() == []


def test_non_finite_values_contribute_zero():
    frame = pd.DataFrame(
        [
            _booking("2015", "July", "1", "PRT", "inf"),
            _booking("2015", "July", "1", "PRT", "2", "-Infinity"),
            _booking("2015", "July", "2", "GBR", "1e400", "1"),
        ]
    )
    assert visitors_per_day(frame).to_dict("records") == [
        {"x": "2015-July-1", "y": 2.0},
        {"x": "2015-July-2", "y": 1.0},
    ]

    result = aggregate_by_key(frame, country_key, lambda f: pd.Series(float("inf"), index=f.index))
    assert result["y"].tolist() == [0.0, 0.0]
