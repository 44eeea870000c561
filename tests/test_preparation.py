from __future__ import annotations

import pandas as pd

from hotel_bookings.analytics.aggregation import visitors_per_day
from hotel_bookings.analytics.preparation import (
    REQUIRED_COLUMNS,
    compose_arrival_dates,
    compose_booking_date,
    parse_day_key,
    parse_month,
    prepare_booking_dataframe,
)


def _sample_raw_frame() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "Hotel": "Resort Hotel",
                "Arrival Date Year": "2015",
                "Arrival Date Month": " July ",
                "Arrival Date Day Of Month": "1",
                "Country": "PRT",
                "Adults": "2",
            },
            {
                "Hotel": "City Hotel",
                "Arrival Date Year": "2015",
                "Arrival Date Month": "August",
                "Arrival Date Day Of Month": "15",
                "Country": "GBR",
                "Adults": "1",
            },
        ]
    )


def test_parse_month_uses_explicit_table():
    assert parse_month("July") == 7
    assert parse_month(" AUGUST ") == 8
    assert parse_month("sep") == 9
    assert parse_month("Sept") == 9
    assert parse_month("7") == 7
    assert parse_month("13") is None
    assert parse_month("Juli") is None
    assert parse_month("") is None
    assert parse_month(None) is None


def test_compose_booking_date_handles_valid_and_invalid_fields():
    assert compose_booking_date(2015, "July", 1) == pd.Timestamp("2015-07-01")
    assert compose_booking_date("2015", "december", "31") == pd.Timestamp("2015-12-31")
    assert pd.isna(compose_booking_date("2015", "February", "30"))
    assert pd.isna(compose_booking_date("abc", "July", "1"))
    assert pd.isna(compose_booking_date("2015", "July", "1.5"))
    assert pd.isna(compose_booking_date("2015", "Jully", "1"))
    assert pd.isna(compose_booking_date("", "", ""))
    assert pd.isna(compose_booking_date("99999", "July", "1"))


def test_parse_day_key_round_trips_series_keys():
    assert parse_day_key("2015-July-1") == pd.Timestamp("2015-07-01")
    assert pd.isna(parse_day_key("2015-July"))
    assert pd.isna(parse_day_key("PRT"))


def test_prepare_booking_dataframe_canonicalises_headers():
    prepared = prepare_booking_dataframe(_sample_raw_frame())
    assert set(REQUIRED_COLUMNS).issubset(prepared.columns)
    assert "hotel" in prepared.columns

    first = prepared.iloc[0]
    assert first["arrival_date_month"] == "July"
    assert first["children"] == ""
    assert first["babies"] == ""


def test_prepare_booking_dataframe_does_not_mutate_input():
    raw = _sample_raw_frame()
    snapshot = raw.copy()
    prepare_booking_dataframe(raw)
    pd.testing.assert_frame_equal(raw, snapshot)


def test_compose_arrival_dates_keeps_index_and_marks_invalid_rows():
    frame = pd.DataFrame(
        {
            "arrival_date_year": ["2015", "2015"],
            "arrival_date_month": ["July", "Smarch"],
            "arrival_date_day_of_month": ["4", "1"],
        },
        index=[7, 9],
    )
    dates = compose_arrival_dates(frame)
    assert list(dates.index) == [7, 9]
    assert dates.loc[7] == pd.Timestamp("2015-07-04")
    assert pd.isna(dates.loc[9])


def test_prepare_booking_dataframe_keeps_canonical_column_on_alias_clash():
    raw = pd.DataFrame(
        {
            "Arrival Date Year": ["2015"],
            "Month": ["7"],
            "Arrival Date Month": ["July"],
            "Arrival Date Day Of Month": ["1"],
            "Country": ["PRT"],
            "Country Code": ["PT"],
        }
    )
    prepared = prepare_booking_dataframe(raw)
    assert prepared.columns.is_unique
    assert prepared.loc[0, "arrival_date_month"] == "July"
    assert prepared.loc[0, "month"] == "7"
    assert prepared.loc[0, "country"] == "PRT"
    assert prepared.loc[0, "country_code"] == "PT"


def test_prepare_booking_dataframe_suffixes_repeated_headers():
    raw = pd.DataFrame([["PRT", "GBR"]], columns=["Country", "country"])
    prepared = prepare_booking_dataframe(raw)
    assert prepared.columns.is_unique
    assert prepared.loc[0, "country"] == "PRT"
    assert prepared.loc[0, "country_2"] == "GBR"


def test_prepared_day_keys_use_trimmed_text():
    prepared = prepare_booking_dataframe(_sample_raw_frame())
    assert visitors_per_day(prepared)["x"].tolist() == ["2015-July-1", "2015-August-15"]
