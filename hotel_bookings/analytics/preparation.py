"""Data preparation logic for the hotel bookings table."""

from __future__ import annotations

import math
import re
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

_NON_ALNUM = re.compile(r"[^0-9a-zA-Z]+")
_MULTI_UNDERSCORE = re.compile(r"_+")

YEAR_COLUMN = "arrival_date_year"
MONTH_COLUMN = "arrival_date_month"
DAY_COLUMN = "arrival_date_day_of_month"
COUNTRY_COLUMN = "country"
COUNT_COLUMNS = ("adults", "children", "babies")

REQUIRED_COLUMNS = (YEAR_COLUMN, MONTH_COLUMN, DAY_COLUMN, COUNTRY_COLUMN, *COUNT_COLUMNS)

COLUMN_ALIASES = {
    "year": YEAR_COLUMN,
    "arrival_year": YEAR_COLUMN,
    "month": MONTH_COLUMN,
    "arrival_month": MONTH_COLUMN,
    "day": DAY_COLUMN,
    "day_of_month": DAY_COLUMN,
    "arrival_day": DAY_COLUMN,
    "arrival_date_day": DAY_COLUMN,
    "country_code": COUNTRY_COLUMN,
    "adult": "adults",
    "child": "children",
    "baby": "babies",
}

# English names only; ambient locale never takes part in month parsing.
MONTH_NUMBERS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}


def _canonicalise(column: str) -> str:
    """Convert column headers to snake_case strings."""
    clean = _NON_ALNUM.sub("_", str(column).strip().lower())
    clean = _MULTI_UNDERSCORE.sub("_", clean).strip("_")
    return clean


def _build_rename_map(columns: Iterable[str]) -> dict[str, str]:
    """
    Map raw headers onto unique canonical names.

    Headers already spelled canonically claim their name first; an alias whose
    target is taken keeps its own snake_case name, and any remaining clash gets
    a numeric suffix (``country_2``).
    """
    columns = list(columns)
    canonical = {column: _canonicalise(column) for column in columns}
    # direct names before aliases, otherwise first-seen order
    ordered = sorted(columns, key=lambda column: canonical[column] in COLUMN_ALIASES)

    taken: set[str] = set()
    assigned: dict[str, str] = {}
    for column in ordered:
        name = canonical[column]
        target = COLUMN_ALIASES.get(name, name)
        if target in taken:
            target = name
        target = _unique_label(target or "column", taken)
        taken.add(target)
        assigned[column] = target
    return {column: assigned[column] for column in columns}


def _unique_label(label: str, taken: set[str]) -> str:
    if label not in taken:
        return label
    count = 2
    while f"{label}_{count}" in taken:
        count += 1
    return f"{label}_{count}"


def canonical_columns(columns: Iterable[str]) -> list[str]:
    """Return the names ``prepare_booking_dataframe`` would give ``columns``."""
    return list(_build_rename_map(columns).values())


def as_booking_frame(records: pd.DataFrame | Iterable[Mapping[str, object]]) -> pd.DataFrame:
    """Accept a DataFrame as-is or build one from an iterable of row mappings."""
    if isinstance(records, pd.DataFrame):
        return records
    return pd.DataFrame.from_records(list(records))


def text_column(frame: pd.DataFrame, column: str) -> pd.Series:
    """Return ``column`` as text with missing values (or a missing column) as ``""``."""
    if column not in frame.columns:
        return pd.Series([""] * len(frame), index=frame.index, dtype=object)
    return frame[column].map(_as_text)


def _as_text(value: object) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value)


def _whole_number(value: object) -> int | None:
    text = _as_text(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def parse_month(value: object) -> int | None:
    """Map a month name, abbreviation or number (1-12) to its number; ``None`` when unknown."""
    text = _as_text(value).strip().lower()
    if text in MONTH_NUMBERS:
        return MONTH_NUMBERS[text]
    number = _whole_number(text)
    if number is not None and 1 <= number <= 12:
        return number
    return None


def compose_booking_date(year: object, month: object, day: object) -> pd.Timestamp:
    """Combine the three arrival fields into a timestamp, or ``NaT`` if they do not form a date."""
    year_number = _whole_number(year)
    month_number = parse_month(month)
    day_number = _whole_number(day)
    if year_number is None or month_number is None or day_number is None:
        return pd.NaT
    # keep within datetime64[ns] bounds
    if not pd.Timestamp.min.year < year_number < pd.Timestamp.max.year:
        return pd.NaT
    try:
        return pd.Timestamp(year=year_number, month=month_number, day=day_number)
    except (ValueError, OverflowError):
        return pd.NaT


def parse_day_key(key: object) -> pd.Timestamp:
    """Inverse of the ``"year-month-day"`` series key; ``NaT`` when it does not split into a date."""
    parts = _as_text(key).split("-")
    if len(parts) != 3:
        return pd.NaT
    return compose_booking_date(*parts)


def compose_arrival_dates(frame: pd.DataFrame) -> pd.Series:
    """Composed arrival date for every row of ``frame`` (``NaT`` where unparseable)."""
    dates = [
        compose_booking_date(year, month, day)
        for year, month, day in zip(
            text_column(frame, YEAR_COLUMN),
            text_column(frame, MONTH_COLUMN),
            text_column(frame, DAY_COLUMN),
        )
    ]
    return pd.Series(dates, index=frame.index, dtype="datetime64[ns]")


def coerce_counts(frame: pd.DataFrame, column: str) -> pd.Series:
    """Numeric view of a count column; anything unconvertible or non-finite counts as zero."""
    if column not in frame.columns:
        return pd.Series(0.0, index=frame.index)
    stripped = text_column(frame, column).str.strip()
    return finite_or_zero(pd.to_numeric(stripped, errors="coerce"))


def finite_or_zero(values: pd.Series) -> pd.Series:
    """Float copy of ``values`` with NaN and infinities replaced by zero."""
    return values.astype(float).replace([np.inf, -np.inf], np.nan).fillna(0.0)


def prepare_booking_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a normalised copy of the bookings table ready for analytics.

    Headers are converted to snake_case and known aliases mapped onto the
    canonical ``arrival_date_*`` names without ever producing duplicate
    columns. Required columns missing from the input are added as empty text.

    Surrounding whitespace is stripped from text cells, so day keys built from
    a prepared frame use the trimmed text (``" July "`` keys as
    ``"2015-July-1"``). Values are otherwise left untouched: numeric coercion
    and date composition happen at aggregation time.
    """
    working = df.rename(columns=_build_rename_map(df.columns)).copy()
    for column in working.columns:
        if working[column].dtype == object:
            working[column] = working[column].map(
                lambda value: value.strip() if isinstance(value, str) else value
            )

    for column in REQUIRED_COLUMNS:
        if column not in working.columns:
            working[column] = ""

    return working
