"""Utilities for loading the hotel bookings CSV."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import IO, Mapping

import pandas as pd

from .analytics.preparation import REQUIRED_COLUMNS, canonical_columns

logger = logging.getLogger(__name__)

DEFAULT_DATA_NAME = "hotel_bookings_1000.csv"
DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / DEFAULT_DATA_NAME


class BookingDataError(RuntimeError):
    """Raised when the bookings file cannot be read or holds no usable rows."""


def load_bookings(
    source: str | Path | IO[bytes] | None = None,
    **read_csv_kwargs: Mapping[str, object],
) -> pd.DataFrame:
    """
    Read the bookings CSV into a DataFrame of text columns.

    Parameters
    ----------
    source:
        Filesystem path or binary buffer (e.g. a Streamlit upload). Defaults to the
        sample file bundled with the repository.
    read_csv_kwargs:
        Extra keyword arguments forwarded to ``pandas.read_csv``.

    Returns
    -------
    pandas.DataFrame
        Every cell is a string; empty cells stay ``""``.

    Raises
    ------
    BookingDataError
        If the file is missing, cannot be decoded or parsed, has no rows, or lacks
        one of ``REQUIRED_COLUMNS`` after header canonicalisation.
    """
    target = source if source is not None else DEFAULT_DATA_PATH
    if isinstance(target, (str, Path)):
        target = Path(target)
        if not target.exists():
            raise BookingDataError(f"Bookings file not found: {target}")
    label = _source_label(target)

    try:
        frame = pd.read_csv(
            target,
            dtype=str,
            keep_default_na=False,
            encoding=read_csv_kwargs.pop("encoding", "utf-8"),
            **read_csv_kwargs,
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise BookingDataError(f"Could not read bookings from {label}: {exc}") from exc

    if frame.empty:
        raise BookingDataError(f"No booking rows found in {label}")

    available = set(canonical_columns(frame.columns))
    missing = [column for column in REQUIRED_COLUMNS if column not in available]
    if missing:
        raise BookingDataError(f"Bookings in {label} are missing required columns: {missing}")

    logger.info("Loaded %d booking rows from %s", len(frame), label)
    return frame


def _source_label(source: object) -> str:
    if isinstance(source, Path):
        return str(source)
    return str(getattr(source, "name", None) or "uploaded buffer")


def upload_fingerprint(payload: bytes) -> str:
    """Content digest identifying an uploaded CSV, independent of its file name."""
    return hashlib.sha256(payload).hexdigest()
