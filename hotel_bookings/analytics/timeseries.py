"""Trend estimation over the daily visitor series."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd
import statsmodels.api as sm

from .preparation import finite_or_zero, parse_day_key

_TREND_COLUMNS = ["date", "visitors", "trend"]


@dataclass(slots=True)
class TrendResult:
    frame: pd.DataFrame
    model_summary: str | None
    slope: float | None


def build_visitor_trend(series_frame: pd.DataFrame) -> TrendResult:
    """
    Order a day-keyed ``x``/``y`` series chronologically and fit a linear trend via OLS.

    The regressor is days since the first arrival, so gaps between dates are
    respected and ``slope`` reads as visitors per day.
    """
    if series_frame.empty or {"x", "y"} - set(series_frame.columns):
        return TrendResult(frame=pd.DataFrame(columns=_TREND_COLUMNS), model_summary=None, slope=None)

    frame = pd.DataFrame(
        {
            "date": pd.to_datetime(series_frame["x"].map(parse_day_key)),
            "visitors": finite_or_zero(pd.to_numeric(series_frame["y"], errors="coerce")),
        }
    ).dropna(subset=["date"])
    if frame.empty:
        return TrendResult(frame=pd.DataFrame(columns=_TREND_COLUMNS), model_summary=None, slope=None)

    # differently spelled keys can land on the same day
    frame = frame.groupby("date", as_index=False)["visitors"].sum().sort_values("date").reset_index(drop=True)

    model_summary = None
    slope = None
    frame["trend"] = np.nan
    if len(frame) >= 3:
        elapsed = (frame["date"] - frame["date"].iloc[0]).dt.days.astype(float)
        X = sm.add_constant(elapsed.to_numpy())
        model = sm.OLS(frame["visitors"].to_numpy(), X).fit()
        frame["trend"] = model.predict(X)
        model_summary = model.summary().as_text()
        slope = float(model.params[1]) if len(model.params) > 1 else None

    return TrendResult(frame=frame, model_summary=model_summary, slope=slope)
