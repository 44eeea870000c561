"""Plotly and Matplotlib visualisations for the hotel bookings dashboard."""

from __future__ import annotations

import numpy as np
import pandas as pd
import plotly.express as px
import seaborn as sns
from matplotlib import pyplot as plt

from .aggregation import ChartSeries, visitor_count
from .preparation import parse_day_key

sns.set_theme(style="whitegrid")
_BLUE = "#2563eb"
_GREEN = "#059669"
_MAX_PARTY_BINS = 50
_SERIES_COLORS = {
    "Visitors": _BLUE,
    "Adults": _GREEN,
    "Children": "#f59e0b",
}


def _empty_figure(message: str):
    fig = px.scatter()
    fig.add_annotation(text=message, showarrow=False)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    fig.update_layout(height=320, margin=dict(l=10, r=10, t=40, b=10))
    return fig


def build_series_chart(series: ChartSeries):
    """Line chart over arrival dates, or bar chart over categories, for one dashboard series."""
    if series.points.empty:
        return _empty_figure("No bookings in the selected date range.")

    color = _SERIES_COLORS.get(series.name, _BLUE)
    if series.axis == "datetime":
        # points stay in first-seen order upstream; the line is drawn chronologically
        data = series.points.assign(date=lambda frame: pd.to_datetime(frame["x"].map(parse_day_key)))
        data = data.dropna(subset=["date"]).sort_values("date", kind="stable")
        fig = px.line(
            data,
            x="date",
            y="y",
            markers=True,
            labels={"date": "Arrival date", "y": series.name},
            title=series.title,
        )
        fig.update_xaxes(type="date")
    else:
        data = series.points.assign(label=lambda frame: frame["x"].replace("", "Unknown"))
        fig = px.bar(
            data,
            x="label",
            y="y",
            labels={"label": "Country", "y": series.name},
            title=series.title,
        )
        fig.update_xaxes(type="category", categoryorder="array", categoryarray=data["label"].tolist())

    fig.update_traces(marker_color=color)
    if series.chart_type == "line":
        fig.update_traces(line_color=color)
    fig.update_layout(height=400)
    return fig


def build_visitor_trend_chart(trend_frame: pd.DataFrame):
    """Plot daily visitors with an optional OLS trend line."""
    if trend_frame.empty or "visitors" not in trend_frame.columns:
        return _empty_figure("Insufficient data for trend analysis.")

    fig = px.line(
        trend_frame,
        x="date",
        y="visitors",
        title="Daily visitor trend",
        labels={"date": "Arrival date", "visitors": "Visitors"},
    )
    fig.data[0].name = "Visitors"
    fig.data[0].showlegend = True
    if "trend" in trend_frame.columns and trend_frame["trend"].notna().any():
        fig.add_trace(px.line(trend_frame, x="date", y="trend").data[0])
        fig.data[-1].name = "Trend (OLS)"
        fig.data[-1].showlegend = True
        fig.data[-1].line.color = "#FF6B6B"
    fig.update_layout(height=420, legend_title_text="")
    return fig


def create_party_size_plot(df: pd.DataFrame):
    """Return a Matplotlib histogram of visitors per booking."""
    fig, ax = plt.subplots(figsize=(6, 4))
    if df.empty:
        ax.text(0.5, 0.5, "No bookings in the selected date range.", ha="center", va="center")
        ax.axis("off")
        return fig

    party_sizes = visitor_count(df)
    party_sizes = party_sizes[np.isfinite(party_sizes)].clip(lower=0)
    if party_sizes.empty:
        ax.text(0.5, 0.5, "No party sizes available.", ha="center", va="center")
        ax.axis("off")
        return fig

    largest = float(party_sizes.max())
    bins = max(1, min(int(largest) + 1, _MAX_PARTY_BINS))
    sns.histplot(x=party_sizes, bins=bins, binrange=(0, max(largest, 1.0)), color=_BLUE, ax=ax)
    ax.set_title("Visitors per booking")
    ax.set_xlabel("Party size")
    ax.set_ylabel("Bookings")
    fig.tight_layout()
    return fig
