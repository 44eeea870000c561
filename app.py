"""Streamlit dashboard for hotel booking visitor analytics."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pandas as pd
import streamlit as st

from hotel_bookings import DEFAULT_DATA_PATH, DashboardState, DateRange, load_bookings
from hotel_bookings.data_loader import upload_fingerprint
from hotel_bookings.analytics import (
    build_country_breakdown,
    build_daily_breakdown,
    build_visitor_trend,
    data_coverage,
    default_date_range,
    summary_to_frame,
)
from hotel_bookings.analytics.visuals import (
    build_series_chart,
    build_visitor_trend_chart,
    create_party_size_plot,
)
from hotel_bookings.reporting import export_excel_report, build_pdf_report

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title="Hotel Booking Dashboard", layout="wide")
st.title("🏨 Hotel Booking Dashboard")

_STATE_KEY = "dashboard_state"
_SOURCE_KEY = "dashboard_source"


@st.cache_data(show_spinner=False)
def _load_csv(path: str) -> pd.DataFrame:
    return load_bookings(path)


@st.cache_data(show_spinner=False)
def _load_upload(payload: bytes, name: str) -> pd.DataFrame:
    buffer = io.BytesIO(payload)
    buffer.name = name
    return load_bookings(buffer)


def _download_bytes(data: bytes, *, file_name: str, mime: str, label: str, key: str) -> None:
    st.download_button(
        label,
        data=data,
        file_name=file_name,
        mime=mime,
        use_container_width=True,
        key=key,
    )


def _dashboard_state(source_key: str, loader, *, reload: bool) -> DashboardState:
    """Reuse the session's state unless the source changed or a reload was requested."""
    state: DashboardState | None = st.session_state.get(_STATE_KEY)
    if state is None or reload or st.session_state.get(_SOURCE_KEY) != source_key:
        date_range = state.date_range if state is not None else default_date_range()
        state = DashboardState(source=source_key, date_range=date_range)
        with st.spinner("Loading data..."):
            state.load(loader=lambda _source: loader())
        st.session_state[_STATE_KEY] = state
        st.session_state[_SOURCE_KEY] = source_key
    return state


def main() -> None:
    with st.sidebar:
        st.header("Data source")
        st.caption(f"Default file: `{DEFAULT_DATA_PATH.name}`")
        uploaded = st.file_uploader("Upload bookings CSV", type=["csv"])
        reload = st.button("Reload data", use_container_width=True)

    if reload:
        _load_csv.clear()
        _load_upload.clear()

    if uploaded is not None:
        payload = uploaded.getvalue()
        source_key = f"upload:{upload_fingerprint(payload)}"
        state = _dashboard_state(source_key, lambda: _load_upload(payload, uploaded.name), reload=reload)
    else:
        path = str(Path(DEFAULT_DATA_PATH))
        state = _dashboard_state(f"path:{path}", lambda: _load_csv(path), reload=reload)

    if state.has_error:
        st.error(state.error_message)
        st.stop()

    with st.sidebar:
        st.header("Select Date Range")
        start = st.date_input("Start date", value=state.date_range.start, format="YYYY-MM-DD")
        end = st.date_input(
            "End date",
            value=max(state.date_range.end, start),
            min_value=start,
            format="YYYY-MM-DD",
        )
        coverage = data_coverage(state.records)
        if coverage is not None:
            st.caption(f"Dataset arrivals: {coverage}")

    selected = DateRange(start=start, end=end)
    if selected != state.date_range:
        state.apply_date_range(selected)

    st.markdown("### Summary metrics")
    st.dataframe(summary_to_frame(state.records, state.filtered), use_container_width=True, hide_index=True)

    daily_visitors, country_visitors, adults, children = state.series()

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(build_series_chart(daily_visitors), use_container_width=True)
    with col2:
        st.plotly_chart(build_series_chart(country_visitors), use_container_width=True)

    col3, col4 = st.columns(2)
    with col3:
        st.plotly_chart(build_series_chart(adults), use_container_width=True)
    with col4:
        st.plotly_chart(build_series_chart(children), use_container_width=True)

    st.subheader("Visitor trend")
    trend = build_visitor_trend(daily_visitors.points)
    st.plotly_chart(build_visitor_trend_chart(trend.frame), use_container_width=True)
    if trend.model_summary:
        if trend.slope is not None:
            st.caption(f"OLS slope: {trend.slope:.2f} visitors/day")
        with st.expander("Trend regression details"):
            st.code(trend.model_summary)

    st.subheader("Party size distribution")
    st.pyplot(create_party_size_plot(state.filtered), clear_figure=True)

    st.subheader("Tabular breakdowns")
    tabs = st.tabs(["Countries", "Daily", "Bookings"])
    with tabs[0]:
        st.dataframe(build_country_breakdown(state.filtered), use_container_width=True, hide_index=True)
    with tabs[1]:
        st.dataframe(build_daily_breakdown(state.filtered), use_container_width=True, hide_index=True)
    with tabs[2]:
        st.dataframe(state.filtered.head(500), use_container_width=True)

    st.subheader("Downloads")
    series = [daily_visitors, country_visitors, adults, children]
    excel_bytes = export_excel_report(state.records, state.filtered, series)
    _download_bytes(
        excel_bytes,
        file_name="hotel_booking_analytics.xlsx",
        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        label="📊 Download Excel workbook",
        key="download_excel",
    )

    try:
        pdf_bytes = build_pdf_report(state.records, state.filtered, series)
    except ImportError as exc:
        st.warning(str(exc))
    else:
        _download_bytes(
            pdf_bytes,
            file_name="hotel_booking_analytics.pdf",
            mime="application/pdf",
            label="📄 Download PDF summary",
            key="download_pdf",
        )


if __name__ == "__main__":
    main()
