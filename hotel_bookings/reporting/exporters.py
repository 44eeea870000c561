"""Export helpers for the hotel bookings dashboard."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Sequence

import pandas as pd

from ..analytics.aggregation import ChartSeries
from ..analytics.breakdowns import build_country_breakdown, build_daily_breakdown
from ..analytics.summaries import summary_to_frame

try:  # Optional dependency for PDF output
    from reportlab.lib import colors
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.styles import getSampleStyleSheet
    from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

    _REPORTLAB_AVAILABLE = True
except ImportError:  # pragma: no cover - optional dependency
    _REPORTLAB_AVAILABLE = False


def series_sheet_name(series: ChartSeries) -> str:
    """Excel-safe sheet name, e.g. ``"Visitors by day"`` / ``"Visitors by country"``."""
    suffix = "day" if series.axis == "datetime" else "country"
    return f"{series.name} by {suffix}"[:31]


def export_excel_report(
    records: pd.DataFrame,
    filtered: pd.DataFrame,
    series: Sequence[ChartSeries],
    *,
    path: str | Path | None = None,
) -> bytes | Path:
    """
    Build an Excel workbook with the selected bookings, headline metrics and chart series.

    If ``path`` is provided, the workbook is written to disk and the path is returned.
    Otherwise the bytes object is returned for download workflows.
    """
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:  # type: ignore[arg-type]
        filtered.to_excel(writer, sheet_name="Bookings", index=False)
        summary_to_frame(records, filtered).to_excel(writer, sheet_name="Summary", index=False)

        countries = build_country_breakdown(filtered)
        if not countries.empty:
            countries.to_excel(writer, sheet_name="Countries", index=False)

        daily = build_daily_breakdown(filtered)
        if not daily.empty:
            daily.to_excel(writer, sheet_name="Daily", index=False)

        for item in series:
            if item.points.empty:
                continue
            item.points.rename(columns={"x": "Key", "y": item.name}).to_excel(
                writer, sheet_name=series_sheet_name(item), index=False
            )

    buffer.seek(0)
    if path is None:
        return buffer.getvalue()

    target = Path(path)
    target.write_bytes(buffer.read())
    return target


def build_pdf_report(
    records: pd.DataFrame,
    filtered: pd.DataFrame,
    series: Sequence[ChartSeries],
    *,
    title: str = "Hotel Booking Dashboard",
) -> bytes:
    """Create a lightweight PDF report summarising the selected range."""
    if not _REPORTLAB_AVAILABLE:  # pragma: no cover - optional dependency
        raise ImportError("ReportLab is required for PDF export. Install it via `pip install reportlab`.")

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=36,
        rightMargin=36,
        topMargin=42,
        bottomMargin=36,
    )
    styles = getSampleStyleSheet()
    story = [Paragraph(title, styles["Title"]), Spacer(1, 12)]

    story.extend(
        [
            Paragraph("Headline Metrics", styles["Heading2"]),
            _table(summary_to_frame(records, filtered)),
            Spacer(1, 12),
        ]
    )

    countries = build_country_breakdown(filtered, top_n=15)
    if not countries.empty:
        story.extend([Paragraph("Top Countries", styles["Heading2"]), _table(countries), Spacer(1, 12)])

    for item in series:
        if item.axis != "datetime" or item.points.empty:
            continue
        points = item.points.rename(columns={"x": "Arrival", "y": item.name})
        story.extend([Paragraph(item.title, styles["Heading2"]), _table(points), Spacer(1, 12)])

    doc.build(story)
    buffer.seek(0)
    return buffer.getvalue()


def table_cells(df: pd.DataFrame) -> list[list[str]]:
    """Header row plus stringified cells; whole-number floats print without ``.0``."""
    rows = [[_cell_text(value) for value in row] for row in df.itertuples(index=False)]
    return [[str(column) for column in df.columns], *rows]


def numeric_column_positions(df: pd.DataFrame) -> list[int]:
    return [position for position, column in enumerate(df.columns) if pd.api.types.is_numeric_dtype(df[column])]


def _cell_text(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return f"{int(value):,}"
    if isinstance(value, float):
        return f"{value:,.2f}"
    if isinstance(value, int):
        return f"{value:,}"
    return str(value)


def _table(df: pd.DataFrame) -> Table:
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#12355b")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f1f5fb")]),
        ("LINEBELOW", (0, 0), (-1, 0), 0.75, colors.HexColor("#12355b")),
        ("LINEBELOW", (0, 1), (-1, -1), 0.25, colors.lightgrey),
    ]
    for position in numeric_column_positions(df):
        style.append(("ALIGN", (position, 0), (position, -1), "RIGHT"))

    tbl = Table(table_cells(df), hAlign="LEFT", repeatRows=1)
    tbl.setStyle(TableStyle(style))
    return tbl
