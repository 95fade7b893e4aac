"""Excel export of a dashboard window."""
from __future__ import annotations

import gc
import os
import tempfile
from typing import Any, Sequence

import xlsxwriter

from .models import (
    DateRange,
    GoogleAdsCampaignTrend,
    GoogleAdsDashboardMetrics,
    KeywordPerformance,
)

SUMMARY_ROWS = [
    ("Total Spend", "total_spend", "currency"),
    ("Total Conversions", "total_conversions", "decimal"),
    ("Total Impressions", "total_impressions", "number"),
    ("Total Clicks", "total_clicks", "number"),
    ("Avg. CPA", "avg_cpa", "currency"),
    ("CTR", "ctr", "percent"),
    ("CPC", "cpc", "currency"),
]

# (header, attribute, format kind)
METRIC_COLUMNS = [
    ("Impressions", "impressions", "number"),
    ("Clicks", "clicks", "number"),
    ("Cost", "cost", "currency"),
    ("Conversions", "conversions", "decimal"),
    ("CTR", "ctr", "percent"),
    ("CPC", "cpc", "currency"),
    ("CPA", "cpa", "currency"),
]


def build_dashboard_workbook(
    date_range: DateRange | None,
    metrics: GoogleAdsDashboardMetrics,
    top_keywords: Sequence[KeywordPerformance],
    campaign_trends: Sequence[GoogleAdsCampaignTrend],
    currency_symbol: str = "$",
) -> str:
    """
    Build an Excel workbook for one dashboard window.

    Layout:
    - Summary: window bounds and headline metrics
    - Top Keywords: one row per ranked keyword
    - Campaign Trends: one row per campaign and day

    Returns:
        Path to generated Excel file
    """
    tmp = tempfile.NamedTemporaryFile(delete=False, suffix=".xlsx")
    tmp_path = tmp.name
    tmp.close()

    try:
        workbook = xlsxwriter.Workbook(tmp_path, {"nan_inf_to_errors": True})

        header_fmt = workbook.add_format({
            "bold": True,
            "align": "center",
            "valign": "vcenter",
            "bg_color": "#3a3838",
            "font_color": "white",
            "border": 1,
        })
        formats = {
            "number": workbook.add_format({"num_format": "#,##0", "align": "center"}),
            "decimal": workbook.add_format({"num_format": "#,##0.00", "align": "center"}),
            "currency": workbook.add_format(
                {"num_format": f"{currency_symbol}#,##0.00", "align": "center"}
            ),
            "percent": workbook.add_format({"num_format": "0.00%", "align": "center"}),
        }
        label_fmt = workbook.add_format({"bold": True, "align": "left"})

        _write_summary(workbook.add_worksheet("Summary"), date_range, metrics, header_fmt, label_fmt, formats)
        _write_keywords(workbook.add_worksheet("Top Keywords"), top_keywords, header_fmt, formats)
        _write_trends(workbook.add_worksheet("Campaign Trends"), campaign_trends, header_fmt, formats)

        workbook.close()
        gc.collect()

        return tmp_path

    except Exception:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def _write_summary(
    ws: Any,
    date_range: DateRange | None,
    metrics: GoogleAdsDashboardMetrics,
    header_fmt: Any,
    label_fmt: Any,
    formats: dict[str, Any],
):
    ws.write_string(0, 0, "Metric", header_fmt)
    ws.write_string(0, 1, "Value", header_fmt)
    ws.set_column(0, 0, 22)
    ws.set_column(1, 1, 28)

    ws.write_string(1, 0, "From", label_fmt)
    ws.write_string(2, 0, "To", label_fmt)
    ws.write_string(1, 1, date_range.start.isoformat() if date_range else "")
    ws.write_string(2, 1, date_range.end.isoformat() if date_range else "")

    row = 3
    for label, attr, kind in SUMMARY_ROWS:
        ws.write_string(row, 0, label, label_fmt)
        ws.write_number(row, 1, float(getattr(metrics, attr)), formats[kind])
        row += 1

    ws.freeze_panes(1, 0)


def _write_keywords(
    ws: Any,
    keywords: Sequence[KeywordPerformance],
    header_fmt: Any,
    formats: dict[str, Any],
):
    ws.write_string(0, 0, "Keyword", header_fmt)
    ws.set_column(0, 0, 40)
    for col_idx, (header, _, _) in enumerate(METRIC_COLUMNS, start=1):
        ws.write_string(0, col_idx, header, header_fmt)
        ws.set_column(col_idx, col_idx, 12)

    for row_idx, kw in enumerate(keywords, start=1):
        ws.write_string(row_idx, 0, kw.keyword)
        for col_idx, (_, attr, kind) in enumerate(METRIC_COLUMNS, start=1):
            ws.write_number(row_idx, col_idx, float(getattr(kw, attr)), formats[kind])

    ws.freeze_panes(1, 1)


def _write_trends(
    ws: Any,
    trends: Sequence[GoogleAdsCampaignTrend],
    header_fmt: Any,
    formats: dict[str, Any],
):
    ws.write_string(0, 0, "Campaign", header_fmt)
    ws.write_string(0, 1, "Date", header_fmt)
    ws.set_column(0, 0, 40)
    ws.set_column(1, 1, 12)
    for col_idx, (header, _, _) in enumerate(METRIC_COLUMNS, start=2):
        ws.write_string(0, col_idx, header, header_fmt)
        ws.set_column(col_idx, col_idx, 12)

    row_idx = 1
    for trend in trends:
        for point in trend.points:
            ws.write_string(row_idx, 0, trend.campaign)
            ws.write_string(row_idx, 1, point.date.isoformat())
            for col_idx, (_, attr, kind) in enumerate(METRIC_COLUMNS, start=2):
                ws.write_number(row_idx, col_idx, float(getattr(point, attr)), formats[kind])
            row_idx += 1

    ws.freeze_panes(1, 2)
