"""Parser for the published Google Ads sheet export (CSV)."""
from __future__ import annotations

import io
import logging
import re
from datetime import date
from typing import Iterable, Mapping

import pandas as pd

from .models import GoogleAdsData, ParseReport

logger = logging.getLogger(__name__)

FIELDS = ["date", "campaign", "keyword", "impressions", "clicks", "cost", "conversions"]
INTEGER_FIELDS = ["impressions", "clicks"]
DECIMAL_FIELDS = ["cost", "conversions"]

# Header names as exported by the source spreadsheet. Overridable per deployment
# through Settings.csv_columns.
DEFAULT_HEADERS = {
    "date": "Date",
    "campaign": "Campaign",
    "keyword": "Keyword",
    "impressions": "Impressions",
    "clicks": "Clicks",
    "cost": "Cost",
    "conversions": "Conversions",
}

HEADER_ALIASES = {
    "date": ["day", "time", "datetime"],
    "campaign": ["campaign name", "campaignname"],
    "keyword": ["search keyword", "keyword text", "search term"],
    "impressions": ["impression", "impr.", "impr"],
    "clicks": ["click"],
    "cost": ["spend", "cost (usd)", "amount spent"],
    "conversions": ["conversion", "conv.", "conv"],
}


def _normalize_header(value: object) -> str:
    return re.sub(r"\s+", " ", str(value).strip().lower())


CURRENCY_RE = re.compile(r"[$€£¥₹₩₽¢]")
NUMBER_RE = r"-?(?:\d+\.?\d*|\.\d+)"


def clean_numeric(col: pd.Series) -> pd.Series:
    """
    Convert currency/numeric strings to floats.

    Only formatting is removed: currency symbols, thousands separators,
    whitespace and `%`. Anything else left over (letters, exponents) makes the
    cell NaN.
    """
    s = col.astype(str).str.strip()
    s = s.str.replace(CURRENCY_RE, "", regex=True)
    s = s.str.replace(r"[,%\s]", "", regex=True)
    # (100) -> -100, rejected later as negative
    s = s.str.replace(r"^\((.*)\)$", r"-\1", regex=True)
    s = s.where(s.str.fullmatch(NUMBER_RE), None)
    return pd.to_numeric(s, errors="coerce")


def _parse_date_cell(value: object) -> date | None:
    parsed = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(parsed):
        return None
    # an explicit UTC offset keeps the calendar day as written
    return parsed.date()


def parse_dates(col: pd.Series) -> pd.Series:
    """
    Parse sheet date cells to calendar dates, one cell at a time.

    Unparseable cells become None; offsets in one cell never affect another.
    """
    return col.map(_parse_date_cell)


def resolve_columns(
    headers: Iterable[object],
    columns: Mapping[str, str] | None = None,
) -> tuple[dict[str, str], list[str]]:
    """
    Map each record field to a header present in the export.

    Returns:
        Tuple of (field -> actual header, list of fields that could not be found)
    """
    expected = {**DEFAULT_HEADERS, **(columns or {})}
    by_norm: dict[str, object] = {}
    for header in headers:
        by_norm.setdefault(_normalize_header(header), header)

    mapping: dict[str, str] = {}
    for field in FIELDS:
        for candidate in [expected[field], DEFAULT_HEADERS[field], *HEADER_ALIASES[field]]:
            hit = by_norm.get(_normalize_header(candidate))
            if hit is not None:
                mapping[field] = hit
                break

    missing = [f for f in FIELDS if f not in mapping]
    return mapping, missing


def _load_dataframe(text: str) -> tuple[pd.DataFrame, int]:
    """Read the CSV as strings. Returns the frame and the number of lines with too many fields."""
    bad_lines: list[list[str]] = []

    def skip_bad_line(fields: list[str]) -> None:
        bad_lines.append(fields)
        return None

    df = pd.read_csv(
        io.StringIO(text),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        on_bad_lines=skip_bad_line,
    )
    return df, len(bad_lines)


def parse_google_ads_csv_report(
    text: str | None,
    columns: Mapping[str, str] | None = None,
) -> ParseReport:
    """
    Parse CSV text into records and report how many data rows were dropped.

    Rules:
    - Numeric cells lose currency symbols, thousands separators, spaces and `%`
    - Lines with more fields than the header are dropped and counted
    - A row with an unparseable date, an unparseable numeric cell or a negative
      number is dropped; it never raises
    - Impressions and clicks are rounded to whole numbers
    - Row order is preserved
    """
    if not text or not text.strip():
        return ParseReport()

    df, bad_lines = _load_dataframe(text.lstrip("\ufeff"))
    rows_total = len(df) + bad_lines

    mapping, missing = resolve_columns(df.columns, columns)
    if missing:
        seen = [str(x) for x in df.columns.tolist()]
        logger.warning("Google Ads CSV missing columns %s. Found columns: %s", missing, seen[:15])
        return ParseReport(rows_total=rows_total, rows_dropped=rows_total, missing_columns=missing)

    if df.empty:
        return ParseReport(rows_total=rows_total, rows_dropped=rows_total)

    work = pd.DataFrame({field: df[header] for field, header in mapping.items()})
    work["date"] = parse_dates(work["date"])
    for field in INTEGER_FIELDS + DECIMAL_FIELDS:
        work[field] = clean_numeric(work[field])
    for field in ("campaign", "keyword"):
        work[field] = work[field].fillna("").astype(str).str.strip()

    numeric = work[INTEGER_FIELDS + DECIMAL_FIELDS]
    valid = work["date"].notna() & numeric.notna().all(axis=1) & (numeric >= 0).all(axis=1)
    work = work[valid]

    records = [
        GoogleAdsData(
            date=row.date,
            campaign=row.campaign,
            keyword=row.keyword,
            impressions=int(round(row.impressions)),
            clicks=int(round(row.clicks)),
            cost=float(row.cost),
            conversions=float(row.conversions),
        )
        for row in work.itertuples(index=False)
    ]

    rows_dropped = rows_total - len(records)
    if rows_dropped:
        logger.warning("Dropped %d of %d Google Ads CSV rows as malformed", rows_dropped, rows_total)

    return ParseReport(records=records, rows_total=rows_total, rows_dropped=rows_dropped)


def parse_google_ads_csv(
    text: str | None,
    columns: Mapping[str, str] | None = None,
) -> list[GoogleAdsData]:
    """Parse CSV text into records, silently dropping malformed rows."""
    return parse_google_ads_csv_report(text, columns).records
