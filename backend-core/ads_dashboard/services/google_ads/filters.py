"""Date window utilities for the Google Ads dashboard."""
from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Sequence

from .models import AvailableDateRange, DateRange, GoogleAdsData


def _as_datetime(value: date | datetime) -> datetime:
    """Dates become midnight; datetimes are kept as given (naive)."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def filter_by_date_range(
    records: Sequence[GoogleAdsData],
    start: date | datetime,
    end: date | datetime,
) -> list[GoogleAdsData]:
    """
    Keep records whose date falls inside [start, end], inclusive.

    Each record is compared as midnight of its date, so callers wanting whole
    days should pass `start` at 00:00 and `end` at 23:59:59.999999 (or plain
    dates). Input order is preserved.
    """
    lower = _as_datetime(start)
    upper = _as_datetime(end)
    if lower > upper:
        return []
    return [r for r in records if lower <= _as_datetime(r.date) <= upper]


def available_date_range(records: Sequence[GoogleAdsData]) -> AvailableDateRange | None:
    if not records:
        return None
    dates = [r.date for r in records]
    return AvailableDateRange(min=min(dates), max=max(dates))


def default_date_range(records: Sequence[GoogleAdsData], days: int = 30) -> DateRange | None:
    """
    Window covering the last `days` calendar days of data.

    Ends at 23:59:59.999999 on the latest record date and starts at 00:00,
    `days - 1` days earlier.
    """
    available = available_date_range(records)
    if available is None:
        return None
    days = max(days, 1)
    start = datetime.combine(available.max - timedelta(days=days - 1), time.min)
    end = datetime.combine(available.max, time.max)
    return DateRange(start=start, end=end)
