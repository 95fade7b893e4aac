"""Dashboard session: fetch once, then derive everything from (records, window)."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from .fetcher import GoogleAdsCSVFetcher, GoogleAdsFetchError
from .filters import available_date_range, default_date_range, filter_by_date_range
from .keywords import DEFAULT_TOP_KEYWORDS, get_top_keywords
from .metrics import aggregate_google_ads_metrics
from .models import (
    AvailableDateRange,
    DateRange,
    GoogleAdsCampaignTrend,
    GoogleAdsDashboardMetrics,
    GoogleAdsData,
    KeywordPerformance,
)
from .parser import parse_google_ads_csv_report
from .trends import TREND_LOOKBACK_DAYS, _as_date, get_google_ads_campaign_trends

logger = logging.getLogger(__name__)


class GoogleAdsDashboard:
    """
    One dashboard session.

    Lifecycle:
    - loading: created, fetch not finished, no data, no error
    - ready: `load()` finished, either with records and a default window or
      with an error message

    `load()` runs once per session. Derived values are recomputed when the
    objects they read (`raw_data`, `date_range`) are replaced, and are never
    mutated in place.
    """

    def __init__(
        self,
        csv_url: str,
        fetcher: GoogleAdsCSVFetcher | None = None,
        *,
        columns: Mapping[str, str] | None = None,
        default_window_days: int = 30,
        top_keywords_limit: int = DEFAULT_TOP_KEYWORDS,
        trend_lookback_days: int = TREND_LOOKBACK_DAYS,
        fetch_timeout_s: float = 30.0,
    ) -> None:
        self.csv_url = csv_url
        self.columns = dict(columns or {})
        self.default_window_days = default_window_days
        self.top_keywords_limit = top_keywords_limit
        self.trend_lookback_days = trend_lookback_days
        self._fetcher = fetcher
        self._fetch_timeout_s = fetch_timeout_s

        self.raw_data: list[GoogleAdsData] = []
        self.rows_dropped = 0
        self.loading = True
        self.error: str | None = None
        self.date_range: DateRange | None = None

        self._load_started = False
        self._memo: dict[str, tuple[tuple[Any, ...], Any]] = {}

    async def load(self) -> None:
        if self._load_started:
            raise RuntimeError("Dashboard session already loaded")
        self._load_started = True

        self.loading = True
        self.error = None
        owns_fetcher = self._fetcher is None
        fetcher = self._fetcher or GoogleAdsCSVFetcher(timeout=self._fetch_timeout_s)

        try:
            text = await fetcher.fetch_csv(self.csv_url)
            report = parse_google_ads_csv_report(text, self.columns)
            self.raw_data = report.records
            self.rows_dropped = report.rows_dropped
            self.date_range = default_date_range(self.raw_data, self.default_window_days)
            self.error = None
            logger.info(
                "Loaded %d Google Ads records (%d dropped)",
                len(self.raw_data),
                self.rows_dropped,
            )
        except GoogleAdsFetchError as exc:
            logger.warning("Google Ads CSV fetch failed: %s", exc)
            self.error = str(exc)
        except ValueError as exc:
            # malformed CSV structure (e.g. unterminated quotes) rather than bad rows
            logger.warning("Google Ads CSV could not be read: %s", exc)
            self.error = f"Failed to parse data: {exc}"
        finally:
            self.loading = False
            if owns_fetcher:
                await fetcher.aclose()

    def set_date_range(self, date_range: DateRange | None) -> None:
        self.date_range = date_range

    def reset_date_range(self) -> None:
        self.date_range = default_date_range(self.raw_data, self.default_window_days)

    def trend_lookback_for(self, date_range: DateRange) -> int:
        """Trend length in days: the configured lookback, stretched to cover the whole window."""
        window_days = (_as_date(date_range.end) - _as_date(date_range.start)).days + 1
        return max(self.trend_lookback_days, window_days)

    def _memoized(self, name: str, inputs: tuple[Any, ...], compute: Callable[[], Any]) -> Any:
        cached = self._memo.get(name)
        if cached is not None and len(cached[0]) == len(inputs):
            if all(a is b for a, b in zip(cached[0], inputs)):
                return cached[1]
        value = compute()
        self._memo[name] = (inputs, value)
        return value

    @property
    def filtered_data(self) -> list[GoogleAdsData]:
        date_range = self.date_range
        if date_range is None:
            return []
        return self._memoized(
            "filtered_data",
            (self.raw_data, date_range),
            lambda: filter_by_date_range(self.raw_data, date_range.start, date_range.end),
        )

    @property
    def metrics(self) -> GoogleAdsDashboardMetrics:
        filtered = self.filtered_data
        return self._memoized("metrics", (filtered,), lambda: aggregate_google_ads_metrics(filtered))

    @property
    def top_keywords(self) -> list[KeywordPerformance]:
        filtered = self.filtered_data
        return self._memoized(
            "top_keywords",
            (filtered,),
            lambda: get_top_keywords(filtered, self.top_keywords_limit),
        )

    @property
    def campaign_trends(self) -> list[GoogleAdsCampaignTrend]:
        date_range = self.date_range
        if date_range is None:
            return []
        filtered = self.filtered_data
        return self._memoized(
            "campaign_trends",
            (filtered, date_range),
            lambda: get_google_ads_campaign_trends(
                filtered, date_range.end, self.trend_lookback_for(date_range)
            ),
        )

    @property
    def available_date_range(self) -> AvailableDateRange | None:
        return self._memoized(
            "available_date_range",
            (self.raw_data,),
            lambda: available_date_range(self.raw_data),
        )

    def view(self, date_range: DateRange | None) -> dict[str, Any]:
        """Derived values for an arbitrary window, leaving the session window untouched."""
        if date_range is None:
            filtered: list[GoogleAdsData] = []
            trends: list[GoogleAdsCampaignTrend] = []
        else:
            filtered = filter_by_date_range(self.raw_data, date_range.start, date_range.end)
            trends = get_google_ads_campaign_trends(
                filtered, date_range.end, self.trend_lookback_for(date_range)
            )
        return {
            "date_range": date_range,
            "filtered_data": filtered,
            "metrics": aggregate_google_ads_metrics(filtered),
            "top_keywords": get_top_keywords(filtered, self.top_keywords_limit),
            "campaign_trends": trends,
        }

    def current_view(self) -> dict[str, Any]:
        return {
            "date_range": self.date_range,
            "filtered_data": self.filtered_data,
            "metrics": self.metrics,
            "top_keywords": self.top_keywords,
            "campaign_trends": self.campaign_trends,
        }

    def snapshot(self, date_range: DateRange | None = None) -> dict[str, Any]:
        """
        JSON-ready state for the presentation layer.

        Passing `date_range` renders that window instead of the session's one.
        """
        derived = self.current_view() if date_range is None else self.view(date_range)
        window = derived["date_range"]
        available = self.available_date_range
        return {
            "loading": self.loading,
            "error": self.error,
            "rows_total": len(self.raw_data),
            "rows_dropped": self.rows_dropped,
            "date_range": window.to_dict() if window else None,
            "available_date_range": available.to_dict() if available else None,
            "raw_data": [r.to_dict() for r in self.raw_data],
            "filtered_data": [r.to_dict() for r in derived["filtered_data"]],
            "metrics": derived["metrics"].to_dict(),
            "top_keywords": [k.to_dict() for k in derived["top_keywords"]],
            "campaign_trends": [t.to_dict() for t in derived["campaign_trends"]],
        }
