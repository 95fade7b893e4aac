"""Google Ads dashboard service modules."""

from .models import (
    GoogleAdsData,
    DateRange,
    AvailableDateRange,
    GoogleAdsDashboardMetrics,
    KeywordPerformance,
    CampaignTrendPoint,
    GoogleAdsCampaignTrend,
    ParseReport,
)
from .parser import parse_google_ads_csv, parse_google_ads_csv_report
from .filters import filter_by_date_range, default_date_range, available_date_range
from .metrics import aggregate_google_ads_metrics
from .keywords import get_top_keywords, KEYWORD_RANKING_METRIC
from .trends import get_google_ads_campaign_trends, TREND_LOOKBACK_DAYS
from .fetcher import (
    GoogleAdsCSVFetcher,
    GoogleAdsFetchError,
    GoogleAdsHTTPError,
    GoogleAdsNetworkError,
)
from .dashboard import GoogleAdsDashboard
from .workbook import build_dashboard_workbook

__all__ = [
    "GoogleAdsData",
    "DateRange",
    "AvailableDateRange",
    "GoogleAdsDashboardMetrics",
    "KeywordPerformance",
    "CampaignTrendPoint",
    "GoogleAdsCampaignTrend",
    "ParseReport",
    "parse_google_ads_csv",
    "parse_google_ads_csv_report",
    "filter_by_date_range",
    "default_date_range",
    "available_date_range",
    "aggregate_google_ads_metrics",
    "get_top_keywords",
    "KEYWORD_RANKING_METRIC",
    "get_google_ads_campaign_trends",
    "TREND_LOOKBACK_DAYS",
    "GoogleAdsCSVFetcher",
    "GoogleAdsFetchError",
    "GoogleAdsHTTPError",
    "GoogleAdsNetworkError",
    "GoogleAdsDashboard",
    "build_dashboard_workbook",
]
