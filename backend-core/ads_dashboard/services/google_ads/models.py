"""Record and derived-value types for the Google Ads dashboard."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, NamedTuple


@dataclass(frozen=True)
class GoogleAdsData:
    """One parsed row of the Google Ads sheet export."""

    date: date
    campaign: str
    keyword: str
    impressions: int
    clicks: int
    cost: float
    conversions: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "campaign": self.campaign,
            "keyword": self.keyword,
            "impressions": self.impressions,
            "clicks": self.clicks,
            "cost": self.cost,
            "conversions": self.conversions,
        }


class DateRange(NamedTuple):
    """Inclusive filter window. Bounds are dates or naive datetimes."""
    start: date | datetime
    end: date | datetime

    def to_dict(self) -> dict[str, str]:
        return {"from": self.start.isoformat(), "to": self.end.isoformat()}


class AvailableDateRange(NamedTuple):
    min: date
    max: date

    def to_dict(self) -> dict[str, str]:
        return {"min": self.min.isoformat(), "max": self.max.isoformat()}


@dataclass(frozen=True)
class GoogleAdsDashboardMetrics:
    total_spend: float = 0.0
    total_conversions: float = 0.0
    total_impressions: int = 0
    total_clicks: int = 0
    avg_cpa: float = 0.0
    ctr: float = 0.0
    cpc: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "total_spend": self.total_spend,
            "total_conversions": self.total_conversions,
            "total_impressions": self.total_impressions,
            "total_clicks": self.total_clicks,
            "avg_cpa": self.avg_cpa,
            "ctr": self.ctr,
            "cpc": self.cpc,
        }


@dataclass(frozen=True)
class KeywordPerformance:
    keyword: str
    impressions: int
    clicks: int
    cost: float
    conversions: float
    ctr: float
    cpc: float
    cpa: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "keyword": self.keyword,
            "impressions": self.impressions,
            "clicks": self.clicks,
            "cost": self.cost,
            "conversions": self.conversions,
            "ctr": self.ctr,
            "cpc": self.cpc,
            "cpa": self.cpa,
        }


@dataclass(frozen=True)
class CampaignTrendPoint:
    date: date
    impressions: int
    clicks: int
    cost: float
    conversions: float
    ctr: float
    cpc: float
    cpa: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "impressions": self.impressions,
            "clicks": self.clicks,
            "cost": self.cost,
            "conversions": self.conversions,
            "ctr": self.ctr,
            "cpc": self.cpc,
            "cpa": self.cpa,
        }


@dataclass(frozen=True)
class GoogleAdsCampaignTrend:
    campaign: str
    points: tuple[CampaignTrendPoint, ...]
    total_cost: float
    total_conversions: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "campaign": self.campaign,
            "total_cost": self.total_cost,
            "total_conversions": self.total_conversions,
            "points": [p.to_dict() for p in self.points],
        }


@dataclass(frozen=True)
class ParseReport:
    """Outcome of a CSV parse, including how many data rows were dropped."""

    records: list[GoogleAdsData] = field(default_factory=list)
    rows_total: int = 0
    rows_dropped: int = 0
    missing_columns: list[str] = field(default_factory=list)
