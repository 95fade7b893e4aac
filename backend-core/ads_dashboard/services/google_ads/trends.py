"""Per-campaign daily trend series for the Google Ads dashboard."""
from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Sequence

import pandas as pd

from .metrics import add_rate_columns, records_to_frame
from .models import CampaignTrendPoint, GoogleAdsCampaignTrend, GoogleAdsData

TREND_LOOKBACK_DAYS = 30
METRIC_COLS = ["impressions", "clicks", "cost", "conversions"]


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def get_google_ads_campaign_trends(
    records: Sequence[GoogleAdsData],
    anchor: date | datetime,
    lookback_days: int = TREND_LOOKBACK_DAYS,
) -> list[GoogleAdsCampaignTrend]:
    """
    Build one gap-free daily series per campaign, ending on the anchor date.

    Algorithm:
    1. Keep records dated within the `lookback_days` days ending on `anchor`
    2. Sum metrics per (campaign, day)
    3. For each campaign, emit every day from its first record in the window
       through the anchor, zero-filling days without records

    Campaigns without records in the window are omitted. Output is ordered by
    campaign name.
    """
    if lookback_days <= 0 or not records:
        return []

    anchor_day = _as_date(anchor)
    window_start = anchor_day - timedelta(days=lookback_days - 1)

    df = records_to_frame(records)
    df = df[(df["date"] >= window_start) & (df["date"] <= anchor_day)]
    if df.empty:
        return []

    daily = df.groupby(["campaign", "date"], as_index=False, sort=True).agg(
        impressions=("impressions", "sum"),
        clicks=("clicks", "sum"),
        cost=("cost", math.fsum),
        conversions=("conversions", math.fsum),
    )

    trends: list[GoogleAdsCampaignTrend] = []
    for campaign, group in daily.groupby("campaign", sort=True):
        days = pd.date_range(group["date"].min(), anchor_day, freq="D").date
        series = group.set_index("date")[METRIC_COLS].reindex(days, fill_value=0)
        series = add_rate_columns(series)

        points = tuple(
            CampaignTrendPoint(
                date=row.Index,
                impressions=int(row.impressions),
                clicks=int(row.clicks),
                cost=float(row.cost),
                conversions=float(row.conversions),
                ctr=float(row.ctr),
                cpc=float(row.cpc),
                cpa=float(row.cpa),
            )
            for row in series.itertuples()
        )
        trends.append(
            GoogleAdsCampaignTrend(
                campaign=str(campaign),
                points=points,
                total_cost=math.fsum(p.cost for p in points),
                total_conversions=math.fsum(p.conversions for p in points),
            )
        )

    return trends
