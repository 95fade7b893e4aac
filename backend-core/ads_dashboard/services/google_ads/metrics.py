"""Summary metrics for a set of Google Ads records."""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import pandas as pd

from .models import GoogleAdsDashboardMetrics, GoogleAdsData


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is not positive."""
    return (numerator / denominator) if denominator > 0 else 0.0


def aggregate_google_ads_metrics(records: Sequence[GoogleAdsData]) -> GoogleAdsDashboardMetrics:
    """
    Sum impressions, clicks, cost and conversions and derive CPA, CTR and CPC.

    Float sums use math.fsum so the result does not depend on record order.
    """
    if not records:
        return GoogleAdsDashboardMetrics()

    impressions = sum(r.impressions for r in records)
    clicks = sum(r.clicks for r in records)
    spend = math.fsum(r.cost for r in records)
    conversions = math.fsum(r.conversions for r in records)

    return GoogleAdsDashboardMetrics(
        total_spend=spend,
        total_conversions=conversions,
        total_impressions=impressions,
        total_clicks=clicks,
        avg_cpa=safe_ratio(spend, conversions),
        ctr=safe_ratio(clicks, impressions),
        cpc=safe_ratio(spend, clicks),
    )


FRAME_COLUMNS = ["date", "campaign", "keyword", "impressions", "clicks", "cost", "conversions"]


def records_to_frame(records: Sequence[GoogleAdsData]) -> pd.DataFrame:
    """Tabular view of records for group-by work. Dates stay as datetime.date."""
    return pd.DataFrame.from_records(
        [
            (r.date, r.campaign, r.keyword, r.impressions, r.clicks, r.cost, r.conversions)
            for r in records
        ],
        columns=FRAME_COLUMNS,
    )


def add_rate_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Add CTR, CPC and CPA columns, zero where the denominator is zero."""
    df["ctr"] = (df["clicks"] / df["impressions"]).replace([np.inf, -np.inf], 0).fillna(0)
    df["cpc"] = (df["cost"] / df["clicks"]).replace([np.inf, -np.inf], 0).fillna(0)
    df["cpa"] = (df["cost"] / df["conversions"]).replace([np.inf, -np.inf], 0).fillna(0)
    return df
