"""Top keyword ranking for the Google Ads dashboard."""
from __future__ import annotations

import math
from typing import Sequence

from .metrics import add_rate_columns, records_to_frame
from .models import GoogleAdsData, KeywordPerformance

# Keywords are ranked by total spend, highest first; ties go to the
# alphabetically smaller keyword.
KEYWORD_RANKING_METRIC = "cost"
DEFAULT_TOP_KEYWORDS = 10


def get_top_keywords(
    records: Sequence[GoogleAdsData],
    limit: int = DEFAULT_TOP_KEYWORDS,
) -> list[KeywordPerformance]:
    """Aggregate records per keyword (case-sensitive) and return the top `limit`."""
    if limit <= 0 or not records:
        return []

    df = records_to_frame(records)
    grouped = df.groupby("keyword", as_index=False, sort=False).agg(
        impressions=("impressions", "sum"),
        clicks=("clicks", "sum"),
        cost=("cost", math.fsum),
        conversions=("conversions", math.fsum),
    )
    grouped = add_rate_columns(grouped)

    ranked = grouped.sort_values(
        [KEYWORD_RANKING_METRIC, "keyword"],
        ascending=[False, True],
        kind="mergesort",
    ).head(limit)

    return [
        KeywordPerformance(
            keyword=str(row.keyword),
            impressions=int(row.impressions),
            clicks=int(row.clicks),
            cost=float(row.cost),
            conversions=float(row.conversions),
            ctr=float(row.ctr),
            cpc=float(row.cpc),
            cpa=float(row.cpa),
        )
        for row in ranked.itertuples(index=False)
    ]
