from datetime import date

from ads_dashboard.services.google_ads import (
    KEYWORD_RANKING_METRIC,
    GoogleAdsData,
    get_top_keywords,
)


def _row(keyword: str, cost: float, clicks: int = 1, impressions: int = 10, conversions: float = 0.0):
    return GoogleAdsData(
        date=date(2024, 1, 1),
        campaign="CampA",
        keyword=keyword,
        impressions=impressions,
        clicks=clicks,
        cost=cost,
        conversions=conversions,
    )


def test_ranking_metric_is_spend():
    assert KEYWORD_RANKING_METRIC == "cost"


def test_groups_by_keyword_and_sorts_by_spend_desc():
    records = [
        _row("shoes", 20.0, clicks=10, impressions=100, conversions=2),
        _row("boots", 10.0, clicks=5, impressions=50, conversions=1),
        _row("shoes", 40.0, clicks=20, impressions=200, conversions=4),
        _row("hats", 15.0, clicks=3, impressions=30, conversions=0),
    ]
    top = get_top_keywords(records, 10)

    assert [k.keyword for k in top] == ["shoes", "hats", "boots"]
    shoes = top[0]
    assert shoes.cost == 60.0
    assert shoes.clicks == 30
    assert shoes.impressions == 300
    assert shoes.conversions == 6.0
    assert shoes.ctr == 0.1
    assert shoes.cpc == 2.0
    assert shoes.cpa == 10.0
    # zero conversions guard
    assert top[1].cpa == 0.0


def test_ties_resolve_by_keyword_ascending():
    records = [_row("zeta", 5.0), _row("alpha", 5.0), _row("mid", 5.0), _row("big", 9.0)]
    top = get_top_keywords(records, 10)
    assert [k.keyword for k in top] == ["big", "alpha", "mid", "zeta"]


def test_keywords_are_case_sensitive():
    top = get_top_keywords([_row("Shoes", 1.0), _row("shoes", 2.0)], 10)
    assert [k.keyword for k in top] == ["shoes", "Shoes"]


def test_limit_truncates_and_non_positive_limit_is_empty():
    records = [_row(f"kw{i}", float(i)) for i in range(15)]

    assert len(get_top_keywords(records)) == 10
    assert [k.keyword for k in get_top_keywords(records, 3)] == ["kw14", "kw13", "kw12"]
    assert get_top_keywords(records, 0) == []
    assert get_top_keywords(records, -1) == []
    assert get_top_keywords([], 5) == []


def test_result_never_exceeds_limit_and_is_sorted():
    records = [_row(f"kw{i % 7}", float((i * 37) % 11)) for i in range(40)]
    for k in range(1, 9):
        top = get_top_keywords(records, k)
        assert len(top) <= k
        keys = [(-t.cost, t.keyword) for t in top]
        assert keys == sorted(keys)
