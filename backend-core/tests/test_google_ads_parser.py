"""Tests for the Google Ads CSV parser."""
from datetime import date

from ads_dashboard.services.google_ads import parse_google_ads_csv, parse_google_ads_csv_report
from ads_dashboard.services.google_ads.parser import clean_numeric, resolve_columns

import pandas as pd

SAMPLE_CSV = """Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions
2024-01-01,CampA,shoes,100,10,$20.00,2
2024-01-02,CampA,boots,50,5,$10.00,1
2024-02-01,CampB,shoes,200,20,$40.00,4
"""


def test_parses_sample_rows_in_order():
    records = parse_google_ads_csv(SAMPLE_CSV)

    assert [r.date for r in records] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 2, 1)]
    assert [r.keyword for r in records] == ["shoes", "boots", "shoes"]
    first = records[0]
    assert first.campaign == "CampA"
    assert first.impressions == 100
    assert first.clicks == 10
    assert first.cost == 20.0
    assert first.conversions == 2.0
    assert isinstance(first.impressions, int)


def test_strips_currency_and_thousands_separators():
    csv_data = """Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions
2024-03-01,CampA,shoes,"1,234",56,"$1,020.50",3.5
2024-03-02,CampA,shoes,10,1,€ 2.25,0
"""
    records = parse_google_ads_csv(csv_data)

    assert len(records) == 2
    assert records[0].impressions == 1234
    assert records[0].cost == 1020.5
    assert records[0].conversions == 3.5
    assert records[1].cost == 2.25


def test_malformed_rows_are_dropped_and_counted():
    csv_data = """Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions
2024-01-01,CampA,shoes,100,10,$20.00,2
not-a-date,CampA,shoes,100,10,$20.00,2
2024-01-03,CampA,hats,,5,$1.00,0
2024-01-04,CampA,hats,10,abc,$1.00,0
2024-01-05,CampA,hats,10,1,($5.00),0
2024-01-06,CampB,boots,40,4,$8.00,1
"""
    report = parse_google_ads_csv_report(csv_data)

    assert [r.date for r in report.records] == [date(2024, 1, 1), date(2024, 1, 6)]
    assert report.rows_total == 6
    assert report.rows_dropped == 4
    assert report.missing_columns == []


def test_numbers_with_stray_text_are_dropped():
    csv_data = """Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions
2024-01-01,CampA,shoes,1e3,10,$20.00,2
2024-01-02,CampA,boots,50,5,about 5 dollars,1
2024-01-03,CampA,hats,1-2,5,$5.00,1
2024-01-04,CampA,socks,"1,200",12,€3.50,0
"""
    report = parse_google_ads_csv_report(csv_data)

    assert [r.keyword for r in report.records] == ["socks"]
    assert report.records[0].impressions == 1200
    assert report.records[0].cost == 3.5
    assert report.rows_total == 4
    assert report.rows_dropped == 3


def test_lines_with_extra_fields_are_counted_as_dropped():
    csv_data = """Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions
2024-01-01,CampA,shoes,100,10,$20.00,2
2024-01-02,CampA,boots,50,5,$10.00,1,extra
"""
    report = parse_google_ads_csv_report(csv_data)

    assert [r.keyword for r in report.records] == ["shoes"]
    assert report.rows_total == 2
    assert report.rows_dropped == 1


def test_dates_with_utc_offsets_keep_their_calendar_day():
    csv_data = """Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions
2024-01-01,CampA,shoes,100,10,$20.00,2
2024-01-02T10:00:00+05:00,CampA,boots,50,5,$10.00,1
2024-01-03T23:30:00-08:00,CampA,hats,10,1,$1.00,0
"""
    report = parse_google_ads_csv_report(csv_data)

    assert [r.date for r in report.records] == [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)]
    assert report.rows_dropped == 0


def test_empty_input_yields_empty_sequence():
    assert parse_google_ads_csv("") == []
    assert parse_google_ads_csv("   \n  ") == []
    assert parse_google_ads_csv(None) == []


def test_header_only_yields_empty_sequence():
    report = parse_google_ads_csv_report("Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions\n")
    assert report.records == []
    assert report.rows_dropped == 0


def test_alternative_date_formats():
    csv_data = """Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions
1/15/2024,CampA,shoes,10,1,1.00,0
"Jan 16, 2024",CampA,shoes,10,1,1.00,0
2024-01-17 13:45:00,CampA,shoes,10,1,1.00,0
"""
    records = parse_google_ads_csv(csv_data)
    assert [r.date for r in records] == [date(2024, 1, 15), date(2024, 1, 16), date(2024, 1, 17)]


def test_header_aliases_and_whitespace_are_tolerated():
    csv_data = "Day , Campaign name,Search keyword,Impr.,Clicks,Spend\xa0,Conv.\n2024-01-01,CampA,shoes,10,1,$2.00,1\n"
    records = parse_google_ads_csv(csv_data)

    assert len(records) == 1
    assert records[0].keyword == "shoes"
    assert records[0].cost == 2.0


def test_configured_header_names_override_defaults():
    csv_data = """Datum,Kampagne,Suchbegriff,Impressionen,Klicks,Kosten,Konversionen
2024-01-01,CampA,schuhe,10,1,2.00,1
"""
    columns = {
        "date": "Datum",
        "campaign": "Kampagne",
        "keyword": "Suchbegriff",
        "impressions": "Impressionen",
        "clicks": "Klicks",
        "cost": "Kosten",
        "conversions": "Konversionen",
    }
    records = parse_google_ads_csv(csv_data, columns)

    assert len(records) == 1
    assert records[0].keyword == "schuhe"


def test_missing_columns_drop_every_row_without_raising():
    csv_data = """Date,Campaign,Impressions,Clicks,Cost,Conversions
2024-01-01,CampA,10,1,2.00,1
"""
    report = parse_google_ads_csv_report(csv_data)

    assert report.records == []
    assert report.missing_columns == ["keyword"]
    assert report.rows_dropped == 1


def test_keyword_and_campaign_are_kept_case_sensitive():
    csv_data = """Date,Campaign,Keyword,Impressions,Clicks,Cost,Conversions
2024-01-01,  CampA ,Shoes,10,1,2.00,1
2024-01-01,CampA,,10,1,2.00,1
"""
    records = parse_google_ads_csv(csv_data)

    assert records[0].campaign == "CampA"
    assert records[0].keyword == "Shoes"
    assert records[1].keyword == ""


def test_byte_order_mark_is_ignored():
    records = parse_google_ads_csv("\ufeff" + SAMPLE_CSV)
    assert len(records) == 3


def test_clean_numeric_leaves_garbage_as_nan():
    result = clean_numeric(pd.Series(["$1,000.00", "n/a", "", "12%"]))
    assert result.iloc[0] == 1000.0
    assert pd.isna(result.iloc[1])
    assert pd.isna(result.iloc[2])
    assert result.iloc[3] == 12.0

    strict = clean_numeric(pd.Series(["1e3", "about 5 dollars", "12 clicks", "(7.5)", "£ 1 234"]))
    assert strict.isna().tolist() == [True, True, True, False, False]
    assert strict.iloc[3] == -7.5
    assert strict.iloc[4] == 1234.0


def test_resolve_columns_reports_missing_fields():
    mapping, missing = resolve_columns(["Date", "Campaign", "Clicks"])
    assert mapping["date"] == "Date"
    assert missing == ["keyword", "impressions", "cost", "conversions"]
