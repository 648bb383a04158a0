# tests/unit/research/test_analysis_report.py

import json

from pump_radar.aggregation.aggregator import SentimentAggregator
from pump_radar.aggregation.models import SentimentDataPoint, SentimentSource
from pump_radar.detection.classifier import PumpPhaseClassifier
from pump_radar.ingestion.models import PriceSnapshot
from pump_radar.research.market_cap import low_capital_suitability
from pump_radar.research.report import AnalysisReport, MarketCapProfile


def test_empty_report_serialises():
    data = AnalysisReport(ticker="XYZ").to_dict()

    assert data["ticker"] == "XYZ"
    assert data["price"] is None
    assert data["market_cap"] is None
    assert data["detection"] is None
    assert data["sentiment"]["overall_label"] == "Neutral"
    assert data["buzz"]["total_posts"] == 0
    json.dumps(data)


def test_full_report_is_json_ready():
    price = PriceSnapshot(ticker="GME", current_price=3.0, volume=200_000, avg_volume=100_000, change_1d=4.0)
    sentiment = SentimentAggregator().aggregate([
        SentimentDataPoint(source=SentimentSource.NEWS, score=0.3, confidence=0.8, mention_count=4),
    ])
    report = AnalysisReport(
        ticker="GME",
        price=price,
        market_cap=MarketCapProfile(
            classification="micro",
            formatted="$120.00M",
            is_penny_stock=True,
            risk_level="High Risk - Micro Cap (Penny Stock)",
            suitability=low_capital_suitability(3.0, 120_000_000, 200_000),
        ),
        sentiment=sentiment,
        detection=PumpPhaseClassifier().classify(sentiment, price, sentiment.total_mentions),
    )
    data = report.to_dict()

    assert data["price"]["current_price"] == 3.0
    assert data["market_cap"]["low_capital"]["suitable"] is True
    assert data["sentiment"]["sources"]["news"]["count"] == 4
    assert data["detection"]["phase"] in {"early", "mid", "late", "post", "none"}
    assert isinstance(data["detection"]["reasoning"], list)
    json.dumps(data)
