# tests/unit/delivery/test_web_routes.py

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pump_radar.aggregation.models import AggregatedSentiment
from pump_radar.delivery.web.app import create_app
from pump_radar.ingestion.models import PriceSnapshot
from pump_radar.research.report import AnalysisReport


class FakePipeline:
    """Returns canned results; tickers in `known` have price data."""

    def __init__(self, known: set[str]) -> None:
        self.known = known
        self.analyze_calls: list[tuple] = []
        self.batches: list[list[str]] = []

    async def price(self, ticker: str):
        symbol = ticker.upper().strip("$")
        if symbol not in self.known:
            return None
        return PriceSnapshot(ticker=symbol, current_price=2.5, previous_close=2.0, change_1d=25.0)

    async def sentiment(self, ticker: str):
        return AggregatedSentiment(overall_score=0.3, overall_label="Bullish", total_mentions=12)

    async def analyze(self, ticker, previous_mention_count=None, previous_sentiment=None):
        self.analyze_calls.append((ticker, previous_mention_count, previous_sentiment))
        symbol = ticker.upper().strip("$")
        return AnalysisReport(ticker=symbol, price=await self.price(symbol))

    async def batch(self, tickers):
        self.batches.append(list(tickers))
        reports = [await self.analyze(t) for t in tickers]
        return [r for r in reports if r.has_price]


@pytest.fixture
def pipeline() -> FakePipeline:
    return FakePipeline({"GME", "AMC"})


@pytest.fixture
def client(pipeline) -> TestClient:
    return TestClient(create_app(pipeline))


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_analyze_known_ticker(client, pipeline):
    resp = client.get("/api/stocks/gme/analyze", params={"previous_mentions": 40, "previous_sentiment": 0.1})

    assert resp.status_code == 200
    body = resp.json()
    assert body["ticker"] == "GME"
    assert body["price"]["current_price"] == 2.5
    assert pipeline.analyze_calls == [("gme", 40, 0.1)]


def test_analyze_unknown_ticker_is_404(client):
    resp = client.get("/api/stocks/NOPE/analyze")

    assert resp.status_code == 404
    assert "NOPE" in resp.json()["error"]


def test_analyze_rejects_out_of_range_previous_sentiment(client):
    resp = client.get("/api/stocks/GME/analyze", params={"previous_sentiment": 3})
    assert resp.status_code == 422


def test_sentiment(client):
    resp = client.get("/api/stocks/$amc/sentiment")

    assert resp.status_code == 200
    body = resp.json()
    assert body["ticker"] == "AMC"
    assert body["overall_label"] == "Bullish"
    assert body["total_mentions"] == 12


def test_price(client):
    assert client.get("/api/stocks/AMC/price").json()["change_1d"] == 25.0
    assert client.get("/api/stocks/ZZZ/price").status_code == 404


def test_batch_analyze(client, pipeline):
    resp = client.post("/api/stocks/batch-analyze", json={"tickers": ["GME", "NOPE", "AMC"]})

    assert resp.status_code == 200
    body = resp.json()
    assert body["requested"] == 3
    assert body["analyzed"] == 2
    assert [r["ticker"] for r in body["results"]] == ["GME", "AMC"]


def test_batch_accepts_bare_list(client):
    resp = client.post("/api/stocks/batch-analyze", json=["GME"])
    assert resp.status_code == 200
    assert resp.json()["analyzed"] == 1


@pytest.mark.parametrize(
    "payload",
    [
        {"tickers": []},
        {"tickers": ["", "  "]},
        {"tickers": "GME"},
        {},
        [],
    ],
)
def test_batch_rejects_empty_or_invalid(client, payload):
    resp = client.post("/api/stocks/batch-analyze", json=payload)
    assert resp.status_code == 400


def test_batch_rejects_invalid_json(client):
    resp = client.post(
        "/api/stocks/batch-analyze",
        content=b"{nope",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400


def test_batch_rejects_oversized_request(client):
    resp = client.post("/api/stocks/batch-analyze", json={"tickers": [f"T{i}" for i in range(21)]})
    assert resp.status_code == 400
