# tests/unit/ingestion/test_yahoo_provider.py

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from pump_radar.ingestion.yahoo import YahooPriceProvider, parse_chart

BASE = "https://yahoo.test"

DAY = 86_400
START = int(datetime(2025, 1, 1, 21, tzinfo=timezone.utc).timestamp())


def _chart(closes: list[float | None], volumes: list[int | None] | None = None, **meta) -> dict:
    n = len(closes)
    return {
        "chart": {
            "result": [
                {
                    "meta": meta,
                    "timestamp": [START + i * DAY for i in range(n)],
                    "indicators": {"quote": [{"close": closes, "volume": volumes or [1000] * n}]},
                }
            ]
        }
    }


def _provider(handler) -> YahooPriceProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return YahooPriceProvider(client=client, base_url=BASE)


def test_parse_chart_uses_meta_quote():
    closes = [float(i) for i in range(1, 101)]  # 100 daily candles, last close 100
    payload = _chart(
        closes,
        regularMarketPrice=110.0,
        previousClose=100.0,
        regularMarketVolume=5000,
        averageDailyVolume10Day=2500,
        marketCap=150_000_000,
    )
    snap = parse_chart(payload, "GME")

    assert snap.current_price == 110.0
    assert snap.previous_close == 100.0
    assert snap.change_1d == pytest.approx(10.0)
    assert snap.volume == 5000
    assert snap.avg_volume == 2500
    assert snap.market_cap == 150_000_000
    # latest candle is day 99 (close 100); 7 days back is close 93
    assert snap.change_1w == pytest.approx((110 - 93) / 93 * 100)
    assert snap.change_1m == pytest.approx((110 - 70) / 70 * 100)
    assert snap.change_3m == pytest.approx((110 - 10) / 10 * 100)


def test_parse_chart_falls_back_to_candles():
    closes = [10.0, 11.0, None, 12.0]
    volumes = [100, 200, None, 300]
    snap = parse_chart(_chart(closes, volumes), "ABC")

    assert snap.current_price == 12.0
    assert snap.previous_close == 11.0
    assert snap.volume == 300
    assert snap.avg_volume == pytest.approx(200.0)
    assert snap.market_cap is None


def test_parse_chart_single_candle_has_no_movements():
    snap = parse_chart(_chart([5.0], chartPreviousClose=4.0), "ONE")

    assert snap.previous_close == 4.0
    assert snap.change_1d == pytest.approx(25.0)
    assert snap.change_1w is None
    assert snap.change_3m is None


@pytest.mark.parametrize("payload", [{}, {"chart": {"result": []}}, _chart([None, None])])
def test_parse_chart_unusable(payload):
    assert parse_chart(payload, "X") is None


def test_fetch_requests_three_months_of_daily_candles():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_chart([1.0, 1.1], regularMarketPrice=1.2))

    snap = asyncio.run(_provider(handler).fetch_price_snapshot("$sndl"))

    assert snap.ticker == "SNDL"
    assert seen[0].url.path == "/v8/finance/chart/SNDL"
    assert seen[0].url.params["interval"] == "1d"
    assert seen[0].url.params["range"] == "3mo"


@pytest.mark.parametrize("status", [404, 429, 500])
def test_fetch_errors_return_none(status):
    assert asyncio.run(_provider(lambda request: httpx.Response(status)).fetch_price_snapshot("X")) is None


def test_fetch_transport_failure_returns_none():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    assert asyncio.run(_provider(handler).fetch_price_snapshot("X")) is None
