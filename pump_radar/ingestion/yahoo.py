"""Yahoo Finance chart API: price, volume and trailing % changes.

Unofficial endpoint, no key required. One request for ~3 months of daily
candles gives both the current quote and the 1w/2w/1m/3m movements.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import httpx

from pump_radar.config import settings
from pump_radar.ingestion.base import PriceProvider
from pump_radar.ingestion.models import PriceSnapshot

logger = logging.getLogger(__name__)

_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

# window attribute -> calendar days back
MOVEMENT_WINDOWS: dict[str, int] = {
    "change_1w": 7,
    "change_2w": 14,
    "change_1m": 30,
    "change_3m": 90,
}

AVG_VOLUME_DAYS = 10


def _pct_change(current: float, past: float | None) -> float | None:
    if not past:
        return None
    return (current - past) / past * 100


def parse_chart(payload: dict, ticker: str) -> PriceSnapshot | None:
    """Build a PriceSnapshot from a v8 chart response, or None if unusable."""
    results = (payload.get("chart") or {}).get("result") or []
    if not results:
        return None
    result = results[0] or {}
    meta = result.get("meta") or {}
    quotes = ((result.get("indicators") or {}).get("quote") or [{}])[0] or {}
    timestamps = result.get("timestamp") or []

    closes = quotes.get("close") or []
    volumes = quotes.get("volume") or []

    candles: list[tuple[datetime, float, float]] = []
    for i, ts in enumerate(timestamps):
        close = closes[i] if i < len(closes) else None
        if close is None:
            continue
        vol = volumes[i] if i < len(volumes) and volumes[i] is not None else 0
        candles.append((datetime.fromtimestamp(ts, tz=timezone.utc), float(close), float(vol)))

    current = meta.get("regularMarketPrice") or (candles[-1][1] if candles else None)
    if not current:
        return None

    previous = meta.get("previousClose")
    if not previous and len(candles) >= 2:
        previous = candles[-2][1]
    previous = previous or meta.get("chartPreviousClose") or 0.0

    volume = meta.get("regularMarketVolume") or (candles[-1][2] if candles else 0.0)

    avg_volume = meta.get("averageDailyVolume10Day")
    if not avg_volume:
        recent = [c[2] for c in candles[-AVG_VOLUME_DAYS:] if c[2] > 0]
        avg_volume = sum(recent) / len(recent) if recent else 0.0

    movements: dict[str, float | None] = {}
    if len(candles) >= 2:
        latest = candles[-1][0]
        history = candles[:-1]
        for attr, days in MOVEMENT_WINDOWS.items():
            target = latest - timedelta(days=days)
            closest = min(history, key=lambda c: abs((c[0] - target).total_seconds()))
            movements[attr] = _pct_change(current, closest[1])

    return PriceSnapshot(
        ticker=ticker,
        current_price=float(current),
        previous_close=float(previous),
        volume=float(volume),
        avg_volume=float(avg_volume),
        market_cap=meta.get("marketCap"),
        change_1d=_pct_change(current, previous),
        **movements,
    )


class YahooPriceProvider(PriceProvider):
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self._client = client
        self._base_url = base_url or settings.yahoo_base_url

    async def fetch_price_snapshot(self, ticker: str) -> PriceSnapshot | None:
        symbol = ticker.upper().strip("$")
        if self._client is not None:
            return await self._fetch(self._client, symbol)
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            return await self._fetch(client, symbol)

    async def _fetch(self, client: httpx.AsyncClient, symbol: str) -> PriceSnapshot | None:
        try:
            resp = await client.get(
                f"{self._base_url}/v8/finance/chart/{symbol}",
                params={"interval": "1d", "range": "3mo"},
                headers={"User-Agent": _USER_AGENT},
            )
            if resp.status_code == 404:
                logger.warning("Yahoo: ticker %s not found", symbol)
                return None
            if resp.status_code == 429:
                logger.warning("Yahoo: rate limited fetching %s", symbol)
                return None
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Yahoo fetch failed for %s: %s", symbol, exc)
            return None

        snapshot = parse_chart(payload if isinstance(payload, dict) else {}, symbol)
        if snapshot is None:
            logger.warning("Yahoo: no usable chart data for %s", symbol)
        else:
            logger.info(
                "Yahoo: %s $%.2f (%+.2f%%)",
                symbol, snapshot.current_price, snapshot.change_1d or 0.0,
            )
        return snapshot
