"""Finnhub social sentiment: daily Reddit + Twitter aggregates.

Free tier: 60 calls/minute. Key from https://finnhub.io/register
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from pump_radar.config import settings
from pump_radar.ingestion.base import DailySentimentFeed
from pump_radar.ingestion.models import DailySentimentRecord

logger = logging.getLogger(__name__)


def _parse_at_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00").replace(" ", "T"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_social_sentiment(payload: dict) -> list[DailySentimentRecord]:
    """Parse a /stock/social-sentiment body into records, most recent first.

    Older responses carry a single ``data`` list; newer ones split it into
    ``reddit`` and ``twitter``. Both shapes are accepted.
    """
    if payload.get("data"):
        raw_rows = payload["data"]
    else:
        raw_rows = (payload.get("reddit") or []) + (payload.get("twitter") or [])

    records: list[DailySentimentRecord] = []
    for row in raw_rows:
        at = _parse_at_time(row.get("atTime"))
        if at is None:
            continue
        records.append(
            DailySentimentRecord(
                date=at,
                mention_count=int(row.get("mention", 0) or 0),
                positive_count=int(row.get("positiveMention", 0) or 0),
                negative_count=int(row.get("negativeMention", 0) or 0),
                score=float(row.get("score", 0.0) or 0.0),
            )
        )

    records.sort(key=lambda r: r.date, reverse=True)
    return records


class FinnhubSentimentFeed(DailySentimentFeed):
    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self._api_key = settings.finnhub_api_key if api_key is None else api_key
        self._client = client
        self._base_url = base_url or settings.finnhub_base_url
        if not self._api_key:
            logger.warning("Finnhub API key not configured, social aggregate sentiment disabled")

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def fetch_daily_sentiment(self, ticker: str) -> list[DailySentimentRecord]:
        if not self.is_configured():
            return []

        symbol = ticker.upper().strip("$")
        if self._client is not None:
            return await self._fetch(self._client, symbol)
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            return await self._fetch(client, symbol)

    async def _fetch(self, client: httpx.AsyncClient, symbol: str) -> list[DailySentimentRecord]:
        try:
            resp = await client.get(
                f"{self._base_url}/stock/social-sentiment",
                params={"symbol": symbol, "token": self._api_key},
                headers={"X-Finnhub-Token": self._api_key},
            )
            if resp.status_code == 429:
                logger.warning("Finnhub rate limit exceeded (60/min)")
                return []
            if resp.status_code in (401, 403):
                logger.error("Finnhub API key invalid or unauthorized")
                return []
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Finnhub fetch failed for %s: %s", symbol, exc)
            return []

        records = parse_social_sentiment(payload if isinstance(payload, dict) else {})
        if records:
            logger.info("Finnhub: %d days of social sentiment for %s", len(records), symbol)
        else:
            logger.info("Finnhub: no social sentiment for %s", symbol)
        return records
