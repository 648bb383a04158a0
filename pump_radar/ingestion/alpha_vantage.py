"""Alpha Vantage NEWS_SENTIMENT: news articles with per-ticker sentiment.

Free tier: 25 calls/day, 5/minute.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import httpx

from pump_radar.config import settings
from pump_radar.ingestion.base import NewsFeed
from pump_radar.ingestion.models import NewsArticle, TickerSentiment

logger = logging.getLogger(__name__)

MAX_LIMIT = 1000


# strptime lets %M/%S match one digit, so pick the format by exact length
_TIME_FORMATS = {
    15: "%Y%m%dT%H%M%S",
    13: "%Y%m%dT%H%M",
}


def parse_time_published(value: str | None) -> datetime | None:
    """Parse the ``20251024T103000`` format (seconds optional)."""
    if not value:
        return None
    fmt = _TIME_FORMATS.get(len(value))
    if fmt is None:
        return None
    try:
        return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
    except ValueError:
        return None


def _to_float(value, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_news_feed(payload: dict) -> list[NewsArticle]:
    articles: list[NewsArticle] = []
    for item in payload.get("feed") or []:
        ticker_sentiment = [
            TickerSentiment(
                ticker=str(ts.get("ticker", "")),
                relevance=_to_float(ts.get("relevance_score")),
                score=_to_float(ts.get("ticker_sentiment_score")),
            )
            for ts in item.get("ticker_sentiment") or []
            if ts.get("ticker")
        ]
        articles.append(
            NewsArticle(
                title=item.get("title", ""),
                url=item.get("url", ""),
                published_at=parse_time_published(item.get("time_published")),
                source=item.get("source", ""),
                overall_score=_to_float(item.get("overall_sentiment_score")),
                ticker_sentiment=ticker_sentiment,
            )
        )
    return articles


class AlphaVantageNewsFeed(NewsFeed):
    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self._api_key = settings.alpha_vantage_api_key if api_key is None else api_key
        self._client = client
        self._base_url = base_url or settings.alpha_vantage_base_url
        if not self._api_key:
            logger.warning("Alpha Vantage API key not configured, news sentiment disabled")

    def is_configured(self) -> bool:
        return bool(self._api_key)

    async def fetch_news_sentiment(self, ticker: str, limit: int = 50) -> list[NewsArticle]:
        if not self.is_configured():
            return []

        symbol = ticker.upper().strip("$")
        if self._client is not None:
            return await self._fetch(self._client, symbol, limit)
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            return await self._fetch(client, symbol, limit)

    async def _fetch(self, client: httpx.AsyncClient, symbol: str, limit: int) -> list[NewsArticle]:
        try:
            resp = await client.get(
                self._base_url,
                params={
                    "function": "NEWS_SENTIMENT",
                    "tickers": symbol,
                    "limit": min(limit, MAX_LIMIT),
                    "sort": "LATEST",
                    "apikey": self._api_key,
                },
            )
            if resp.status_code == 429:
                logger.warning("Alpha Vantage rate limit exceeded")
                return []
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Alpha Vantage fetch failed for %s: %s", symbol, exc)
            return []

        if not isinstance(payload, dict):
            return []
        # Quota errors come back as 200 with a Note/Information field
        note = payload.get("Note") or payload.get("Information")
        if note and not payload.get("feed"):
            logger.warning("Alpha Vantage API limit: %s", note)
            return []

        articles = parse_news_feed(payload)
        logger.info("Alpha Vantage: %d news articles for %s", len(articles), symbol)
        return articles
