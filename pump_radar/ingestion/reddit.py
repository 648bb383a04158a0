"""Reddit: ticker mentions across weighted stock subreddits.

Uses the public JSON search API (no auth). Penny-stock communities carry a
higher weight so their posts count for more in the weighted sentiment.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from pump_radar.config import settings
from pump_radar.ingestion.base import MentionSource
from pump_radar.ingestion.models import MentionRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Subreddit:
    name: str
    weight: float
    category: str  # "penny" or "general"


SUBREDDITS: tuple[Subreddit, ...] = (
    # Penny-stock focused
    Subreddit("pennystocks", 3.0, "penny"),
    Subreddit("RobinHoodPennyStocks", 2.5, "penny"),
    Subreddit("Shortsqueeze", 2.5, "penny"),
    Subreddit("smallstreetbets", 2.0, "penny"),
    # High-volume retail
    Subreddit("wallstreetbets", 2.0, "general"),
    Subreddit("WallStreetbetsELITE", 1.5, "general"),
    # General trading
    Subreddit("stocks", 1.0, "general"),
    Subreddit("investing", 1.0, "general"),
    Subreddit("StockMarket", 1.0, "general"),
    Subreddit("options", 1.0, "general"),
    Subreddit("Daytrading", 1.0, "general"),
    # Swing / momentum
    Subreddit("swingtrading", 1.5, "general"),
    Subreddit("Trading", 1.0, "general"),
)


def parse_post(data: dict, subreddit: Subreddit, base_url: str) -> MentionRecord | None:
    if not data:
        return None
    title = (data.get("title") or "").strip()
    body = (data.get("selftext") or "").strip()
    if not title and not body:
        return None

    created = data.get("created_utc")
    permalink = data.get("permalink") or ""
    return MentionRecord(
        text=f"{title} {body}".strip(),
        engagement_weight=float(max(data.get("ups", 0) or 0, 0)),
        source_weight=subreddit.weight,
        author=data.get("author") or "[deleted]",
        community=data.get("subreddit") or subreddit.name,
        url=f"{base_url}{permalink}" if permalink else "",
        comments=int(data.get("num_comments", 0) or 0),
        created_at=datetime.fromtimestamp(created, tz=timezone.utc) if created else None,
    )


class RedditMentionSource(MentionSource):
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        subreddits: tuple[Subreddit, ...] = SUBREDDITS,
        base_url: str | None = None,
    ) -> None:
        self._client = client
        self._subreddits = subreddits
        self._base_url = base_url or settings.reddit_base_url

    async def fetch_mentions(self, ticker: str, limit: int = 50) -> list[MentionRecord]:
        symbol = ticker.upper().strip("$")
        if self._client is not None:
            return await self._fetch_all(self._client, symbol, limit)
        async with httpx.AsyncClient(
            timeout=settings.http_timeout_seconds, follow_redirects=True
        ) as client:
            return await self._fetch_all(client, symbol, limit)

    async def _fetch_all(
        self, client: httpx.AsyncClient, symbol: str, limit: int
    ) -> list[MentionRecord]:
        if not self._subreddits or limit <= 0:
            return []

        per_sub = max(1, math.ceil(limit / len(self._subreddits)))
        posts: list[MentionRecord] = []
        for sub in self._subreddits:
            posts.extend(await self._search(client, sub, symbol, per_sub))

        # Strongest weighted engagement first
        posts.sort(key=lambda p: p.engagement_weight * p.source_weight, reverse=True)
        results = posts[:limit]
        logger.info("Reddit: %d posts mentioning %s", len(results), symbol)
        return results

    async def _search(
        self, client: httpx.AsyncClient, sub: Subreddit, symbol: str, limit: int
    ) -> list[MentionRecord]:
        try:
            resp = await client.get(
                f"{self._base_url}/r/{sub.name}/search.json",
                params={
                    "q": f"${symbol} OR {symbol}",
                    "restrict_sr": "on",
                    "sort": "new",
                    "limit": limit,
                    "t": "week",
                    "raw_json": 1,
                },
                headers={"User-Agent": settings.reddit_user_agent},
            )
            if resp.status_code in (403, 429):
                logger.debug("Reddit %d for r/%s", resp.status_code, sub.name)
                return []
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.debug("Reddit search r/%s failed: %s", sub.name, exc)
            return []

        if not isinstance(data, dict):
            return []
        children = (data.get("data") or {}).get("children") or []
        results: list[MentionRecord] = []
        for child in children:
            post = parse_post(child.get("data") or {}, sub, self._base_url)
            if post is not None:
                results.append(post)
        return results
