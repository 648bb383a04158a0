"""Read contracts for the external data providers."""

from abc import ABC, abstractmethod

from pump_radar.ingestion.models import (
    DailySentimentRecord,
    MentionRecord,
    NewsArticle,
    PriceSnapshot,
)


class PriceProvider(ABC):
    @abstractmethod
    async def fetch_price_snapshot(self, ticker: str) -> PriceSnapshot | None:
        """Current price, volume and trailing % changes, or None if unknown."""
        ...


class DailySentimentFeed(ABC):
    @abstractmethod
    async def fetch_daily_sentiment(self, ticker: str) -> list[DailySentimentRecord]:
        """Daily social sentiment records, most recent first."""
        ...


class NewsFeed(ABC):
    @abstractmethod
    async def fetch_news_sentiment(self, ticker: str, limit: int = 50) -> list[NewsArticle]:
        """Recent news articles with per-ticker sentiment."""
        ...


class MentionSource(ABC):
    @abstractmethod
    async def fetch_mentions(self, ticker: str, limit: int = 50) -> list[MentionRecord]:
        """Recent posts mentioning the ticker."""
        ...
