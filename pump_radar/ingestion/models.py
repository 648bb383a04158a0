from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DailySentimentRecord(BaseModel):
    """One day of pre-aggregated social sentiment (Finnhub shape)."""

    model_config = ConfigDict(frozen=True)

    date: datetime
    mention_count: int = 0
    positive_count: int = 0
    negative_count: int = 0
    score: float = 0.0  # -1 .. 1


class TickerSentiment(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str
    relevance: float = 0.0  # 0 .. 1
    score: float = 0.0  # -1 .. 1


class NewsArticle(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    url: str = ""
    published_at: datetime | None = None
    source: str = ""
    overall_score: float = 0.0
    ticker_sentiment: list[TickerSentiment] = Field(default_factory=list)


class MentionRecord(BaseModel):
    """A piece of user-generated text mentioning a ticker."""

    model_config = ConfigDict(frozen=True)

    text: str
    engagement_weight: float = 0.0  # e.g. upvotes
    source_weight: float = 1.0  # per-community reliability multiplier

    # Display metadata, not used in scoring
    author: str = ""
    community: str = ""
    url: str = ""
    comments: int = 0
    created_at: datetime | None = None


class PriceSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticker: str = ""
    current_price: float = 0.0
    previous_close: float = 0.0
    volume: float = 0.0
    avg_volume: float = 0.0
    market_cap: float | None = None

    # Percent changes over trailing windows
    change_1d: float | None = None
    change_1w: float | None = None
    change_2w: float | None = None
    change_1m: float | None = None
    change_3m: float | None = None

    timestamp: datetime = Field(default_factory=utcnow)
