from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from pump_radar.ingestion.models import utcnow

AggregateLabel = Literal["Very Bullish", "Bullish", "Neutral", "Bearish", "Very Bearish"]


class SentimentSource(str, Enum):
    SOCIAL_AGGREGATE = "social_aggregate"
    NEWS = "news"
    SOCIAL_DIRECT = "social_direct"


# Fixed evaluation / reporting order
SOURCE_ORDER: tuple[SentimentSource, ...] = (
    SentimentSource.SOCIAL_AGGREGATE,
    SentimentSource.NEWS,
    SentimentSource.SOCIAL_DIRECT,
)

SOURCE_NAMES: dict[SentimentSource, str] = {
    SentimentSource.SOCIAL_AGGREGATE: "Finnhub (Reddit + Twitter)",
    SentimentSource.NEWS: "Alpha Vantage (News)",
    SentimentSource.SOCIAL_DIRECT: "Reddit (Weighted)",
}


class SentimentDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: SentimentSource
    score: float = Field(ge=-1.0, le=1.0)
    confidence: float = Field(ge=0.0, le=1.0)
    mention_count: int | None = Field(default=None, ge=0)
    timestamp: datetime = Field(default_factory=utcnow)


class SourceBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float
    count: int  # mentions / articles / posts, depending on source
    confidence: float
    weight: float  # fixed source weight
    effective_weight: float  # weight x confidence, what the average used


class AggregatedSentiment(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: float = 0.0
    overall_label: AggregateLabel = "Neutral"
    confidence: float = 0.0
    sources: dict[SentimentSource, SourceBreakdown] = Field(default_factory=dict)
    total_mentions: int = 0
    sources_used: list[str] = Field(default_factory=list)
    calculated_at: datetime = Field(default_factory=utcnow)

    @property
    def score(self) -> float:
        return self.overall_score
