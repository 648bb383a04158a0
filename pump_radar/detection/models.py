from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PumpPhase(str, Enum):
    EARLY = "early"
    MID = "mid"
    LATE = "late"
    POST = "post"
    NONE = "none"


class TradeSignal(str, Enum):
    GREEN = "green"  # consider buying
    YELLOW = "yellow"  # watch
    RED = "red"  # avoid / exit


class SentimentTrend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class MentionTrend(str, Enum):
    RISING = "rising"
    STABLE = "stable"
    DECLINING = "declining"


class PumpMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    sentiment_score: float
    sentiment_trend: SentimentTrend
    mention_volume: int
    mention_trend: MentionTrend
    price_momentum: float  # percent
    volume_ratio: float  # current volume / average volume


class PumpDetectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: PumpPhase
    signal: TradeSignal
    confidence: float
    reasoning: list[str] = Field(default_factory=list)
    metrics: PumpMetrics
