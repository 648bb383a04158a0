from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SentimentLabel = Literal["positive", "neutral", "negative"]

POSITIVE_THRESHOLD = 0.05
NEGATIVE_THRESHOLD = -0.05


def label_for_score(score: float) -> SentimentLabel:
    if score >= POSITIVE_THRESHOLD:
        return "positive"
    if score <= NEGATIVE_THRESHOLD:
        return "negative"
    return "neutral"


class SentimentBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    positive: float = 0.0
    neutral: float = 1.0
    negative: float = 0.0


class SentimentScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float = 0.0  # compound, -1 .. 1
    label: SentimentLabel = "neutral"
    confidence: float = 0.0  # |score|
    breakdown: SentimentBreakdown = Field(default_factory=SentimentBreakdown)

    @classmethod
    def from_score(cls, score: float, breakdown: SentimentBreakdown) -> "SentimentScore":
        return cls(
            score=score,
            label=label_for_score(score),
            confidence=abs(score),
            breakdown=breakdown,
        )

    @classmethod
    def neutral(cls) -> "SentimentScore":
        return cls()


class LabelDistribution(BaseModel):
    model_config = ConfigDict(frozen=True)

    positive: int = 0
    neutral: int = 0
    negative: int = 0


class BatchSentiment(BaseModel):
    """Unweighted scoring of several texts."""

    model_config = ConfigDict(frozen=True)

    average_score: float = 0.0
    combined: SentimentScore = Field(default_factory=SentimentScore)
    individual: list[SentimentScore] = Field(default_factory=list)
    distribution: LabelDistribution = Field(default_factory=LabelDistribution)
