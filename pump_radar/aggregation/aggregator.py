"""Multi-source sentiment aggregation.

Each source carries a fixed reliability weight which is scaled by the data
point's own confidence:

- social_aggregate 35%  (pre-aggregated Reddit + Twitter feed)
- news             30%  (professional news sentiment)
- social_direct    35%  (direct, community-weighted subreddit scoring)
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping

from pump_radar.aggregation.models import (
    SOURCE_NAMES,
    SOURCE_ORDER,
    AggregatedSentiment,
    AggregateLabel,
    SentimentDataPoint,
    SentimentSource,
    SourceBreakdown,
)

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_WEIGHTS: Mapping[SentimentSource, float] = {
    SentimentSource.SOCIAL_AGGREGATE: 0.35,
    SentimentSource.NEWS: 0.30,
    SentimentSource.SOCIAL_DIRECT: 0.35,
}

CONFIDENCE_WEIGHT = 0.7
DIVERSITY_WEIGHT = 0.3
FULL_DIVERSITY_SOURCES = 3


def label_aggregate(score: float) -> AggregateLabel:
    if score > 0.5:
        return "Very Bullish"
    if score > 0.15:
        return "Bullish"
    if score >= -0.15:
        return "Neutral"
    if score >= -0.5:
        return "Bearish"
    return "Very Bearish"


class SentimentAggregator:
    def __init__(
        self,
        weights: Mapping[SentimentSource, float] = DEFAULT_SOURCE_WEIGHTS,
        source_names: Mapping[SentimentSource, str] = SOURCE_NAMES,
    ) -> None:
        missing = [s.value for s in SentimentSource if s not in weights]
        if missing:
            raise ValueError(f"source weights missing for: {', '.join(missing)}")
        if any(w < 0 for w in weights.values()):
            raise ValueError("source weights must be non-negative")
        total = sum(weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"source weights must sum to 1.0, got {total:.4f}")

        self._weights = dict(weights)
        self._names = dict(source_names)

    @property
    def weights(self) -> dict[SentimentSource, float]:
        return dict(self._weights)

    def aggregate(self, points: Iterable[SentimentDataPoint | None]) -> AggregatedSentiment:
        present = [p for p in points if p is not None]
        present.sort(key=lambda p: SOURCE_ORDER.index(p.source))

        if not present:
            return AggregatedSentiment()

        weighted_sum = 0.0
        total_weight = 0.0
        confidence_sum = 0.0
        total_mentions = 0
        sources: dict[SentimentSource, SourceBreakdown] = {}

        for point in present:
            source_weight = self._weights[point.source]
            combined = source_weight * point.confidence

            weighted_sum += point.score * combined
            total_weight += combined
            confidence_sum += point.confidence
            total_mentions += point.mention_count or 0

            sources[point.source] = SourceBreakdown(
                score=point.score,
                count=point.mention_count or 0,
                confidence=point.confidence,
                weight=source_weight,
                effective_weight=combined,
            )

        if total_weight > 0:
            score = weighted_sum / total_weight
        else:
            # nothing carries weight; fall back to the plain mean
            score = sum(p.score for p in present) / len(present)

        # Agreement across more independent sources raises confidence even
        # when each source is only moderately sure.
        avg_confidence = confidence_sum / len(present)
        diversity = min(len(present) / FULL_DIVERSITY_SOURCES, 1.0)
        confidence = avg_confidence * CONFIDENCE_WEIGHT + diversity * DIVERSITY_WEIGHT

        sources_used = [
            self._names.get(source, source.value)
            for source in SOURCE_ORDER
            if source in sources
        ]

        logger.debug(
            "Aggregated %d sources: score=%.3f confidence=%.2f",
            len(present), score, confidence,
        )

        return AggregatedSentiment(
            overall_score=score,
            overall_label=label_aggregate(score),
            confidence=min(confidence, 1.0),
            sources=sources,
            total_mentions=total_mentions,
            sources_used=sources_used,
        )
