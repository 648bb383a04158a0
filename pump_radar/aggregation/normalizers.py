"""Turn each provider's native response into a SentimentDataPoint.

Every adapter returns None when its source has nothing usable, so a missing
provider never stops the aggregate from being computed.
"""

from __future__ import annotations

from typing import Sequence

from pump_radar.aggregation.models import SentimentDataPoint, SentimentSource
from pump_radar.ingestion.models import DailySentimentRecord, MentionRecord, NewsArticle
from pump_radar.sentiment.scorer import TextSentimentScorer

DEFAULT_WINDOW_DAYS = 7
SOCIAL_FEED_FULL_CONFIDENCE_MENTIONS = 1000

NEWS_MIN_RELEVANCE = 0.3
NEWS_FULL_VOLUME_ARTICLES = 20
NEWS_VOLUME_WEIGHT = 0.5
NEWS_RELEVANCE_WEIGHT = 0.5

MENTIONS_FULL_VOLUME_POSTS = 50
MENTIONS_VOLUME_WEIGHT = 0.4
MENTIONS_CONSISTENCY_WEIGHT = 0.6


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def normalize_social_feed(
    records: Sequence[DailySentimentRecord] | None,
    window: int = DEFAULT_WINDOW_DAYS,
) -> SentimentDataPoint | None:
    """Mention-weighted mean over the most recent `window` daily records."""
    if not records:
        return None

    recent = list(records)[: max(window, 1)]
    total_mentions = sum(max(r.mention_count, 0) for r in recent)

    weighted = sum(r.score * max(r.mention_count, 0) for r in recent)
    score = weighted / total_mentions if total_mentions > 0 else 0.0

    return SentimentDataPoint(
        source=SentimentSource.SOCIAL_AGGREGATE,
        score=_clamp(score, -1.0, 1.0),
        confidence=min(total_mentions / SOCIAL_FEED_FULL_CONFIDENCE_MENTIONS, 1.0),
        mention_count=total_mentions,
    )


def normalize_news_feed(
    articles: Sequence[NewsArticle] | None,
    ticker: str,
    min_relevance: float = NEWS_MIN_RELEVANCE,
) -> SentimentDataPoint | None:
    """Relevance-weighted ticker sentiment over articles that are about `ticker`."""
    if not articles:
        return None

    wanted = ticker.upper().strip("$")
    relevant: list[tuple[float, float]] = []  # (score, relevance)
    for article in articles:
        match = next(
            (ts for ts in article.ticker_sentiment if ts.ticker.upper() == wanted),
            None,
        )
        if match is None or match.relevance <= min_relevance:
            continue
        relevant.append((match.score, match.relevance))

    if not relevant:
        return None

    total_relevance = sum(rel for _, rel in relevant)
    score = sum(s * rel for s, rel in relevant) / total_relevance
    avg_relevance = total_relevance / len(relevant)

    volume_factor = min(len(relevant) / NEWS_FULL_VOLUME_ARTICLES, 1.0)
    confidence = volume_factor * NEWS_VOLUME_WEIGHT + avg_relevance * NEWS_RELEVANCE_WEIGHT

    return SentimentDataPoint(
        source=SentimentSource.NEWS,
        score=_clamp(score, -1.0, 1.0),
        confidence=_clamp(confidence, 0.0, 1.0),
        mention_count=len(relevant),
    )


def mention_weight(mention: MentionRecord) -> float:
    return (mention.engagement_weight + 1) * mention.source_weight


def normalize_social_mentions(
    mentions: Sequence[MentionRecord] | None,
    scorer: TextSentimentScorer,
) -> SentimentDataPoint | None:
    """Weighted VADER score over posts, confidence from volume and agreement."""
    if not mentions:
        return None

    weighted = scorer.score_weighted((m.text, mention_weight(m)) for m in mentions)

    # Consistency: how tightly individual posts sit around the weighted mean
    individual = [scorer.score(m.text).score for m in mentions]
    variance = sum((s - weighted.score) ** 2 for s in individual) / len(individual)
    consistency = 1.0 - min(variance, 1.0)
    volume_factor = min(len(mentions) / MENTIONS_FULL_VOLUME_POSTS, 1.0)
    confidence = volume_factor * MENTIONS_VOLUME_WEIGHT + consistency * MENTIONS_CONSISTENCY_WEIGHT

    return SentimentDataPoint(
        source=SentimentSource.SOCIAL_DIRECT,
        score=weighted.score,
        confidence=_clamp(confidence, 0.0, 1.0),
        mention_count=len(mentions),
    )
