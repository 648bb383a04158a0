"""VADER-based text sentiment scoring.

VADER is tuned for social media: it reads capitalisation (MOON vs moon),
punctuation emphasis (!!!), negation, slang and emoji. On top of it sits an
optional stock-slang keyword nudge for penny-stock chatter.
"""

from __future__ import annotations

from typing import Iterable

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from pump_radar.sentiment.keywords import DEFAULT_LEXICON, KeywordLexicon
from pump_radar.sentiment.models import (
    BatchSentiment,
    LabelDistribution,
    SentimentBreakdown,
    SentimentScore,
)

MIN_ITEM_WEIGHT = 1.0

_vader = SentimentIntensityAnalyzer()


def _clamp(value: float, low: float = -1.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _breakdown(pos: float, neu: float, neg: float) -> SentimentBreakdown:
    # VADER rounds each share to 3 decimals and returns all zeros when it
    # finds no tokens; renormalise so the mass is exactly 1.
    total = pos + neu + neg
    if total <= 0:
        return SentimentBreakdown()
    return SentimentBreakdown(positive=pos / total, neutral=neu / total, negative=neg / total)


class TextSentimentScorer:
    def __init__(
        self,
        lexicon: KeywordLexicon = DEFAULT_LEXICON,
        analyzer: SentimentIntensityAnalyzer | None = None,
    ) -> None:
        self._lexicon = lexicon
        self._analyzer = analyzer or _vader

    @property
    def lexicon(self) -> KeywordLexicon:
        return self._lexicon

    def score(self, text: str) -> SentimentScore:
        if not text or not text.strip():
            return SentimentScore.neutral()

        raw = self._analyzer.polarity_scores(text)
        return SentimentScore.from_score(
            _clamp(raw["compound"]),
            _breakdown(raw["pos"], raw["neu"], raw["neg"]),
        )

    def score_stock_text(self, text: str) -> SentimentScore:
        """VADER score nudged by bullish/bearish stock slang."""
        base = self.score(text)
        if not text:
            return base

        adjusted = _clamp(base.score + self._lexicon.adjustment(text))
        return SentimentScore.from_score(adjusted, base.breakdown)

    def score_batch(self, texts: Iterable[str]) -> BatchSentiment:
        texts = list(texts)
        if not texts:
            return BatchSentiment()

        individual = [self.score(t) for t in texts]
        average = sum(s.score for s in individual) / len(individual)
        distribution = LabelDistribution(
            positive=sum(1 for s in individual if s.label == "positive"),
            neutral=sum(1 for s in individual if s.label == "neutral"),
            negative=sum(1 for s in individual if s.label == "negative"),
        )

        return BatchSentiment(
            average_score=average,
            combined=self.score(" ".join(texts)),
            individual=individual,
            distribution=distribution,
        )

    def score_weighted(self, items: Iterable[tuple[str, float]]) -> SentimentScore:
        """Engagement-weighted mean sentiment. Weights below 1 count as 1."""
        total_weight = 0.0
        score_sum = 0.0
        pos_sum = neu_sum = neg_sum = 0.0

        for text, weight in items:
            result = self.score(text)
            w = max(MIN_ITEM_WEIGHT, weight)
            total_weight += w
            score_sum += result.score * w
            pos_sum += result.breakdown.positive * w
            neu_sum += result.breakdown.neutral * w
            neg_sum += result.breakdown.negative * w

        if total_weight == 0:
            return SentimentScore.neutral()

        return SentimentScore.from_score(
            _clamp(score_sum / total_weight),
            SentimentBreakdown(
                positive=pos_sum / total_weight,
                neutral=neu_sum / total_weight,
                negative=neg_sum / total_weight,
            ),
        )
