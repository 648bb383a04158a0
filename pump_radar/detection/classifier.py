"""Pump-phase detection from combined sentiment, mention and price signals.

Phases:
- early: mentions rising, sentiment positive and improving, price starting to move
- mid:   strong sentiment, rapid price increase on heavy volume
- late:  extreme sentiment, overextended price, mentions no longer growing
- post:  mentions and sentiment falling, price dropping on thin volume
- none:  nothing pump-like

Every call is a pure function of its arguments: the "previous" values are the
caller's prior snapshot, nothing is remembered here.
"""

from __future__ import annotations

import logging

from pump_radar.aggregation.models import AggregatedSentiment
from pump_radar.detection.models import (
    MentionTrend,
    PumpDetectionResult,
    PumpMetrics,
    PumpPhase,
    SentimentTrend,
    TradeSignal,
)
from pump_radar.detection.thresholds import DEFAULT_THRESHOLDS, PhaseThresholds
from pump_radar.ingestion.models import PriceSnapshot
from pump_radar.sentiment.models import SentimentScore

logger = logging.getLogger(__name__)

SentimentInput = float | int | SentimentScore | AggregatedSentiment


def _score_of(sentiment: SentimentInput) -> float:
    if isinstance(sentiment, (int, float)):
        return float(sentiment)
    return float(sentiment.score)


class PumpPhaseClassifier:
    def __init__(self, thresholds: PhaseThresholds = DEFAULT_THRESHOLDS) -> None:
        self._t = thresholds

    @property
    def thresholds(self) -> PhaseThresholds:
        return self._t

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(
        self,
        sentiment: SentimentInput,
        price: PriceSnapshot,
        mention_count: int,
        previous_mention_count: int | None = None,
        previous_sentiment: SentimentInput | None = None,
    ) -> PumpDetectionResult:
        reasoning: list[str] = []
        score = _score_of(sentiment)

        sentiment_trend = self.sentiment_trend(score, previous_sentiment, reasoning)
        mention_trend = self.mention_trend(mention_count, previous_mention_count, reasoning)

        momentum = self.price_momentum(price)
        reasoning.append(f"Price momentum: {'+' if momentum > 0 else ''}{momentum:.2f}%")

        volume_ratio = self.volume_ratio(price)
        if volume_ratio > self._t.high_volume_ratio:
            reasoning.append(f"Volume {volume_ratio:.1f}x above average")
        elif volume_ratio < self._t.low_volume_ratio:
            reasoning.append(f"Volume {volume_ratio * 100:.0f}% of average")

        metrics = PumpMetrics(
            sentiment_score=score,
            sentiment_trend=sentiment_trend,
            mention_volume=mention_count,
            mention_trend=mention_trend,
            price_momentum=momentum,
            volume_ratio=volume_ratio,
        )

        phase = self.classify_phase(metrics, reasoning)
        signal = self.determine_signal(phase, metrics)
        confidence = self.confidence(metrics)

        logger.debug(
            "Pump detection: phase=%s signal=%s confidence=%.2f",
            phase.value, signal.value, confidence,
        )

        return PumpDetectionResult(
            phase=phase,
            signal=signal,
            confidence=confidence,
            reasoning=reasoning,
            metrics=metrics,
        )

    # ------------------------------------------------------------------
    # Derived metrics
    # ------------------------------------------------------------------

    def sentiment_trend(
        self,
        score: float,
        previous: SentimentInput | None,
        reasoning: list[str] | None = None,
    ) -> SentimentTrend:
        if previous is None:
            return SentimentTrend.STABLE

        change = score - _score_of(previous)
        limit = self._t.trend.sentiment_delta
        if change > limit:
            if reasoning is not None:
                reasoning.append(f"Sentiment improving (+{change * 100:.1f}%)")
            return SentimentTrend.IMPROVING
        if change < -limit:
            if reasoning is not None:
                reasoning.append(f"Sentiment declining ({change * 100:.1f}%)")
            return SentimentTrend.DECLINING
        return SentimentTrend.STABLE

    def mention_trend(
        self,
        count: int,
        previous: int | None,
        reasoning: list[str] | None = None,
    ) -> MentionTrend:
        if not previous or previous <= 0:
            return MentionTrend.STABLE

        change_pct = (count - previous) / previous * 100
        limit = self._t.trend.mention_change_pct
        if change_pct > limit:
            if reasoning is not None:
                reasoning.append(f"Mentions surging (+{change_pct:.0f}%)")
            return MentionTrend.RISING
        if change_pct < -limit:
            if reasoning is not None:
                reasoning.append(f"Mentions declining ({change_pct:.0f}%)")
            return MentionTrend.DECLINING
        return MentionTrend.STABLE

    def price_momentum(self, price: PriceSnapshot) -> float:
        """Recency-weighted blend of the 1d/1w/2w/1m % changes that are present."""
        weighted = 0.0
        weight_total = 0.0
        for attr, weight in self._t.momentum_weights:
            change = getattr(price, attr, None)
            if change is None:
                continue
            weighted += change * weight
            weight_total += weight

        if weight_total == 0:
            return 0.0
        return weighted / weight_total

    @staticmethod
    def volume_ratio(price: PriceSnapshot) -> float:
        if price.avg_volume > 0:
            return price.volume / price.avg_volume
        return 1.0

    # ------------------------------------------------------------------
    # Phase, signal, confidence
    # ------------------------------------------------------------------

    def classify_phase(self, m: PumpMetrics, reasoning: list[str]) -> PumpPhase:
        t = self._t

        if (
            m.mention_trend is MentionTrend.RISING
            and m.sentiment_score > t.early.min_sentiment
            and m.sentiment_trend is SentimentTrend.IMPROVING
            and t.early.min_momentum < m.price_momentum < t.early.max_momentum
            and m.volume_ratio > t.early.min_volume_ratio
        ):
            reasoning.append("🟢 Early pump detected - potential entry point")
            return PumpPhase.EARLY

        if (
            m.sentiment_score > t.mid.min_sentiment
            and t.mid.min_momentum < m.price_momentum < t.mid.max_momentum
            and m.volume_ratio > t.mid.min_volume_ratio
        ):
            reasoning.append("🟡 Mid pump detected - momentum building")
            return PumpPhase.MID

        # Checked before "post": with declining mentions both can match, and
        # late wins.
        if (
            m.sentiment_score > t.late.min_sentiment
            and m.price_momentum > t.late.min_momentum
            and m.mention_trend in (MentionTrend.STABLE, MentionTrend.DECLINING)
        ):
            reasoning.append("🔴 Late pump detected - high risk, likely overextended")
            return PumpPhase.LATE

        if (
            m.mention_trend is MentionTrend.DECLINING
            and m.sentiment_trend is SentimentTrend.DECLINING
            and m.price_momentum < t.post.max_momentum
            and m.volume_ratio < t.post.max_volume_ratio
        ):
            reasoning.append("🔴 Post pump detected - avoid or exit")
            return PumpPhase.POST

        reasoning.append("No significant pump activity detected")
        return PumpPhase.NONE

    def determine_signal(self, phase: PumpPhase, m: PumpMetrics) -> TradeSignal:
        s = self._t.signal

        if phase is PumpPhase.EARLY:
            return TradeSignal.GREEN

        if (
            phase is PumpPhase.NONE
            and m.sentiment_score > s.green_min_sentiment
            and 0 < m.price_momentum < s.green_max_momentum
        ):
            return TradeSignal.GREEN

        if phase in (PumpPhase.LATE, PumpPhase.POST):
            return TradeSignal.RED

        if m.sentiment_score < s.red_max_sentiment or m.price_momentum < s.red_max_momentum:
            return TradeSignal.RED

        return TradeSignal.YELLOW

    def confidence(self, m: PumpMetrics) -> float:
        w = self._t.confidence

        total = abs(m.sentiment_score) * w.sentiment
        total += min(1.0, abs(m.volume_ratio - 1)) * w.volume
        total += min(1.0, abs(m.price_momentum) / w.momentum_full_scale) * w.momentum

        aligned = (
            m.sentiment_trend is SentimentTrend.IMPROVING and m.mention_trend is MentionTrend.RISING
        ) or (
            m.sentiment_trend is SentimentTrend.DECLINING and m.mention_trend is MentionTrend.DECLINING
        )
        total += w.aligned_trends if aligned else w.unaligned_trends

        return max(0.0, min(1.0, total))


_SIGNAL_EMOJI = {
    TradeSignal.GREEN: "🟢",
    TradeSignal.YELLOW: "🟡",
    TradeSignal.RED: "🔴",
}

_SIGNAL_ACTION = {
    TradeSignal.GREEN: "Consider buying",
    TradeSignal.YELLOW: "Monitor closely",
    TradeSignal.RED: "Avoid or exit",
}


def summarize(result: PumpDetectionResult) -> str:
    """One-line summary for dashboards and logs."""
    if result.confidence > 0.7:
        level = "High"
    elif result.confidence > 0.4:
        level = "Medium"
    else:
        level = "Low"

    phase_text = "No pump" if result.phase is PumpPhase.NONE else f"{result.phase.value} pump"
    return (
        f"{_SIGNAL_EMOJI[result.signal]} {phase_text} | {_SIGNAL_ACTION[result.signal]} | "
        f"Confidence: {level} ({result.confidence * 100:.0f}%)"
    )
