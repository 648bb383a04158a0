# tests/unit/sentiment/test_text_sentiment_scorer.py

from __future__ import annotations

import pytest

from pump_radar.sentiment.keywords import KeywordLexicon
from pump_radar.sentiment.models import SentimentBreakdown, SentimentScore, label_for_score
from pump_radar.sentiment.scorer import TextSentimentScorer


class ScriptedAnalyzer:
    """
    Stand-in for VADER: returns a fixed polarity dict per text so tests do
    not depend on the lexicon shipped with vaderSentiment.
    """

    def __init__(self, scripted: dict[str, dict[str, float]], default: dict[str, float] | None = None) -> None:
        self.scripted = scripted
        self.default = default or {"compound": 0.0, "pos": 0.0, "neu": 1.0, "neg": 0.0}
        self.calls: list[str] = []

    def polarity_scores(self, text: str) -> dict[str, float]:
        self.calls.append(text)
        return self.scripted.get(text, self.default)


def _polarity(compound: float, pos: float, neu: float, neg: float) -> dict[str, float]:
    return {"compound": compound, "pos": pos, "neu": neu, "neg": neg}


NO_KEYWORDS = KeywordLexicon(bullish=(), bearish=())


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_empty_text_is_neutral(text):
    analyzer = ScriptedAnalyzer({})
    result = TextSentimentScorer(analyzer=analyzer).score(text)

    assert result == SentimentScore(
        score=0.0,
        label="neutral",
        confidence=0.0,
        breakdown=SentimentBreakdown(positive=0.0, neutral=1.0, negative=0.0),
    )
    assert analyzer.calls == []


def test_score_uses_compound_and_derives_label_and_confidence():
    analyzer = ScriptedAnalyzer({"meh": _polarity(-0.42, 0.1, 0.5, 0.4)})
    result = TextSentimentScorer(analyzer=analyzer).score("meh")

    assert result.score == pytest.approx(-0.42)
    assert result.label == "negative"
    assert result.confidence == pytest.approx(0.42)
    assert result.breakdown.negative == pytest.approx(0.4)


def test_breakdown_is_renormalised_to_one():
    # VADER rounds each share independently
    analyzer = ScriptedAnalyzer({"x": _polarity(0.3, 0.334, 0.333, 0.334)})
    b = TextSentimentScorer(analyzer=analyzer).score("x").breakdown

    assert b.positive + b.neutral + b.negative == pytest.approx(1.0)
    assert b.positive == pytest.approx(b.negative)


def test_all_zero_breakdown_becomes_neutral():
    analyzer = ScriptedAnalyzer({"?": _polarity(0.0, 0.0, 0.0, 0.0)})
    b = TextSentimentScorer(analyzer=analyzer).score("?").breakdown

    assert b == SentimentBreakdown()


@pytest.mark.parametrize(
    "score, expected",
    [
        (0.05, "positive"),
        (0.0499, "neutral"),
        (0.0, "neutral"),
        (-0.0499, "neutral"),
        (-0.05, "negative"),
        (1.0, "positive"),
        (-1.0, "negative"),
    ],
)
def test_label_boundaries(score, expected):
    assert label_for_score(score) == expected


def test_label_is_determined_by_score_only():
    analyzer = ScriptedAnalyzer({
        "a": _polarity(0.2, 0.9, 0.1, 0.0),
        "b": _polarity(0.2, 0.0, 0.1, 0.9),
    })
    scorer = TextSentimentScorer(analyzer=analyzer)

    assert scorer.score("a").label == scorer.score("b").label == "positive"


def test_stock_text_adds_keyword_adjustment():
    analyzer = ScriptedAnalyzer({"to the moon, buy calls": _polarity(0.1, 0.2, 0.8, 0.0)})
    result = TextSentimentScorer(analyzer=analyzer).score_stock_text("to the moon, buy calls")

    # moon + buy + calls
    assert result.score == pytest.approx(0.4)
    assert result.label == "positive"
    assert result.breakdown.positive == pytest.approx(0.2)


def test_stock_text_bearish_keywords_pull_down():
    text = "looks like a bubble, puts printing before the crash"
    analyzer = ScriptedAnalyzer({text: _polarity(0.0, 0.0, 1.0, 0.0)})
    result = TextSentimentScorer(analyzer=analyzer).score_stock_text(text)

    assert result.score == pytest.approx(-0.3)
    assert result.label == "negative"


def test_stock_text_adjustment_is_clamped():
    text = "moon rocket buy calls bullish breakout squeeze tendies"
    analyzer = ScriptedAnalyzer({text: _polarity(0.9, 0.8, 0.2, 0.0)})
    result = TextSentimentScorer(analyzer=analyzer).score_stock_text(text)

    assert result.score == 1.0
    assert result.confidence == 1.0


def test_stock_text_empty_is_neutral():
    result = TextSentimentScorer(analyzer=ScriptedAnalyzer({})).score_stock_text("")
    assert result == SentimentScore.neutral()


def test_batch_average_distribution_and_combined():
    analyzer = ScriptedAnalyzer({
        "up": _polarity(0.6, 0.6, 0.4, 0.0),
        "down": _polarity(-0.4, 0.0, 0.6, 0.4),
        "flat": _polarity(0.0, 0.0, 1.0, 0.0),
        "up down flat": _polarity(0.1, 0.2, 0.7, 0.1),
    })
    batch = TextSentimentScorer(NO_KEYWORDS, analyzer).score_batch(["up", "down", "flat"])

    assert batch.average_score == pytest.approx(0.2 / 3)
    assert batch.distribution.positive == 1
    assert batch.distribution.negative == 1
    assert batch.distribution.neutral == 1
    assert batch.combined.score == pytest.approx(0.1)
    assert [s.label for s in batch.individual] == ["positive", "negative", "neutral"]


def test_batch_empty():
    batch = TextSentimentScorer(analyzer=ScriptedAnalyzer({})).score_batch([])

    assert batch.average_score == 0.0
    assert batch.individual == []
    assert batch.combined == SentimentScore.neutral()


def test_weighted_respects_weights():
    analyzer = ScriptedAnalyzer({
        "good": _polarity(0.8, 0.8, 0.2, 0.0),
        "bad": _polarity(-0.4, 0.0, 0.6, 0.4),
    })
    result = TextSentimentScorer(analyzer=analyzer).score_weighted([("good", 3.0), ("bad", 1.0)])

    assert result.score == pytest.approx((0.8 * 3 - 0.4) / 4)
    assert result.breakdown.positive == pytest.approx(0.6)
    assert result.breakdown.negative == pytest.approx(0.1)


def test_weighted_non_positive_weights_clamp_to_unweighted_mean():
    analyzer = ScriptedAnalyzer({
        "good": _polarity(0.8, 0.8, 0.2, 0.0),
        "bad": _polarity(-0.4, 0.0, 0.6, 0.4),
        "flat": _polarity(0.0, 0.0, 1.0, 0.0),
    })
    scorer = TextSentimentScorer(analyzer=analyzer)

    weighted = scorer.score_weighted([("good", 0.0), ("bad", -5.0), ("flat", 0.5)])

    assert weighted.score == pytest.approx((0.8 - 0.4 + 0.0) / 3)


def test_weighted_empty_is_neutral():
    result = TextSentimentScorer(analyzer=ScriptedAnalyzer({})).score_weighted([])
    assert result == SentimentScore.neutral()


def test_real_vader_reads_obvious_polarity():
    scorer = TextSentimentScorer()

    assert scorer.score("This is great, I love it! Amazing results!").label == "positive"
    assert scorer.score("This is terrible, awful, I hate it. Horrible loss.").label == "negative"
