"""Analysis pipeline: fetches every source for a ticker and runs the engine."""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

import httpx

from pump_radar.aggregation.aggregator import SentimentAggregator
from pump_radar.aggregation.models import AggregatedSentiment
from pump_radar.aggregation.normalizers import (
    normalize_news_feed,
    normalize_social_feed,
    normalize_social_mentions,
)
from pump_radar.config import settings
from pump_radar.detection.classifier import PumpPhaseClassifier, SentimentInput, summarize
from pump_radar.ingestion.alpha_vantage import AlphaVantageNewsFeed
from pump_radar.ingestion.base import DailySentimentFeed, MentionSource, NewsFeed, PriceProvider
from pump_radar.ingestion.finnhub import FinnhubSentimentFeed
from pump_radar.ingestion.models import MentionRecord, PriceSnapshot
from pump_radar.ingestion.reddit import RedditMentionSource
from pump_radar.ingestion.yahoo import YahooPriceProvider
from pump_radar.research.market_cap import (
    classify_market_cap,
    format_market_cap,
    is_penny_stock,
    low_capital_suitability,
    risk_level,
)
from pump_radar.research.report import AnalysisReport, MarketCapProfile, SocialBuzz
from pump_radar.sentiment.scorer import TextSentimentScorer

logger = logging.getLogger(__name__)

TOP_MENTIONS = 5


def clean_ticker(ticker: str) -> str:
    return ticker.upper().strip().strip("$")


def _market_cap_profile(price: PriceSnapshot) -> MarketCapProfile:
    cap_class = classify_market_cap(price.market_cap)
    return MarketCapProfile(
        classification=cap_class,
        formatted=format_market_cap(price.market_cap),
        is_penny_stock=is_penny_stock(price.current_price, price.market_cap),
        risk_level=risk_level(cap_class),
        suitability=low_capital_suitability(price.current_price, price.market_cap, price.volume),
    )


class AnalysisPipeline:
    def __init__(
        self,
        price_provider: PriceProvider,
        social_feed: DailySentimentFeed,
        news_feed: NewsFeed,
        mention_source: MentionSource,
        scorer: TextSentimentScorer | None = None,
        aggregator: SentimentAggregator | None = None,
        classifier: PumpPhaseClassifier | None = None,
        social_window: int | None = None,
        news_limit: int | None = None,
        mention_limit: int | None = None,
    ) -> None:
        self._price_provider = price_provider
        self._social_feed = social_feed
        self._news_feed = news_feed
        self._mention_source = mention_source
        self._scorer = scorer or TextSentimentScorer()
        self._aggregator = aggregator or SentimentAggregator()
        self._classifier = classifier or PumpPhaseClassifier()
        self._social_window = (
            social_window if social_window is not None else settings.social_feed_window_days
        )
        self._news_limit = news_limit if news_limit is not None else settings.news_limit
        self._mention_limit = (
            mention_limit if mention_limit is not None else settings.mention_limit
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def price(self, ticker: str) -> PriceSnapshot | None:
        symbol = clean_ticker(ticker)
        try:
            return await self._price_provider.fetch_price_snapshot(symbol)
        except Exception as exc:
            logger.error("Price lookup failed for $%s: %s", symbol, exc)
            return None

    async def sentiment(self, ticker: str) -> AggregatedSentiment:
        symbol = clean_ticker(ticker)
        sentiment, _ = await self._collect_sentiment(symbol)
        return sentiment

    async def analyze(
        self,
        ticker: str,
        previous_mention_count: int | None = None,
        previous_sentiment: SentimentInput | None = None,
    ) -> AnalysisReport:
        """Run the full analysis for one ticker."""
        symbol = clean_ticker(ticker)
        logger.info("Starting analysis for $%s", symbol)
        report = AnalysisReport(ticker=symbol)

        price, (sentiment, mentions) = await asyncio.gather(
            self.price(symbol),
            self._collect_sentiment(symbol),
        )
        report.sentiment = sentiment
        report.buzz = self._buzz(mentions)

        if price is None:
            logger.warning("No price data for $%s, skipping pump detection", symbol)
            return report

        report.price = price
        report.market_cap = _market_cap_profile(price)
        report.detection = self._classifier.classify(
            sentiment,
            price,
            sentiment.total_mentions,
            previous_mention_count=previous_mention_count,
            previous_sentiment=previous_sentiment,
        )
        report.summary = summarize(report.detection)

        logger.info(
            "Analysis complete for $%s: sentiment=%.3f (%s), phase=%s, signal=%s",
            symbol,
            sentiment.overall_score,
            sentiment.overall_label,
            report.detection.phase.value,
            report.detection.signal.value,
        )
        return report

    async def batch(self, tickers: Sequence[str]) -> list[AnalysisReport]:
        """Analyze several tickers concurrently; tickers without price data are dropped."""
        reports = await asyncio.gather(*(self.analyze(t) for t in tickers))
        return [r for r in reports if r.has_price]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _collect_sentiment(
        self, symbol: str
    ) -> tuple[AggregatedSentiment, list[MentionRecord]]:
        daily, news, mentions = await asyncio.gather(
            self._social_feed.fetch_daily_sentiment(symbol),
            self._news_feed.fetch_news_sentiment(symbol, limit=self._news_limit),
            self._mention_source.fetch_mentions(symbol, limit=self._mention_limit),
            return_exceptions=True,
        )
        daily = self._unwrap(daily, "social feed", symbol)
        news = self._unwrap(news, "news feed", symbol)
        mentions = self._unwrap(mentions, "mention source", symbol)

        points = [
            normalize_social_feed(daily, window=self._social_window),
            normalize_news_feed(news, symbol),
            normalize_social_mentions(mentions, self._scorer),
        ]
        return self._aggregator.aggregate(points), mentions

    @staticmethod
    def _unwrap(result, name: str, symbol: str) -> list:
        if isinstance(result, BaseException):
            logger.warning("%s unavailable for $%s: %s", name.capitalize(), symbol, result)
            return []
        return list(result or [])

    def _buzz(self, mentions: list[MentionRecord]) -> SocialBuzz:
        if not mentions:
            return SocialBuzz()

        batch = self._scorer.score_batch(m.text for m in mentions)
        top = []
        for m in mentions[:TOP_MENTIONS]:
            scored = self._scorer.score_stock_text(m.text)
            top.append({
                "text": m.text[:200],
                "author": m.author,
                "community": m.community,
                "url": m.url,
                "upvotes": int(m.engagement_weight),
                "comments": m.comments,
                "sentiment": round(scored.score, 3),
                "label": scored.label,
            })

        return SocialBuzz(
            total_posts=len(mentions),
            average_score=batch.average_score,
            distribution=batch.distribution,
            top_mentions=top,
        )


def default_pipeline(client: httpx.AsyncClient | None = None) -> AnalysisPipeline:
    """Pipeline wired to the live Yahoo / Finnhub / Alpha Vantage / Reddit clients."""
    return AnalysisPipeline(
        price_provider=YahooPriceProvider(client=client),
        social_feed=FinnhubSentimentFeed(client=client),
        news_feed=AlphaVantageNewsFeed(client=client),
        mention_source=RedditMentionSource(client=client),
    )
