"""Structured analysis report model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from pump_radar.aggregation.models import AggregatedSentiment
from pump_radar.detection.models import PumpDetectionResult
from pump_radar.ingestion.models import PriceSnapshot, utcnow
from pump_radar.research.market_cap import Suitability
from pump_radar.sentiment.models import LabelDistribution


@dataclass
class MarketCapProfile:
    classification: str = "small"
    formatted: str = "Unknown"
    is_penny_stock: bool = False
    risk_level: str = ""
    suitability: Suitability | None = None


@dataclass
class SocialBuzz:
    total_posts: int = 0
    average_score: float = 0.0
    distribution: LabelDistribution = field(default_factory=LabelDistribution)
    top_mentions: list[dict] = field(default_factory=list)  # {text, author, community, url, upvotes, ...}


@dataclass
class AnalysisReport:
    ticker: str = ""
    generated_at: datetime = field(default_factory=utcnow)

    # Section 1: Price
    price: PriceSnapshot | None = None
    market_cap: MarketCapProfile | None = None

    # Section 2: Multi-source sentiment
    sentiment: AggregatedSentiment = field(default_factory=AggregatedSentiment)

    # Section 3: Reddit buzz
    buzz: SocialBuzz = field(default_factory=SocialBuzz)

    # Section 4: Pump phase (only with price data)
    detection: PumpDetectionResult | None = None
    summary: str = ""

    @property
    def has_price(self) -> bool:
        return self.price is not None

    def to_dict(self) -> dict:
        """Serialize for JSON API responses."""
        cap = self.market_cap
        return {
            "ticker": self.ticker,
            "generated_at": self.generated_at.isoformat(),
            "price": self.price.model_dump(mode="json") if self.price else None,
            "market_cap": {
                "classification": cap.classification,
                "formatted": cap.formatted,
                "is_penny_stock": cap.is_penny_stock,
                "risk_level": cap.risk_level,
                "low_capital": {
                    "suitable": cap.suitability.suitable,
                    "reason": cap.suitability.reason,
                    "capital_needed": cap.suitability.capital_needed,
                } if cap.suitability else None,
            } if cap else None,
            "sentiment": self.sentiment.model_dump(mode="json"),
            "buzz": {
                "total_posts": self.buzz.total_posts,
                "average_score": self.buzz.average_score,
                "distribution": self.buzz.distribution.model_dump(),
                "top_mentions": self.buzz.top_mentions[:5],
            },
            "detection": self.detection.model_dump(mode="json") if self.detection else None,
            "summary": self.summary,
        }
