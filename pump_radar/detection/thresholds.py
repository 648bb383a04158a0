"""Tunable heuristics for pump-phase detection.

The numbers are empirical, not derived. Keep them here so each one can be
tuned and tested on its own.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TrendThresholds:
    sentiment_delta: float = 0.1  # absolute score change
    mention_change_pct: float = 20.0  # relative change, percent


@dataclass(frozen=True)
class EarlyThresholds:
    min_sentiment: float = 0.3
    min_momentum: float = 2.0
    max_momentum: float = 15.0
    min_volume_ratio: float = 1.2


@dataclass(frozen=True)
class MidThresholds:
    min_sentiment: float = 0.5
    min_momentum: float = 10.0
    max_momentum: float = 30.0
    min_volume_ratio: float = 1.5


@dataclass(frozen=True)
class LateThresholds:
    min_sentiment: float = 0.7
    min_momentum: float = 25.0


@dataclass(frozen=True)
class PostThresholds:
    max_momentum: float = -5.0
    max_volume_ratio: float = 0.8


@dataclass(frozen=True)
class SignalThresholds:
    # phase "none" but quietly positive
    green_min_sentiment: float = 0.4
    green_max_momentum: float = 10.0
    # outright negative
    red_max_sentiment: float = -0.3
    red_max_momentum: float = -10.0


@dataclass(frozen=True)
class ConfidenceWeights:
    sentiment: float = 0.3
    volume: float = 0.25
    momentum: float = 0.25
    momentum_full_scale: float = 20.0  # |momentum| that counts as full strength
    aligned_trends: float = 0.2
    unaligned_trends: float = 0.1


@dataclass(frozen=True)
class PhaseThresholds:
    trend: TrendThresholds = field(default_factory=TrendThresholds)
    early: EarlyThresholds = field(default_factory=EarlyThresholds)
    mid: MidThresholds = field(default_factory=MidThresholds)
    late: LateThresholds = field(default_factory=LateThresholds)
    post: PostThresholds = field(default_factory=PostThresholds)
    signal: SignalThresholds = field(default_factory=SignalThresholds)
    confidence: ConfidenceWeights = field(default_factory=ConfidenceWeights)

    # Heavier weight on recent windows; renormalised over the windows present
    momentum_weights: tuple[tuple[str, float], ...] = (
        ("change_1d", 0.4),
        ("change_1w", 0.3),
        ("change_2w", 0.2),
        ("change_1m", 0.1),
    )

    # Reasoning only: when to call out unusual volume
    high_volume_ratio: float = 1.5
    low_volume_ratio: float = 0.5


DEFAULT_THRESHOLDS = PhaseThresholds()
