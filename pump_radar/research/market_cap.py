"""Market-cap buckets, penny-stock checks and small-account suitability."""

from dataclasses import dataclass
from typing import Literal

MarketCapClass = Literal["nano", "micro", "small", "mid", "large", "mega"]

MILLION = 1_000_000
BILLION = 1_000_000_000

# (upper bound, class), checked in order
_CAP_TIERS: list[tuple[float, MarketCapClass]] = [
    (50 * MILLION, "nano"),
    (300 * MILLION, "micro"),
    (2 * BILLION, "small"),
    (10 * BILLION, "mid"),
    (200 * BILLION, "large"),
]

_RISK_LEVELS: dict[str, str] = {
    "nano": "Very High Risk - Nano Cap",
    "micro": "High Risk - Micro Cap (Penny Stock)",
    "small": "Moderate-High Risk - Small Cap",
    "mid": "Moderate Risk - Mid Cap",
    "large": "Low-Moderate Risk - Large Cap",
    "mega": "Low Risk - Mega Cap",
}


def classify_market_cap(market_cap: float | None) -> MarketCapClass:
    if not market_cap:
        return "small"  # unknown
    for bound, label in _CAP_TIERS:
        if market_cap < bound:
            return label
    return "mega"


def is_penny_stock(price: float, market_cap: float | None) -> bool:
    if price < 5 and market_cap and market_cap < 300 * MILLION:
        return True
    return classify_market_cap(market_cap) in ("nano", "micro")


def format_market_cap(market_cap: float | None) -> str:
    if not market_cap:
        return "Unknown"
    if market_cap >= BILLION:
        return f"${market_cap / BILLION:.2f}B"
    if market_cap >= MILLION:
        return f"${market_cap / MILLION:.2f}M"
    return f"${market_cap / 1000:.2f}K"


def risk_level(cap_class: MarketCapClass) -> str:
    return _RISK_LEVELS[cap_class]


@dataclass(frozen=True)
class Suitability:
    suitable: bool
    reason: str
    capital_needed: str


def low_capital_suitability(
    price: float,
    market_cap: float | None = None,
    volume: float | None = None,
) -> Suitability:
    """Rough check of whether a small account can trade this name sensibly."""
    cap_class = classify_market_cap(market_cap)
    capital = f"~${price * 100:.0f} for 100 shares"

    if 1 <= price <= 10 and cap_class in ("micro", "small") and volume and volume > 100_000:
        return Suitability(True, "Good liquidity, affordable entry, suitable for small accounts", capital)
    if price > 100:
        return Suitability(False, "Share price too high for low capital accounts", capital)
    if cap_class == "nano":
        return Suitability(False, "Extremely high risk - nano cap, potential pump & dump", capital)
    if volume and volume < 50_000:
        return Suitability(False, "Low volume - may be difficult to enter/exit positions", capital)
    return Suitability(True, "Potentially suitable - verify liquidity before trading", capital)
