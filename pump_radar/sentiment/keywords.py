"""Stock-slang keyword tables used to nudge VADER scores."""

from dataclasses import dataclass

KEYWORD_STEP = 0.1

BULLISH_KEYWORDS: tuple[str, ...] = (
    "moon",
    "rocket",
    "buy",
    "calls",
    "bullish",
    "breakout",
    "squeeze",
    "tendies",
    "diamond hands",
    "hodl",
    "buying the dip",
    "undervalued",
    "rally",
    "pump",
    "gains",
    "lambo",
)

BEARISH_KEYWORDS: tuple[str, ...] = (
    "puts",
    "bearish",
    "crash",
    "dump",
    "overvalued",
    "bubble",
    "paper hands",
    "bag holder",
    "rekt",
    "falling knife",
    "bear trap",
)


@dataclass(frozen=True)
class KeywordLexicon:
    bullish: tuple[str, ...] = BULLISH_KEYWORDS
    bearish: tuple[str, ...] = BEARISH_KEYWORDS
    step: float = KEYWORD_STEP

    def __post_init__(self) -> None:
        # Each keyword counts once; normalise case and drop duplicates
        object.__setattr__(self, "bullish", _unique_lower(self.bullish))
        object.__setattr__(self, "bearish", _unique_lower(self.bearish))

    def adjustment(self, text: str) -> float:
        lowered = text.lower()
        bullish_hits = sum(1 for kw in self.bullish if kw in lowered)
        bearish_hits = sum(1 for kw in self.bearish if kw in lowered)
        return (bullish_hits - bearish_hits) * self.step


def _unique_lower(words: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(w.lower() for w in words if w))


DEFAULT_LEXICON = KeywordLexicon()
