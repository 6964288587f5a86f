"""Turn API results into what the page shows."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Literal, Optional

from .schemas import PosToken, SentimentResult
from .variants import Variant

SentimentLabel = Literal["Positive", "Negative", "Neutral"]

# label -> (icon, colour)
SENTIMENT_STYLE: Dict[str, tuple] = {
    "Positive": ("\U0001F44D", "#2f855a"),
    "Negative": ("\U0001F44E", "#c53030"),
    "Neutral": ("\U0001F610", "#718096"),
}


@dataclass
class SentimentView:
    label: SentimentLabel
    confidence: str
    icon: str
    color: str

    @property
    def summary(self) -> str:
        return f"{self.label} with {self.confidence} confidence."

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "summary": self.summary}


@dataclass
class NounCountView:
    noun_count: int

    @property
    def summary(self) -> str:
        return f"Found {self.noun_count} noun(s) in the review."

    def to_dict(self) -> Dict[str, Any]:
        return {**asdict(self), "summary": self.summary}


def sentiment_label(result: SentimentResult, neutral_threshold: Optional[float] = None) -> SentimentLabel:
    """Map a classifier label to a display label.

    Anything that is not ``POSITIVE`` counts as negative. With a threshold,
    a score at or below it is shown as neutral.

    >>> sentiment_label(SentimentResult(label="POSITIVE", score=0.93))
    'Positive'
    >>> sentiment_label(SentimentResult(label="NEGATIVE", score=0.5), neutral_threshold=0.5)
    'Neutral'
    """
    if neutral_threshold is not None and not result.score > neutral_threshold:
        return "Neutral"
    if result.label == "POSITIVE":
        return "Positive"
    return "Negative"


def format_confidence(score: float, decimals: int = 1) -> str:
    """
    >>> format_confidence(0.93)
    '93.0%'
    >>> format_confidence(0.93, decimals=2)
    '93.00%'
    """
    return f"{score * 100:.{decimals}f}%"


def render_sentiment(result: SentimentResult, variant: Variant) -> SentimentView:
    label = sentiment_label(result, variant.neutral_threshold)
    icon, color = SENTIMENT_STYLE[label]
    return SentimentView(
        label=label,
        confidence=format_confidence(result.score, variant.confidence_decimals),
        icon=icon,
        color=color,
    )


def count_nouns(tokens: Iterable[PosToken]) -> int:
    return sum(1 for t in tokens if t.entity_group == "NOUN")


def render_noun_count(tokens: Iterable[PosToken]) -> NounCountView:
    return NounCountView(noun_count=count_nouns(tokens))
