"""Deterministic keyword classifier for political text signals."""
from __future__ import annotations

from typing import FrozenSet, Mapping, Optional, Tuple, Union
import logging

from ..core.types import Classification, FeedItem, Sentiment, TextSignal
from ..registry import ConstituencyRegistry
from .keywords import DEFAULT_CATEGORY, DEFAULT_IMPACT, DEFAULT_KEYWORDS, KeywordSet

LOGGER = logging.getLogger(__name__)

NEUTRAL_SCORE = 0.5


class TextClassifier:
    """Classify text by party mention, sentiment polarity and election relevance.

    Matching is case-insensitive substring search against the keyword set.
    Sentiment counts how many distinct positive and negative keywords occur;
    with ``p`` positive and ``n`` negative hits the score is
    ``(p - n + total) / (2 * total)``, which equals ``p / total``.
    """

    def __init__(
        self,
        keywords: KeywordSet = DEFAULT_KEYWORDS,
        *,
        positive_threshold: float = 0.6,
        negative_threshold: float = 0.4,
    ) -> None:
        if negative_threshold > positive_threshold:
            raise ValueError("negative_threshold must not exceed positive_threshold")
        self._keywords = keywords.normalized()
        self._positive_threshold = positive_threshold
        self._negative_threshold = negative_threshold

    @property
    def parties(self) -> Tuple[str, ...]:
        return tuple(self._keywords.parties)

    def classify(self, text: str) -> Classification:
        lowered = (text or "").lower()
        sentiment, score, positive_hits, negative_hits = self._score(lowered)
        return Classification(
            party_mentions=self._detect_parties(lowered),
            sentiment=sentiment,
            sentiment_score=score,
            election_relevant=any(keyword in lowered for keyword in self._keywords.election),
            positive_hits=positive_hits,
            negative_hits=negative_hits,
            category=_first_match(lowered, self._keywords.categories, DEFAULT_CATEGORY),
            impact=_first_match(lowered, self._keywords.impacts, DEFAULT_IMPACT),
        )

    def categorize(self, text: str) -> str:
        return _first_match((text or "").lower(), self._keywords.categories, DEFAULT_CATEGORY)

    def assess_impact(self, text: str) -> str:
        return _first_match((text or "").lower(), self._keywords.impacts, DEFAULT_IMPACT)

    def detect_parties(self, text: str) -> FrozenSet[str]:
        return self._detect_parties((text or "").lower())

    def is_election_relevant(self, text: str) -> bool:
        lowered = (text or "").lower()
        return any(keyword in lowered for keyword in self._keywords.election)

    def _detect_parties(self, lowered: str) -> FrozenSet[str]:
        return frozenset(
            party
            for party, keywords in self._keywords.parties.items()
            if any(keyword in lowered for keyword in keywords)
        )

    def _score(self, lowered: str) -> Tuple[Sentiment, float, int, int]:
        positive_hits = sum(1 for word in self._keywords.positive if word in lowered)
        negative_hits = sum(1 for word in self._keywords.negative if word in lowered)
        total = positive_hits + negative_hits
        if total == 0:
            return Sentiment.NEUTRAL, NEUTRAL_SCORE, 0, 0

        score = (positive_hits - negative_hits + total) / (2 * total)
        if score > self._positive_threshold:
            label = Sentiment.POSITIVE
        elif score < self._negative_threshold:
            label = Sentiment.NEGATIVE
        else:
            label = Sentiment.NEUTRAL
        return label, score, positive_hits, negative_hits


def _first_match(lowered: str, rules: Tuple[Tuple[str, Tuple[str, ...]], ...], default: str) -> str:
    for label, keywords in rules:
        if any(keyword in lowered for keyword in keywords):
            return label
    return default


_DEFAULT_CLASSIFIER = TextClassifier()


def classify(text: str) -> Classification:
    """Classify ``text`` with the default keyword set."""

    return _DEFAULT_CLASSIFIER.classify(text)


def build_signal(
    item: Union[FeedItem, Mapping[str, object]],
    registry: ConstituencyRegistry,
    classifier: Optional[TextClassifier] = None,
) -> TextSignal:
    """Classify a feed item and attach its constituency/district hints."""

    if not isinstance(item, FeedItem):
        item = FeedItem.from_dict(item)
    text = item.text
    if not text:
        LOGGER.warning("Feed item from %s carries no text", item.source_name or "unknown source")
    classification = (classifier or _DEFAULT_CLASSIFIER).classify(text)
    resolution = registry.resolve(text)
    return TextSignal(
        text=text,
        classification=classification,
        language=item.language,
        source_name=item.source_name,
        published_at=item.published_at,
        constituency_id=resolution.constituency_id,
        district=resolution.district,
        resolution=resolution.level,
    )


__all__ = ["NEUTRAL_SCORE", "TextClassifier", "build_signal", "classify"]
