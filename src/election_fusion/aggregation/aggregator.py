"""Per-constituency aggregation of classified text signals."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Tuple
import logging

from ..core.types import ResolutionLevel, Sentiment, TextSignal
from ..registry import ConstituencyRegistry

LOGGER = logging.getLogger(__name__)


class Granularity(str, Enum):
    """Whether district-level signals are pushed down to a constituency."""

    CONSTITUENCY = "constituency"
    DISTRICT = "district"


def _percent(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 1)


@dataclass(frozen=True, slots=True)
class PartySentimentCounts:
    """Sentiment counts over the signals that mention one party."""

    positive: int = 0
    negative: int = 0
    neutral: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral

    def add(self, sentiment: Sentiment) -> "PartySentimentCounts":
        return PartySentimentCounts(
            positive=self.positive + (sentiment is Sentiment.POSITIVE),
            negative=self.negative + (sentiment is Sentiment.NEGATIVE),
            neutral=self.neutral + (sentiment is Sentiment.NEUTRAL),
        )

    def merge(self, other: "PartySentimentCounts") -> "PartySentimentCounts":
        return PartySentimentCounts(
            positive=self.positive + other.positive,
            negative=self.negative + other.negative,
            neutral=self.neutral + other.neutral,
        )

    def distribution(self) -> Dict[str, float]:
        total = self.total
        return {
            Sentiment.POSITIVE.value: _percent(self.positive, total),
            Sentiment.NEGATIVE.value: _percent(self.negative, total),
            Sentiment.NEUTRAL.value: _percent(self.neutral, total),
        }


@dataclass(frozen=True, slots=True)
class SignalSummary:
    """Counts over a group of signals; summaries merge associatively."""

    total: int = 0
    positive: int = 0
    negative: int = 0
    neutral: int = 0
    election_relevant: int = 0
    parties: Mapping[str, PartySentimentCounts] = field(default_factory=dict)

    @classmethod
    def from_signals(cls, signals: Iterable[TextSignal]) -> "SignalSummary":
        summary = cls()
        for signal in signals:
            summary = summary.add(signal)
        return summary

    def add(self, signal: TextSignal) -> "SignalSummary":
        sentiment = signal.sentiment
        parties = dict(self.parties)
        for party in signal.party_mentions:
            parties[party] = parties.get(party, PartySentimentCounts()).add(sentiment)
        return SignalSummary(
            total=self.total + 1,
            positive=self.positive + (sentiment is Sentiment.POSITIVE),
            negative=self.negative + (sentiment is Sentiment.NEGATIVE),
            neutral=self.neutral + (sentiment is Sentiment.NEUTRAL),
            election_relevant=self.election_relevant + bool(signal.classification.election_relevant),
            parties=parties,
        )

    def merge(self, other: "SignalSummary") -> "SignalSummary":
        parties = dict(self.parties)
        for party, counts in other.parties.items():
            parties[party] = parties.get(party, PartySentimentCounts()).merge(counts)
        return SignalSummary(
            total=self.total + other.total,
            positive=self.positive + other.positive,
            negative=self.negative + other.negative,
            neutral=self.neutral + other.neutral,
            election_relevant=self.election_relevant + other.election_relevant,
            parties=parties,
        )

    def party(self, name: str) -> PartySentimentCounts:
        return self.parties.get(name, PartySentimentCounts())

    def sentiment_distribution(self) -> Dict[str, float]:
        return {
            Sentiment.POSITIVE.value: _percent(self.positive, self.total),
            Sentiment.NEGATIVE.value: _percent(self.negative, self.total),
            Sentiment.NEUTRAL.value: _percent(self.neutral, self.total),
        }

    def news_sentiment_percent(self, tracked_party: str, opposing_party: str) -> float:
        """Favourability of the coverage for ``tracked_party`` on a 0-100 scale.

        Positive mentions of the tracked party and negative mentions of the
        opposing party count in favour, the reverse counts against. Without
        any polar mention the result is the neutral 50.
        """

        tracked = self.party(tracked_party)
        opposing = self.party(opposing_party)
        favourable = tracked.positive + opposing.negative
        unfavourable = tracked.negative + opposing.positive
        if favourable + unfavourable == 0:
            return 50.0
        return round(favourable / (favourable + unfavourable) * 100, 1)


EMPTY_SUMMARY = SignalSummary()


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """Signal summaries per constituency, per district and for the state."""

    by_constituency: Mapping[str, SignalSummary]
    by_district: Mapping[str, SignalSummary]
    statewide: SignalSummary
    total_signals: int

    def constituency(self, constituency_id: str) -> SignalSummary:
        return self.by_constituency.get(constituency_id, EMPTY_SUMMARY)

    def district(self, district: str) -> SignalSummary:
        return self.by_district.get(district, EMPTY_SUMMARY)


class SignalAggregator:
    """Group classified signals by the place they were attributed to.

    Signals resolved to a constituency count for it and its district.
    District-level signals count for the district and, at constituency
    granularity, for the district's representative constituency (the first
    id in sorted order). Everything else lands in the state-wide bucket.
    Use :meth:`add` and :meth:`result` for streaming or :meth:`aggregate` for
    a batch; both produce the same counts in any input order.
    """

    def __init__(
        self,
        registry: ConstituencyRegistry,
        *,
        granularity: Granularity | str = Granularity.CONSTITUENCY,
    ) -> None:
        self._registry = registry
        self._granularity = Granularity(granularity)
        self._by_constituency: Dict[str, SignalSummary] = {}
        self._by_district: Dict[str, SignalSummary] = {}
        self._statewide = EMPTY_SUMMARY
        self._total = 0

    @property
    def granularity(self) -> Granularity:
        return self._granularity

    def locate(self, signal: TextSignal) -> Tuple[Optional[str], Optional[str]]:
        """Return the ``(constituency_id, district)`` a signal is counted under."""

        if signal.resolution is ResolutionLevel.CONSTITUENCY and signal.constituency_id in self._registry:
            constituency = self._registry.get(signal.constituency_id)
            return constituency.id, constituency.district
        district = signal.district
        if signal.resolution is ResolutionLevel.STATEWIDE or not self._registry.members(district or ""):
            return None, None
        if self._granularity is Granularity.CONSTITUENCY:
            return self._registry.representative(district), district
        return None, district

    def add(self, signal: TextSignal) -> None:
        self._total += 1
        constituency_id, district = self.locate(signal)
        if district is None:
            self._statewide = self._statewide.add(signal)
            return
        self._by_district[district] = self._by_district.get(district, EMPTY_SUMMARY).add(signal)
        if constituency_id is not None:
            self._by_constituency[constituency_id] = self._by_constituency.get(
                constituency_id, EMPTY_SUMMARY
            ).add(signal)

    def result(self) -> AggregationResult:
        return AggregationResult(
            by_constituency=dict(self._by_constituency),
            by_district=dict(self._by_district),
            statewide=self._statewide,
            total_signals=self._total,
        )

    def reset(self) -> None:
        self._by_constituency.clear()
        self._by_district.clear()
        self._statewide = EMPTY_SUMMARY
        self._total = 0

    def aggregate(self, signals: Iterable[TextSignal]) -> AggregationResult:
        """Aggregate ``signals`` in one batch without touching streaming state."""

        batch = SignalAggregator(self._registry, granularity=self._granularity)
        for signal in signals:
            batch.add(signal)
        result = batch.result()
        LOGGER.debug(
            "Aggregated %s signals: %s constituencies, %s districts, %s state-wide",
            result.total_signals,
            len(result.by_constituency),
            len(result.by_district),
            result.statewide.total,
        )
        return result

    def for_constituency(self, signals: Iterable[TextSignal], constituency_id: str) -> SignalSummary:
        return SignalSummary.from_signals(
            signal for signal in signals if self.locate(signal)[0] == constituency_id
        )

    def for_district(self, signals: Iterable[TextSignal], district: str) -> SignalSummary:
        return SignalSummary.from_signals(
            signal for signal in signals if self.locate(signal)[1] == district
        )


__all__ = [
    "AggregationResult",
    "EMPTY_SUMMARY",
    "Granularity",
    "PartySentimentCounts",
    "SignalAggregator",
    "SignalSummary",
]
