"""Typed domain objects shared by the signal and prediction stages."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple


class Sentiment(str, Enum):
    """Polarity label attached to a classified signal."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class Epoch(str, Enum):
    """Historical election events contributing vote-share snapshots."""

    E2021 = "E2021"
    E2024 = "E2024"
    E2025_BYELECTION = "E2025_BYELECTION"


class Trend(str, Enum):
    RISING = "rising"
    FALLING = "falling"
    STABLE = "stable"


class ResolutionLevel(str, Enum):
    """How precisely a signal could be attributed to a place."""

    CONSTITUENCY = "constituency"
    DISTRICT = "district"
    STATEWIDE = "statewide"


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def leading_party(party_share: Mapping[str, float]) -> Tuple[Optional[str], float]:
    """Return the party with the highest share and its lead over the runner-up."""

    if not party_share:
        return None, 0.0
    ranked = sorted(party_share.items(), key=lambda item: (-item[1], item[0]))
    winner, top = ranked[0]
    runner_up = ranked[1][1] if len(ranked) > 1 else 0.0
    return winner, round(top - runner_up, 2)


@dataclass(slots=True)
class FeedItem:
    """Raw text record as produced by the ingestion collaborator."""

    title: str
    description: Optional[str] = None
    content: Optional[str] = None
    published_at: Optional[datetime] = None
    source_name: Optional[str] = None
    language: str = "en"

    @property
    def text(self) -> str:
        parts = (self.title, self.description, self.content)
        return " ".join(part.strip() for part in parts if part and part.strip())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FeedItem":
        """Build a feed item from the loosely shaped dictionaries feeds deliver."""

        source = data.get("source")
        if isinstance(source, Mapping):
            source_name = source.get("name")
        else:
            source_name = data.get("source_name") or data.get("sourceName") or source
        return cls(
            title=str(data.get("title") or ""),
            description=data.get("description") or data.get("summary"),
            content=data.get("content"),
            published_at=_parse_datetime(data.get("published_at") or data.get("publishedAt")),
            source_name=source_name,
            language=str(data.get("language") or "en"),
        )


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of running the keyword classifier over one text."""

    party_mentions: FrozenSet[str]
    sentiment: Sentiment
    sentiment_score: float
    election_relevant: bool = False
    positive_hits: int = 0
    negative_hits: int = 0
    category: str = "Social"
    impact: str = "Medium"

    def mentions(self, party: str) -> bool:
        return party in self.party_mentions


@dataclass(frozen=True, slots=True)
class TextSignal:
    """One classified unit of text together with its place attribution."""

    text: str
    classification: Classification
    language: str = "en"
    source_name: Optional[str] = None
    published_at: Optional[datetime] = None
    constituency_id: Optional[str] = None
    district: Optional[str] = None
    resolution: ResolutionLevel = ResolutionLevel.STATEWIDE

    @property
    def party_mentions(self) -> FrozenSet[str]:
        return self.classification.party_mentions

    @property
    def sentiment(self) -> Sentiment:
        return self.classification.sentiment

    @property
    def sentiment_score(self) -> float:
        return self.classification.sentiment_score

    @property
    def priority(self) -> str:
        return "high" if self.classification.election_relevant else "medium"

    @property
    def tags(self) -> Tuple[str, ...]:
        tags = ["election"] if self.classification.election_relevant else []
        tags.extend(sorted(self.party_mentions))
        return tuple(tags)

    @property
    def category(self) -> str:
        return self.classification.category

    @property
    def impact(self) -> str:
        return self.classification.impact


@dataclass(frozen=True, slots=True)
class Constituency:
    """Registry entry for one electoral constituency."""

    id: str
    name: str
    district: str
    aliases: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ElectoralRecord:
    """Vote shares of one constituency in one election epoch."""

    constituency_id: str
    constituency_name: str
    district: str
    epoch: Epoch
    party_share: Mapping[str, float]
    winner: Optional[str] = None
    margin: float = 0.0
    total_votes: int = 0
    synthesized: bool = False

    def share(self, party: str) -> Optional[float]:
        return self.party_share.get(party)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ElectoralRecord":
        raw_identifier = data.get("constituency_id") or data.get("constituencyId") or data.get("id")
        if not raw_identifier:
            raise ValueError("Electoral record did not contain a constituency identifier")
        shares = data.get("party_share") or data.get("partyShare") or data.get("shares") or {}
        party_share = {str(party): float(value) for party, value in shares.items()}
        winner, computed_margin = leading_party(party_share)
        margin = data.get("margin")
        return cls(
            constituency_id=str(raw_identifier),
            constituency_name=str(
                data.get("constituency_name") or data.get("constituencyName") or data.get("name") or raw_identifier
            ),
            district=str(data.get("district") or ""),
            epoch=Epoch(data.get("epoch", Epoch.E2021.value)),
            party_share=party_share,
            winner=data.get("winner") or winner,
            margin=float(margin) if margin is not None else computed_margin,
            total_votes=int(data.get("total_votes") or data.get("totalVotes") or 0),
            synthesized=bool(data.get("synthesized", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["epoch"] = self.epoch.value
        data["party_share"] = dict(self.party_share)
        return data


@dataclass(frozen=True, slots=True)
class ConstituencyHistory:
    """All epochs known for one constituency, as consumed by the engine."""

    assembly_2021: ElectoralRecord
    federal_2024: ElectoralRecord
    byelection_2025: Optional[ElectoralRecord] = None

    @property
    def constituency_id(self) -> str:
        return self.assembly_2021.constituency_id

    @property
    def name(self) -> str:
        return self.assembly_2021.constituency_name

    @property
    def district(self) -> str:
        return self.assembly_2021.district

    def has_byelection(self, party: str) -> bool:
        if self.byelection_2025 is None:
            return False
        return (self.byelection_2025.share(party) or 0.0) > 0

    def swing_2021_to_2024(self, party: str) -> float:
        return (self.federal_2024.share(party) or 0.0) - (self.assembly_2021.share(party) or 0.0)

    def byelection_swing(self, party: str) -> float:
        if self.byelection_2025 is None:
            return 0.0
        return (self.byelection_2025.share(party) or 0.0) - (self.federal_2024.share(party) or 0.0)

    def latest_winner(self) -> Optional[str]:
        if self.byelection_2025 is not None and self.byelection_2025.winner:
            return self.byelection_2025.winner
        return self.assembly_2021.winner


@dataclass(frozen=True, slots=True)
class PredictionFactors:
    """Inputs that shaped a prediction, kept for display and audit."""

    media_sentiment: int
    ground_report: float
    historical_pattern: int
    signal_count: int = 0


@dataclass(frozen=True, slots=True)
class ConstituencyPrediction:
    """Win-probability estimate for one constituency in one prediction run."""

    constituency_id: str
    name: str
    district: str
    tracked_party: str
    opposing_party: str
    tracked_probability: int
    opposing_probability: int
    margin: int
    trend: Trend
    confidence: int
    has_byelection_data: bool
    swing: float
    key_issues: Tuple[str, ...] = ()
    factors: Optional[PredictionFactors] = None
    total_voters: int = 0
    is_urban: bool = False
    tracked_share_2021: float = 0.0
    opposing_share_2021: float = 0.0
    tracked_share_2024: float = 0.0
    tracked_share_2025: Optional[float] = None
    opposing_share_2025: Optional[float] = None
    winner_2021: Optional[str] = None
    winner_2025: Optional[str] = None

    def win_probability(self, party: str) -> int:
        if party == self.tracked_party:
            return self.tracked_probability
        if party == self.opposing_party:
            return self.opposing_probability
        raise KeyError(party)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["trend"] = self.trend.value
        data["key_issues"] = list(self.key_issues)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConstituencyPrediction":
        payload = dict(data)
        payload["trend"] = Trend(payload["trend"])
        payload["key_issues"] = tuple(payload.get("key_issues") or ())
        factors = payload.get("factors")
        if isinstance(factors, Mapping):
            payload["factors"] = PredictionFactors(**factors)
        return cls(**payload)


@dataclass(frozen=True, slots=True)
class SeatRange:
    """Low/high band around a projected seat count."""

    low: int
    high: int


@dataclass(frozen=True, slots=True)
class PredictionStats:
    """State-wide reduction of one prediction run."""

    tracked_leading: int
    opposing_leading: int
    swing_seats: int
    safe_tracked: int
    safe_opposing: int
    tracked_seats: SeatRange
    opposing_seats: SeatRange
    sample_size: int
    total_seats: int


@dataclass(frozen=True, slots=True)
class HistoricalSummary:
    """Descriptive statistics over the loaded electoral records."""

    total_constituencies: int
    tracked_won_2021: int
    opposing_won_2021: int
    avg_tracked_share_2021: float
    avg_opposing_share_2021: float
    avg_tracked_share_2024: float
    close_contests_2021: int
    tracked_swing_trend: float
    with_byelection: int
    tracked_won_byelection: int
    opposing_won_byelection: int
    avg_tracked_share_byelection: float


__all__ = [
    "Classification",
    "Constituency",
    "ConstituencyHistory",
    "ConstituencyPrediction",
    "ElectoralRecord",
    "Epoch",
    "FeedItem",
    "HistoricalSummary",
    "PredictionFactors",
    "PredictionStats",
    "ResolutionLevel",
    "SeatRange",
    "Sentiment",
    "TextSignal",
    "Trend",
    "leading_party",
]
