"""State-wide reduction, filtering and sorting of prediction runs."""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..config import PredictionConfig
from ..core.types import ConstituencyPrediction, PredictionStats, SeatRange
from .engine import round_half_up


class SeatBucket(str, Enum):
    """Exclusive classification of a single prediction."""

    TRACKED = "tracked"
    OPPOSING = "opposing"
    SWING = "swing"


class PredictionFilter(str, Enum):
    ALL = "all"
    TRACKED = "tracked"
    OPPOSING = "opposing"
    SWING = "swing"


class SortKey(str, Enum):
    MARGIN = "margin"
    TRACKED = "tracked"
    OPPOSING = "opposing"
    NAME = "name"


def seat_bucket(prediction: ConstituencyPrediction, swing_margin: float = 10.0) -> SeatBucket:
    """Place a prediction in exactly one of the swing or leading buckets.

    ``|margin| <= swing_margin`` is a swing seat. Otherwise the party whose
    probability exceeds 50 leads; with probabilities summing to 100 and a
    non-zero margin exactly one of them does.
    """

    if abs(prediction.margin) <= swing_margin:
        return SeatBucket.SWING
    if prediction.tracked_probability > 50:
        return SeatBucket.TRACKED
    return SeatBucket.OPPOSING


def _is_safe(probability: int, margin: int, config: PredictionConfig) -> bool:
    return probability >= config.safe_probability and abs(margin) > config.swing_margin


def _project(leading: int, scale: float, band: float) -> SeatRange:
    return SeatRange(
        low=round_half_up(leading * scale * (1 - band)),
        high=round_half_up(leading * scale * (1 + band)),
    )


def summarize(
    predictions: Sequence[ConstituencyPrediction],
    config: Optional[PredictionConfig] = None,
) -> PredictionStats:
    """Count leading, swing and safe seats and project them onto the full house."""

    config = config or PredictionConfig()
    counts: Dict[SeatBucket, int] = {bucket: 0 for bucket in SeatBucket}
    safe_tracked = safe_opposing = 0
    for prediction in predictions:
        counts[seat_bucket(prediction, config.swing_margin)] += 1
        if _is_safe(prediction.tracked_probability, prediction.margin, config):
            safe_tracked += 1
        if _is_safe(prediction.opposing_probability, prediction.margin, config):
            safe_opposing += 1

    sample_size = len(predictions)
    scale = config.total_seats / sample_size if sample_size else 0.0
    return PredictionStats(
        tracked_leading=counts[SeatBucket.TRACKED],
        opposing_leading=counts[SeatBucket.OPPOSING],
        swing_seats=counts[SeatBucket.SWING],
        safe_tracked=safe_tracked,
        safe_opposing=safe_opposing,
        tracked_seats=_project(counts[SeatBucket.TRACKED], scale, config.projection_band),
        opposing_seats=_project(counts[SeatBucket.OPPOSING], scale, config.projection_band),
        sample_size=sample_size,
        total_seats=config.total_seats,
    )


_SORTS: Dict[SortKey, Callable[[ConstituencyPrediction], object]] = {
    SortKey.MARGIN: lambda p: -abs(p.margin),
    SortKey.TRACKED: lambda p: -p.tracked_probability,
    SortKey.OPPOSING: lambda p: -p.opposing_probability,
    SortKey.NAME: lambda p: p.name.casefold(),
}


def filter_predictions(
    predictions: Iterable[ConstituencyPrediction],
    prediction_filter: PredictionFilter | str = PredictionFilter.ALL,
    sort_key: SortKey | str = SortKey.MARGIN,
    *,
    swing_margin: float = 10.0,
) -> List[ConstituencyPrediction]:
    """Return a new, stably sorted list restricted to one seat bucket."""

    prediction_filter = PredictionFilter(prediction_filter)
    sort_key = SortKey(sort_key)
    if prediction_filter is PredictionFilter.ALL:
        selected = list(predictions)
    else:
        wanted = SeatBucket(prediction_filter.value)
        selected = [p for p in predictions if seat_bucket(p, swing_margin) is wanted]
    return sorted(selected, key=_SORTS[sort_key])


__all__ = [
    "PredictionFilter",
    "SeatBucket",
    "SortKey",
    "filter_predictions",
    "seat_bucket",
    "summarize",
]
