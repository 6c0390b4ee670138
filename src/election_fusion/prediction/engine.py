"""Fusion of historical vote shares with sentiment into win probabilities."""
from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping, Optional, Tuple

from ..config import PredictionConfig
from ..core.types import (
    ConstituencyHistory,
    ConstituencyPrediction,
    PredictionFactors,
    Trend,
)
from .issues import key_issues

LOGGER = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going towards positive infinity."""

    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def determine_trend(swing: float, threshold: float = 3.0) -> Trend:
    if swing > threshold:
        return Trend.RISING
    if swing < -threshold:
        return Trend.FALLING
    return Trend.STABLE


def calculate_confidence(
    margin: float,
    has_byelection: bool,
    *,
    base: float = 60.0,
    per_margin_point: float = 1.5,
    byelection_bonus: int = 10,
    maximum: int = 95,
) -> int:
    score = round_half_up(base + abs(margin) * per_margin_point)
    if has_byelection:
        score += byelection_bonus
    return min(maximum, score)


class PredictionEngine:
    """Two-party win-probability model over the multi-epoch history.

    The tracked party's score blends its by-election and 2021 shares with the
    news and ground-report adjustments; the opposing score mirrors it with the
    complementary scalars. Scores are normalised into a clamped probability.
    """

    def __init__(self, config: Optional[PredictionConfig] = None) -> None:
        self.config = config or PredictionConfig()

    @property
    def tracked_party(self) -> str:
        return self.config.tracked_party

    @property
    def opposing_party(self) -> str:
        return self.config.opposing_party

    def win_probability(
        self,
        history: ConstituencyHistory,
        news_sentiment_pct: float = 50.0,
        ground_report_pct: float = 50.0,
    ) -> Tuple[int, int]:
        """Return ``(tracked, opposing)`` probabilities that always sum to 100."""

        config = self.config
        tracked, opposing = config.tracked_party, config.opposing_party
        has_byelection = history.has_byelection(tracked)
        weights = config.weights(has_byelection)

        tracked_2021 = history.assembly_2021.share(tracked) or 0.0
        opposing_2021 = history.assembly_2021.share(opposing)
        if opposing_2021 is None:
            opposing_2021 = 100.0 - tracked_2021

        sentiment_adjustment = (news_sentiment_pct - 50) * config.sentiment_scale
        ground_adjustment = (ground_report_pct - 50) * config.ground_scale
        opposing_sentiment_adjustment = (50 - news_sentiment_pct) * config.sentiment_scale
        opposing_ground_adjustment = (50 - ground_report_pct) * config.ground_scale

        tracked_score = (
            tracked_2021 * weights.assembly
            + sentiment_adjustment * weights.news * 100
            + ground_adjustment * weights.ground * 100
        )
        opposing_score = (
            opposing_2021 * weights.assembly
            + opposing_sentiment_adjustment * weights.news * 100
            + opposing_ground_adjustment * weights.ground * 100
        )
        if has_byelection:
            byelection = history.byelection_2025
            tracked_by = byelection.share(tracked) or 0.0
            opposing_by = byelection.share(opposing)
            if not opposing_by:
                opposing_by = 100.0 - tracked_by
            tracked_score += tracked_by * weights.byelection
            opposing_score += opposing_by * weights.byelection

        total = tracked_score + opposing_score
        ratio = tracked_score / total * 100 if total > 0 else 50.0
        tracked_probability = round_half_up(clamp(ratio, config.min_probability, config.max_probability))
        return tracked_probability, 100 - tracked_probability

    def predict(
        self,
        history: ConstituencyHistory,
        news_sentiment_pct: float = 50.0,
        ground_report_pct: float = 50.0,
        *,
        signal_count: int = 0,
    ) -> ConstituencyPrediction:
        config = self.config
        tracked, opposing = config.tracked_party, config.opposing_party
        has_byelection = history.has_byelection(tracked)

        tracked_probability, opposing_probability = self.win_probability(
            history, news_sentiment_pct, ground_report_pct
        )
        margin = tracked_probability - opposing_probability
        swing = history.byelection_swing(tracked) if has_byelection else history.swing_2021_to_2024(tracked)
        swing = round(swing, 2)

        baseline = history.assembly_2021
        byelection = history.byelection_2025
        tracked_2021 = baseline.share(tracked) or 0.0
        opposing_2021 = baseline.share(opposing)

        prediction = ConstituencyPrediction(
            constituency_id=history.constituency_id,
            name=history.name,
            district=history.district,
            tracked_party=tracked,
            opposing_party=opposing,
            tracked_probability=tracked_probability,
            opposing_probability=opposing_probability,
            margin=margin,
            trend=determine_trend(swing, config.trend_threshold),
            confidence=calculate_confidence(
                margin,
                has_byelection,
                base=config.confidence_base,
                per_margin_point=config.confidence_per_margin_point,
                byelection_bonus=config.byelection_confidence_bonus,
                maximum=config.max_confidence,
            ),
            has_byelection_data=has_byelection,
            swing=swing,
            key_issues=key_issues(history.district, history.latest_winner(), tracked, opposing),
            factors=PredictionFactors(
                media_sentiment=round_half_up(40 + news_sentiment_pct * 0.4),
                ground_report=ground_report_pct,
                historical_pattern=round_half_up(tracked_2021),
                signal_count=signal_count,
            ),
            total_voters=round_half_up(baseline.total_votes * config.voter_growth),
            is_urban=history.district in config.urban_district_set,
            tracked_share_2021=tracked_2021,
            opposing_share_2021=opposing_2021 if opposing_2021 is not None else round(100.0 - tracked_2021, 2),
            tracked_share_2024=history.federal_2024.share(tracked) or 0.0,
            tracked_share_2025=byelection.share(tracked) if byelection is not None else None,
            opposing_share_2025=byelection.share(opposing) if byelection is not None else None,
            winner_2021=baseline.winner,
            winner_2025=byelection.winner if byelection is not None else None,
        )
        LOGGER.debug(
            "Predicted %s: %s=%s%% %s=%s%% (byelection=%s, trend=%s)",
            history.constituency_id,
            tracked,
            tracked_probability,
            opposing,
            opposing_probability,
            has_byelection,
            prediction.trend.value,
        )
        return prediction

    def predict_all(
        self,
        histories: Iterable[ConstituencyHistory],
        news_sentiment_pct: float = 50.0,
        ground_report_pct: float = 50.0,
        *,
        news_by_constituency: Optional[Mapping[str, float]] = None,
        ground_reports: Optional[Mapping[str, float]] = None,
        signal_counts: Optional[Mapping[str, int]] = None,
    ) -> Tuple[ConstituencyPrediction, ...]:
        """Predict every constituency; per-id mappings override the global scalars."""

        news_by_constituency = news_by_constituency or {}
        ground_reports = ground_reports or {}
        signal_counts = signal_counts or {}
        predictions = tuple(
            self.predict(
                history,
                news_by_constituency.get(history.constituency_id, news_sentiment_pct),
                ground_reports.get(history.constituency_id, ground_report_pct),
                signal_count=signal_counts.get(history.constituency_id, 0),
            )
            for history in histories
        )
        LOGGER.info("Generated %s constituency predictions", len(predictions))
        return predictions


__all__ = [
    "PredictionEngine",
    "calculate_confidence",
    "clamp",
    "determine_trend",
    "round_half_up",
]
