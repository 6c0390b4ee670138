"""Prediction engine and run statistics."""
from __future__ import annotations

from .engine import PredictionEngine, calculate_confidence, clamp, determine_trend, round_half_up
from .issues import DEFAULT_ISSUES, DISTRICT_ISSUES, key_issues
from .stats import (
    PredictionFilter,
    SeatBucket,
    SortKey,
    filter_predictions,
    seat_bucket,
    summarize,
)

__all__ = [
    "DEFAULT_ISSUES",
    "DISTRICT_ISSUES",
    "PredictionEngine",
    "PredictionFilter",
    "SeatBucket",
    "SortKey",
    "calculate_confidence",
    "clamp",
    "determine_trend",
    "filter_predictions",
    "key_issues",
    "round_half_up",
    "seat_bucket",
    "summarize",
]
