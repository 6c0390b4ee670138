"""Aggregation of classified signals per constituency."""
from __future__ import annotations

from .aggregator import (
    EMPTY_SUMMARY,
    AggregationResult,
    Granularity,
    PartySentimentCounts,
    SignalAggregator,
    SignalSummary,
)

__all__ = [
    "AggregationResult",
    "EMPTY_SUMMARY",
    "Granularity",
    "PartySentimentCounts",
    "SignalAggregator",
    "SignalSummary",
]
