"""Core domain entities used across the engine."""
from __future__ import annotations

from .types import (
    Classification,
    Constituency,
    ConstituencyHistory,
    ConstituencyPrediction,
    ElectoralRecord,
    Epoch,
    FeedItem,
    HistoricalSummary,
    PredictionFactors,
    PredictionStats,
    ResolutionLevel,
    SeatRange,
    Sentiment,
    TextSignal,
    Trend,
    leading_party,
)

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
