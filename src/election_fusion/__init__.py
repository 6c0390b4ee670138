"""Fusion of multilingual text signals with electoral history into seat predictions."""
from __future__ import annotations

from .aggregation import AggregationResult, Granularity, SignalAggregator, SignalSummary
from .classification import TextClassifier, build_signal, classify
from .config import AppConfig, LoggingConfig, PredictionConfig, SignalConfig, StorageConfig, load_config
from .core import (
    Classification,
    ConstituencyHistory,
    ConstituencyPrediction,
    ElectoralRecord,
    Epoch,
    FeedItem,
    PredictionStats,
    Sentiment,
    TextSignal,
    Trend,
)
from .database import Storage, create_storage
from .pipeline import PipelineEvent, PredictionPipeline, PredictionRun
from .prediction import PredictionEngine, PredictionFilter, SortKey, filter_predictions, summarize
from .records import ElectoralDataError, ElectoralRecordStore, UnknownConstituencyError, sample_records
from .registry import ConstituencyRegistry
from .runtime import PipelineResources, configure_logging, create_pipeline

__all__ = [
    "AggregationResult",
    "AppConfig",
    "Classification",
    "ConstituencyHistory",
    "ConstituencyPrediction",
    "ConstituencyRegistry",
    "ElectoralDataError",
    "ElectoralRecord",
    "ElectoralRecordStore",
    "Epoch",
    "FeedItem",
    "Granularity",
    "LoggingConfig",
    "PipelineEvent",
    "PipelineResources",
    "PredictionConfig",
    "PredictionEngine",
    "PredictionFilter",
    "PredictionPipeline",
    "PredictionRun",
    "PredictionStats",
    "Sentiment",
    "SignalAggregator",
    "SignalConfig",
    "SignalSummary",
    "SortKey",
    "Storage",
    "StorageConfig",
    "TextClassifier",
    "TextSignal",
    "Trend",
    "UnknownConstituencyError",
    "build_signal",
    "classify",
    "configure_logging",
    "create_pipeline",
    "create_storage",
    "filter_predictions",
    "load_config",
    "sample_records",
    "summarize",
]
