"""Pipeline orchestration components."""
from __future__ import annotations

from .prediction_pipeline import PipelineEvent, PredictionPipeline, PredictionRun, ProgressCallback

__all__ = ["PipelineEvent", "PredictionPipeline", "PredictionRun", "ProgressCallback"]
