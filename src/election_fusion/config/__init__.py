"""Configuration helpers for the prediction engine."""
from __future__ import annotations

from .settings import (
    AppConfig,
    LoggingConfig,
    PredictionConfig,
    SignalConfig,
    StorageConfig,
    WeightSet,
    load_config,
    resolve_config_path,
    save_config,
)

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "PredictionConfig",
    "SignalConfig",
    "StorageConfig",
    "WeightSet",
    "load_config",
    "resolve_config_path",
    "save_config",
]
