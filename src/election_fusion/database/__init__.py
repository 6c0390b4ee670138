"""Database integration components."""
from __future__ import annotations

from .models import Base, ElectoralRecordModel, PredictionModel, PredictionRunModel
from .storage import RunOverview, Storage, StoredRun, create_storage

__all__ = [
    "Base",
    "ElectoralRecordModel",
    "PredictionModel",
    "PredictionRunModel",
    "RunOverview",
    "Storage",
    "StoredRun",
    "create_storage",
]
