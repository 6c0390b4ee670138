"""Application level helpers for assembling pipeline dependencies."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from .config import AppConfig, LoggingConfig
from .core.types import ElectoralRecord
from .database import Storage, create_storage
from .pipeline import PredictionPipeline
from .prediction import PredictionEngine
from .records import ElectoralRecordStore, sample_records

LOGGER = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig) -> None:
    logging.basicConfig(level=config.level.upper(), format=config.format)


@dataclass(slots=True)
class PipelineResources:
    """Container bundling the objects needed to run the pipeline."""

    pipeline: PredictionPipeline
    store: ElectoralRecordStore
    storage: Storage
    owns_storage: bool = True

    def close(self) -> None:
        if self.owns_storage:
            self.storage.dispose()


def create_pipeline(
    config: AppConfig,
    *,
    storage: Storage | None = None,
    records: Optional[Iterable[ElectoralRecord]] = None,
) -> PipelineResources:
    """Wire storage, record store, engine and pipeline from ``config``.

    When ``records`` is given they are written to storage first. An empty
    database is seeded with the bundled sample dataset.
    """

    owns_storage = storage is None
    storage_instance = storage or create_storage(config.storage.database_url, echo=config.storage.echo_sql)
    if records is not None:
        storage_instance.upsert_records(records)
    elif storage_instance.count_records() == 0:
        LOGGER.info("No electoral records stored yet; seeding the bundled sample dataset")
        storage_instance.upsert_records(sample_records())

    store = ElectoralRecordStore.from_config(storage_instance.load_records(), config.prediction)
    pipeline = PredictionPipeline(
        store,
        engine=PredictionEngine(config.prediction),
        signal_config=config.signals,
        storage=storage_instance,
    )
    return PipelineResources(
        pipeline=pipeline,
        store=store,
        storage=storage_instance,
        owns_storage=owns_storage,
    )


__all__ = ["PipelineResources", "configure_logging", "create_pipeline"]
