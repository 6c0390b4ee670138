"""Electoral reference data for prediction runs."""
from __future__ import annotations

from .sample import sample_records, sample_rows
from .store import (
    ElectoralDataError,
    ElectoralRecordStore,
    UnknownConstituencyError,
    synthesize_federal_record,
)

__all__ = [
    "ElectoralDataError",
    "ElectoralRecordStore",
    "UnknownConstituencyError",
    "sample_records",
    "sample_rows",
    "synthesize_federal_record",
]
