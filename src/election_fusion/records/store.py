"""Validated, read-only access to multi-epoch electoral records."""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import logging

from ..config import PredictionConfig
from ..core.types import ConstituencyHistory, ElectoralRecord, Epoch, HistoricalSummary, leading_party
from ..registry import DEFAULT_ALIASES, DEFAULT_DISTRICT_KEYWORDS, ConstituencyRegistry

LOGGER = logging.getLogger(__name__)


class ElectoralDataError(ValueError):
    """Raised when a record set violates the one-baseline-per-constituency rule."""


class UnknownConstituencyError(KeyError):
    """Raised when a constituency id is not present in the store."""


def synthesize_federal_record(
    baseline: ElectoralRecord,
    *,
    tracked_party: str,
    opposing_party: str,
    swing: float,
) -> ElectoralRecord:
    """Derive a stand-in 2024 record from the 2021 baseline and a fixed swing."""

    shares = dict(baseline.party_share)
    shares[tracked_party] = round(shares.get(tracked_party, 0.0) + swing, 2)
    if opposing_party in shares:
        shares[opposing_party] = round(shares[opposing_party] - swing, 2)
    winner, margin = leading_party(shares)
    return replace(
        baseline,
        epoch=Epoch.E2024,
        party_share=shares,
        winner=winner,
        margin=margin,
        synthesized=True,
    )


class ElectoralRecordStore:
    """Holds exactly one 2021 baseline per constituency plus later epochs.

    The store is built once per prediction run and never mutated afterwards.
    A missing 2024 record is replaced by the baseline shifted by
    ``synthetic_swing`` points in favour of the tracked party.
    """

    def __init__(
        self,
        records: Iterable[ElectoralRecord],
        *,
        tracked_party: str = "BJP",
        opposing_party: str = "TMC",
        synthetic_swing: float = 2.3,
    ) -> None:
        self._tracked_party = tracked_party
        self._opposing_party = opposing_party
        self._synthetic_swing = synthetic_swing
        self._records: Dict[str, Dict[Epoch, ElectoralRecord]] = {}
        for record in records:
            epochs = self._records.setdefault(record.constituency_id, {})
            if record.epoch in epochs:
                raise ElectoralDataError(
                    f"Duplicate {record.epoch.value} record for constituency {record.constituency_id}"
                )
            epochs[record.epoch] = record
        missing = sorted(cid for cid, epochs in self._records.items() if Epoch.E2021 not in epochs)
        if missing:
            raise ElectoralDataError(f"Missing {Epoch.E2021.value} baseline for: {', '.join(missing)}")
        self._histories: Dict[str, ConstituencyHistory] = {
            cid: self._build_history(epochs) for cid, epochs in self._records.items()
        }
        LOGGER.debug("Loaded electoral records for %s constituencies", len(self._histories))

    @classmethod
    def from_config(cls, records: Iterable[ElectoralRecord], config: PredictionConfig) -> "ElectoralRecordStore":
        return cls(
            records,
            tracked_party=config.tracked_party,
            opposing_party=config.opposing_party,
            synthetic_swing=config.synthetic_swing,
        )

    @classmethod
    def from_dicts(cls, rows: Iterable[Mapping[str, object]], **kwargs) -> "ElectoralRecordStore":
        return cls((ElectoralRecord.from_dict(row) for row in rows), **kwargs)

    def __len__(self) -> int:
        return len(self._histories)

    def __contains__(self, constituency_id: object) -> bool:
        return constituency_id in self._histories

    def constituency_ids(self) -> List[str]:
        return sorted(self._histories)

    def history(self, constituency_id: str) -> ConstituencyHistory:
        try:
            return self._histories[constituency_id]
        except KeyError:
            raise UnknownConstituencyError(constituency_id) from None

    def histories(self) -> Tuple[ConstituencyHistory, ...]:
        """All histories ordered by district, then constituency id."""

        return tuple(
            sorted(self._histories.values(), key=lambda history: (history.district, history.constituency_id))
        )

    def records(self) -> Tuple[ElectoralRecord, ...]:
        """The records as supplied, without synthesized epochs."""

        return tuple(
            record
            for cid in sorted(self._records)
            for _, record in sorted(self._records[cid].items(), key=lambda item: item[0].value)
        )

    def registry(
        self,
        *,
        aliases: Mapping[str, Sequence[str]] = DEFAULT_ALIASES,
        district_keywords: Mapping[str, Sequence[str]] = DEFAULT_DISTRICT_KEYWORDS,
    ) -> ConstituencyRegistry:
        return ConstituencyRegistry.from_records(
            (history.assembly_2021 for history in self.histories()),
            aliases=aliases,
            district_keywords=district_keywords,
        )

    def summary(self) -> HistoricalSummary:
        """Descriptive statistics across all loaded constituencies."""

        tracked, opposing = self._tracked_party, self._opposing_party
        histories = list(self._histories.values())
        count = len(histories)

        def _avg(values: Sequence[float]) -> float:
            return round(sum(values) / len(values), 1) if values else 0.0

        tracked_2021 = [h.assembly_2021.share(tracked) or 0.0 for h in histories]
        opposing_2021 = [h.assembly_2021.share(opposing) or 0.0 for h in histories]
        tracked_2024 = [h.federal_2024.share(tracked) or 0.0 for h in histories]
        byelections = [h.byelection_2025 for h in histories if h.byelection_2025 is not None]
        close_contests = sum(1 for t, o in zip(tracked_2021, opposing_2021) if abs(t - o) < 10)
        swing_trend = (
            round(sum(tracked_2024) / count - sum(tracked_2021) / count, 1) if count else 0.0
        )

        return HistoricalSummary(
            total_constituencies=count,
            tracked_won_2021=sum(1 for h in histories if h.assembly_2021.winner == tracked),
            opposing_won_2021=sum(1 for h in histories if h.assembly_2021.winner == opposing),
            avg_tracked_share_2021=_avg(tracked_2021),
            avg_opposing_share_2021=_avg(opposing_2021),
            avg_tracked_share_2024=_avg(tracked_2024),
            close_contests_2021=close_contests,
            tracked_swing_trend=swing_trend,
            with_byelection=len(byelections),
            tracked_won_byelection=sum(1 for record in byelections if record.winner == tracked),
            opposing_won_byelection=sum(1 for record in byelections if record.winner == opposing),
            avg_tracked_share_byelection=_avg([record.share(tracked) or 0.0 for record in byelections]),
        )

    def _build_history(self, epochs: Mapping[Epoch, ElectoralRecord]) -> ConstituencyHistory:
        baseline = epochs[Epoch.E2021]
        federal: Optional[ElectoralRecord] = epochs.get(Epoch.E2024)
        if federal is None:
            LOGGER.debug(
                "No %s record for %s; synthesizing from baseline with %+.1f swing",
                Epoch.E2024.value,
                baseline.constituency_id,
                self._synthetic_swing,
            )
            federal = synthesize_federal_record(
                baseline,
                tracked_party=self._tracked_party,
                opposing_party=self._opposing_party,
                swing=self._synthetic_swing,
            )
        return ConstituencyHistory(
            assembly_2021=baseline,
            federal_2024=federal,
            byelection_2025=epochs.get(Epoch.E2025_BYELECTION),
        )


__all__ = [
    "ElectoralDataError",
    "ElectoralRecordStore",
    "UnknownConstituencyError",
    "synthesize_federal_record",
]
