from __future__ import annotations

import pytest

from election_fusion.config import PredictionConfig
from election_fusion.core.types import ElectoralRecord, Epoch
from election_fusion.records import (
    ElectoralDataError,
    ElectoralRecordStore,
    UnknownConstituencyError,
    sample_records,
    sample_rows,
    synthesize_federal_record,
)


def _row(epoch: str, shares, identifier: str = "c1", **extra):
    row = {
        "constituency_id": identifier,
        "constituency_name": identifier.upper(),
        "district": "Kolkata",
        "epoch": epoch,
        "party_share": shares,
    }
    row.update(extra)
    return row


def test_record_from_dict_computes_winner_and_margin():
    record = ElectoralRecord.from_dict(_row("E2021", {"BJP": 40.0, "TMC": 52.5, "OTHERS": 7.5}))

    assert record.epoch is Epoch.E2021
    assert record.winner == "TMC"
    assert record.margin == pytest.approx(12.5)
    assert record.share("BJP") == pytest.approx(40.0)
    assert record.share("INC") is None


def test_record_from_dict_requires_identifier():
    with pytest.raises(ValueError):
        ElectoralRecord.from_dict({"epoch": "E2021", "party_share": {"BJP": 1.0}})


def test_missing_federal_record_is_synthesized():
    store = ElectoralRecordStore.from_dicts([_row("E2021", {"BJP": 40.0, "TMC": 50.0, "OTHERS": 10.0})])

    federal = store.history("c1").federal_2024

    assert federal.synthesized is True
    assert federal.epoch is Epoch.E2024
    assert federal.share("BJP") == pytest.approx(42.3)
    assert federal.share("TMC") == pytest.approx(47.7)
    assert federal.share("OTHERS") == pytest.approx(10.0)


def test_synthetic_swing_comes_from_config():
    config = PredictionConfig(synthetic_swing=5.0)
    records = [ElectoralRecord.from_dict(_row("E2021", {"BJP": 40.0, "TMC": 50.0}))]

    store = ElectoralRecordStore.from_config(records, config)

    assert store.history("c1").federal_2024.share("BJP") == pytest.approx(45.0)


def test_synthesis_leaves_missing_opposing_share_absent():
    baseline = ElectoralRecord.from_dict(_row("E2021", {"BJP": 54.25}))

    federal = synthesize_federal_record(baseline, tracked_party="BJP", opposing_party="TMC", swing=2.3)

    assert federal.share("BJP") == pytest.approx(56.55)
    assert federal.share("TMC") is None


def test_provided_federal_record_is_kept():
    store = ElectoralRecordStore.from_dicts(
        [
            _row("E2021", {"BJP": 40.0, "TMC": 50.0}),
            _row("E2024", {"BJP": 45.0, "TMC": 44.0}),
        ]
    )

    history = store.history("c1")

    assert history.federal_2024.synthesized is False
    assert history.swing_2021_to_2024("BJP") == pytest.approx(5.0)


def test_duplicate_epoch_is_rejected():
    with pytest.raises(ElectoralDataError):
        ElectoralRecordStore.from_dicts(
            [
                _row("E2021", {"BJP": 40.0, "TMC": 50.0}),
                _row("E2021", {"BJP": 41.0, "TMC": 49.0}),
            ]
        )


def test_missing_baseline_is_rejected():
    with pytest.raises(ElectoralDataError) as excinfo:
        ElectoralRecordStore.from_dicts([_row("E2024", {"BJP": 40.0, "TMC": 50.0})])

    assert "c1" in str(excinfo.value)


def test_unknown_constituency_raises_key_error():
    store = ElectoralRecordStore(sample_records())

    with pytest.raises(UnknownConstituencyError):
        store.history("wb_unknown")
    with pytest.raises(KeyError):
        store.history("wb_unknown")


def test_byelection_history_helpers():
    store = ElectoralRecordStore(sample_records())

    history = store.history("wb_howrah_uttarpara")

    assert history.has_byelection("BJP") is True
    assert history.byelection_swing("BJP") == pytest.approx(47.9 - 46.5)
    assert history.latest_winner() == "BJP"
    assert history.assembly_2021.winner == "TMC"


def test_sample_dataset_shape():
    rows = sample_rows()
    store = ElectoralRecordStore(sample_records())

    assert len(store) == 16
    assert len(rows) == 16 + 14 + 2
    synthesized = [h.constituency_id for h in store.histories() if h.federal_2024.synthesized]
    assert sorted(synthesized) == ["wb_bardhaman_durgapur", "wb_nadia_ranaghat"]
    assert len(store.records()) == len(rows)


def test_histories_are_ordered_by_district_then_id():
    store = ElectoralRecordStore(sample_records())

    keys = [(h.district, h.constituency_id) for h in store.histories()]

    assert keys == sorted(keys)


def test_summary_statistics():
    store = ElectoralRecordStore.from_dicts(
        [
            _row("E2021", {"BJP": 42.0, "TMC": 50.0}, identifier="a"),
            _row("E2024", {"BJP": 44.0, "TMC": 46.0}, identifier="a"),
            _row("E2021", {"BJP": 55.0, "TMC": 30.0}, identifier="b"),
            _row("E2024", {"BJP": 57.0, "TMC": 29.0}, identifier="b"),
            _row("E2025_BYELECTION", {"BJP": 48.0, "TMC": 45.0}, identifier="a"),
        ]
    )

    summary = store.summary()

    assert summary.total_constituencies == 2
    assert summary.tracked_won_2021 == 1
    assert summary.opposing_won_2021 == 1
    assert summary.avg_tracked_share_2021 == pytest.approx(48.5)
    assert summary.avg_opposing_share_2021 == pytest.approx(40.0)
    assert summary.avg_tracked_share_2024 == pytest.approx(50.5)
    assert summary.close_contests_2021 == 1
    assert summary.tracked_swing_trend == pytest.approx(2.0)
    assert summary.with_byelection == 1
    assert summary.tracked_won_byelection == 1
    assert summary.opposing_won_byelection == 0
    assert summary.avg_tracked_share_byelection == pytest.approx(48.0)


def test_empty_store_summary_is_zero():
    summary = ElectoralRecordStore([]).summary()

    assert summary.total_constituencies == 0
    assert summary.avg_tracked_share_2021 == 0.0
    assert summary.tracked_swing_trend == 0.0


def test_registry_is_derived_from_baselines():
    registry = ElectoralRecordStore(sample_records()).registry()

    assert len(registry) == 16
    assert registry.resolve("Kalighat temple crowd").constituency_id == "wb_kolkata_bhowanipore"
