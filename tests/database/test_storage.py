from __future__ import annotations

import pytest

from election_fusion.core.types import ElectoralRecord, Epoch
from election_fusion.database import create_storage
from election_fusion.prediction import PredictionEngine, summarize
from election_fusion.records import ElectoralRecordStore, sample_records


@pytest.fixture()
def storage(tmp_path):
    database_url = f"sqlite:///{(tmp_path / 'fusion.db').as_posix()}"
    storage = create_storage(database_url)
    yield storage
    storage.dispose()


def test_records_round_trip(storage):
    records = sample_records()

    stored = storage.upsert_records(records)
    loaded = storage.load_records()

    assert stored == len(records)
    assert storage.count_records() == len(records)
    assert sorted(loaded, key=lambda r: (r.constituency_id, r.epoch.value)) == sorted(
        records, key=lambda r: (r.constituency_id, r.epoch.value)
    )


def test_upsert_updates_existing_epoch(storage):
    record = ElectoralRecord.from_dict(
        {"constituency_id": "c1", "constituency_name": "Seat", "district": "Nadia", "epoch": "E2021",
         "party_share": {"BJP": 40.0, "TMC": 50.0}}
    )
    corrected = ElectoralRecord.from_dict(
        {"constituency_id": "c1", "constituency_name": "Seat", "district": "Nadia", "epoch": "E2021",
         "party_share": {"BJP": 41.0, "TMC": 49.0}}
    )

    storage.upsert_records([record])
    storage.upsert_records([corrected])

    loaded = storage.load_records()
    assert len(loaded) == 1
    assert loaded[0].epoch is Epoch.E2021
    assert loaded[0].share("BJP") == pytest.approx(41.0)


def test_save_and_load_run(storage):
    store = ElectoralRecordStore(sample_records())
    predictions = PredictionEngine().predict_all(store.histories(), 55, 45)
    stats = summarize(predictions)

    run_id = storage.save_run(
        predictions, stats, news_sentiment_pct=55, ground_report_pct=45, signal_count=12
    )
    loaded = storage.load_run(run_id)

    assert loaded.identifier == run_id
    assert loaded.predictions == predictions
    assert loaded.stats == stats
    assert loaded.news_sentiment_pct == pytest.approx(55)
    assert loaded.ground_report_pct == pytest.approx(45)
    assert loaded.signal_count == 12


def test_load_unknown_run_raises(storage):
    with pytest.raises(ValueError):
        storage.load_run(999)


def test_list_runs_returns_newest_first(storage):
    store = ElectoralRecordStore(sample_records())
    engine = PredictionEngine()
    first = engine.predict_all(store.histories(), 50, 50)
    second = engine.predict_all(store.histories()[:3], 60, 50)

    first_id = storage.save_run(first, summarize(first), news_sentiment_pct=50, ground_report_pct=50)
    second_id = storage.save_run(second, summarize(second), news_sentiment_pct=60, ground_report_pct=50)

    overview = storage.list_runs()

    assert [run.identifier for run in overview] == [second_id, first_id]
    assert overview[0].prediction_count == 3
    assert overview[1].prediction_count == 16
    assert overview[1].tracked_party == "BJP"
    assert overview[1].opposing_party == "TMC"
    stats = summarize(first)
    assert (overview[1].tracked_leading, overview[1].opposing_leading, overview[1].swing_seats) == (
        stats.tracked_leading,
        stats.opposing_leading,
        stats.swing_seats,
    )
