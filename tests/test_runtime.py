from __future__ import annotations

import logging

import election_fusion.config.settings as config_settings
from election_fusion.config import load_config
from election_fusion.core.types import ElectoralRecord
from election_fusion.database import create_storage
from election_fusion.runtime import configure_logging, create_pipeline


def test_create_pipeline_seeds_empty_database(tmp_path, monkeypatch):
    monkeypatch.setattr(config_settings, "_DEFAULT_CONFIG_LOCATIONS", (tmp_path / "none.json",))
    monkeypatch.setenv("FUSION_STORAGE_DATABASE_URL", f"sqlite:///{(tmp_path / 'runtime.db').as_posix()}")
    config = load_config()

    resources = create_pipeline(config)
    try:
        assert len(resources.store) == 16
        assert resources.storage.count_records() == 32
        run = resources.pipeline.run([{"title": "BJP rally in Siliguri"}])
        assert run.run_id is not None
        assert len(resources.storage.list_runs()) == 1
    finally:
        resources.close()


def test_create_pipeline_uses_supplied_records_and_storage(tmp_path, monkeypatch):
    monkeypatch.setattr(config_settings, "_DEFAULT_CONFIG_LOCATIONS", (tmp_path / "none.json",))
    storage = create_storage(f"sqlite:///{(tmp_path / 'shared.db').as_posix()}")
    records = [
        {
            "constituency_id": "c1",
            "constituency_name": "Seat One",
            "district": "Nadia",
            "epoch": "E2021",
            "party_share": {"BJP": 54.25},
        }
    ]
    resources = create_pipeline(
        load_config(), storage=storage, records=[ElectoralRecord.from_dict(row) for row in records]
    )

    assert resources.owns_storage is False
    assert len(resources.store) == 1
    prediction = resources.pipeline.run().predictions[0]
    assert prediction.tracked_probability == 54
    resources.close()
    storage.dispose()


def test_configure_logging_applies_level(tmp_path, monkeypatch):
    monkeypatch.setattr(config_settings, "_DEFAULT_CONFIG_LOCATIONS", (tmp_path / "none.json",))
    captured = {}

    def fake_basic_config(**kwargs):
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)
    config = load_config().logging
    config.level = "debug"

    configure_logging(config)

    assert captured["level"] == "DEBUG"
    assert captured["format"] == config.format
