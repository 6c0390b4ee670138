import json

import pytest

import election_fusion.config.settings as config_settings
from election_fusion.config import (
    AppConfig,
    LoggingConfig,
    PredictionConfig,
    SignalConfig,
    StorageConfig,
    load_config,
    resolve_config_path,
    save_config,
)


@pytest.fixture(autouse=True)
def isolated_config_locations(tmp_path, monkeypatch):
    monkeypatch.setattr(
        config_settings,
        "_DEFAULT_CONFIG_LOCATIONS",
        (tmp_path / "fusion.json", tmp_path / "config.json"),
    )


def test_defaults_match_the_documented_model():
    config = load_config()

    assert config.prediction.tracked_party == "BJP"
    assert config.prediction.opposing_party == "TMC"
    assert config.prediction.min_probability == pytest.approx(20.0)
    assert config.prediction.max_probability == pytest.approx(75.0)
    assert config.prediction.total_seats == 294
    assert config.signals.positive_threshold == pytest.approx(0.6)
    assert config.signals.negative_threshold == pytest.approx(0.4)
    assert config.signals.per_constituency_sentiment is False
    assert config.logging.level == "INFO"


def test_environment_values_are_coerced(monkeypatch):
    monkeypatch.setenv("FUSION_PREDICTION_TOTAL_SEATS", "300")
    monkeypatch.setenv("FUSION_PREDICTION_MAX_PROBABILITY", "80.5")
    monkeypatch.setenv("FUSION_SIGNALS_PER_CONSTITUENCY_SENTIMENT", "yes")
    monkeypatch.setenv("FUSION_STORAGE_ECHO_SQL", "true")
    monkeypatch.setenv("FUSION_SIGNALS_GRANULARITY", "district")

    config = load_config()

    assert config.prediction.total_seats == 300 and isinstance(config.prediction.total_seats, int)
    assert config.prediction.max_probability == pytest.approx(80.5)
    assert config.signals.per_constituency_sentiment is True
    assert config.signals.granularity == "district"
    assert config.storage.echo_sql is True


def test_invalid_boolean_environment_value_raises(monkeypatch):
    monkeypatch.setenv("FUSION_STORAGE_ECHO_SQL", "definitely")

    with pytest.raises(ValueError):
        load_config()


def test_invalid_float_environment_value_raises(monkeypatch):
    monkeypatch.setenv("FUSION_PREDICTION_SWING_MARGIN", "wide")

    with pytest.raises(ValueError):
        load_config()


def test_config_file_values_are_used(tmp_path):
    path = tmp_path / "explicit.json"
    path.write_text(
        json.dumps({"prediction": {"safe_probability": "60", "tracked_party": "INC"}}),
        encoding="utf8",
    )

    config = load_config(path)

    assert config.prediction.safe_probability == pytest.approx(60.0)
    assert config.prediction.tracked_party == "INC"
    assert config.prediction.opposing_party == "TMC"


def test_environment_overrides_config_file(tmp_path, monkeypatch):
    path = tmp_path / "explicit.json"
    path.write_text(json.dumps({"storage": {"database_url": "sqlite:///file.db"}}), encoding="utf8")
    monkeypatch.setenv("FUSION_STORAGE_DATABASE_URL", "sqlite:///env.db")

    config = load_config(path)

    assert config.storage.database_url == "sqlite:///env.db"


def test_invalid_probability_bounds_are_rejected():
    with pytest.raises(ValueError):
        PredictionConfig(min_probability=80.0, max_probability=70.0)


def test_identical_parties_are_rejected():
    with pytest.raises(ValueError):
        PredictionConfig(tracked_party="TMC", opposing_party="TMC")


def test_unknown_granularity_is_rejected():
    with pytest.raises(ValueError):
        SignalConfig(granularity="ward")


def test_weights_select_branch():
    config = PredictionConfig()

    with_byelection = config.weights(True)
    without_byelection = config.weights(False)

    assert (with_byelection.byelection, with_byelection.assembly) == (0.50, 0.35)
    assert (with_byelection.news, with_byelection.ground) == (0.10, 0.05)
    assert without_byelection.byelection == 0.0
    assert (without_byelection.assembly, without_byelection.news, without_byelection.ground) == (0.80, 0.15, 0.05)


def test_urban_districts_from_environment_are_split(monkeypatch):
    monkeypatch.setenv("FUSION_PREDICTION_URBAN_DISTRICTS", " Kolkata , Howrah,,")

    config = load_config()

    assert config.prediction.urban_districts == ("Kolkata", "Howrah")
    assert config.prediction.urban_district_set == frozenset({"Kolkata", "Howrah"})


def test_urban_districts_from_file_become_a_tuple(tmp_path):
    path = tmp_path / "explicit.json"
    path.write_text(json.dumps({"prediction": {"urban_districts": ["Siliguri", "Asansol"]}}), encoding="utf8")

    config = load_config(path)

    assert config.prediction.urban_districts == ("Siliguri", "Asansol")


def test_unknown_settings_are_ignored_with_warning(tmp_path, caplog):
    path = tmp_path / "explicit.json"
    path.write_text(
        json.dumps({"prediction": {"total_seats": 200, "seat_count": 1}, "ui": {"theme": "dark"}}),
        encoding="utf8",
    )

    with caplog.at_level("WARNING"):
        config = load_config(path)

    assert config.prediction.total_seats == 200
    assert "seat_count" in caplog.text
    assert "ui" in caplog.text


def test_config_file_must_hold_an_object(tmp_path):
    path = tmp_path / "explicit.json"
    path.write_text(json.dumps(["prediction"]), encoding="utf8")

    with pytest.raises(ValueError):
        load_config(path)


def test_boolean_is_not_read_as_number(tmp_path):
    path = tmp_path / "explicit.json"
    path.write_text(json.dumps({"prediction": {"swing_margin": True}}), encoding="utf8")

    with pytest.raises(ValueError):
        load_config(path)


def test_resolve_config_path_prefers_existing_file(tmp_path):
    first = tmp_path / "fusion.json"
    second = tmp_path / "config.json"

    assert resolve_config_path(None) == second

    first.write_text("{}", encoding="utf8")
    assert resolve_config_path(None) == first
    explicit = tmp_path / "elsewhere.json"
    assert resolve_config_path(explicit) == explicit


def test_save_config_writes_json(tmp_path):
    target = tmp_path / "settings" / "fusion.json"

    config = AppConfig(
        prediction=PredictionConfig(total_seats=250, opposing_party="INC"),
        signals=SignalConfig(granularity="district"),
        storage=StorageConfig(database_url="sqlite:///demo.db", echo_sql=True),
        logging=LoggingConfig(level="DEBUG"),
    )

    saved_path = save_config(config, target)
    assert saved_path == target
    data = json.loads(target.read_text(encoding="utf8"))
    assert data["prediction"]["total_seats"] == 250
    assert data["prediction"]["opposing_party"] == "INC"
    assert data["signals"]["granularity"] == "district"
    assert data["storage"]["echo_sql"] is True
    assert data["logging"]["level"] == "DEBUG"

    reloaded = load_config(target)
    assert reloaded.prediction.total_seats == 250
    assert reloaded.signals.granularity == "district"
