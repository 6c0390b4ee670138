"""Application configuration helpers for the prediction engine."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
import types
from typing import Any, Dict, FrozenSet, Optional, Tuple, Type, TypeVar, Union, get_args, get_origin, get_type_hints

LOGGER = logging.getLogger(__name__)

_DEFAULT_CONFIG_LOCATIONS = (
    Path("fusion.json"),
    Path.home() / ".config" / "election-fusion" / "config.json",
)

_ENV_PREFIX = "FUSION_"
_GRANULARITIES = ("constituency", "district")


@dataclass(frozen=True, slots=True)
class WeightSet:
    """Blend weights for one branch of the prediction model."""

    byelection: float
    assembly: float
    news: float
    ground: float


@dataclass(slots=True)
class PredictionConfig:
    """Weights, thresholds and clamps of the prediction model.

    Two weight branches exist: one used when a constituency held a by-election
    (``byelection_*`` fields) and a fallback relying on the 2021 baseline.
    """

    tracked_party: str = "BJP"
    opposing_party: str = "TMC"
    byelection_weight: float = 0.50
    byelection_assembly_weight: float = 0.35
    byelection_news_weight: float = 0.10
    byelection_ground_weight: float = 0.05
    assembly_weight: float = 0.80
    news_weight: float = 0.15
    ground_weight: float = 0.05
    sentiment_scale: float = 0.5
    ground_scale: float = 0.3
    min_probability: float = 20.0
    max_probability: float = 75.0
    trend_threshold: float = 3.0
    synthetic_swing: float = 2.3
    confidence_base: float = 60.0
    confidence_per_margin_point: float = 1.5
    byelection_confidence_bonus: int = 10
    max_confidence: int = 95
    swing_margin: float = 10.0
    safe_probability: float = 55.0
    total_seats: int = 294
    projection_band: float = 0.15
    voter_growth: float = 1.05
    urban_districts: Tuple[str, ...] = ("Kolkata", "Howrah", "North 24 Parganas")

    def __post_init__(self) -> None:
        if self.min_probability > self.max_probability:
            raise ValueError(
                f"min_probability ({self.min_probability}) must not exceed max_probability ({self.max_probability})"
            )
        if self.tracked_party == self.opposing_party:
            raise ValueError("tracked_party and opposing_party must differ")

    def weights(self, has_byelection: bool) -> WeightSet:
        if has_byelection:
            return WeightSet(
                byelection=self.byelection_weight,
                assembly=self.byelection_assembly_weight,
                news=self.byelection_news_weight,
                ground=self.byelection_ground_weight,
            )
        return WeightSet(
            byelection=0.0,
            assembly=self.assembly_weight,
            news=self.news_weight,
            ground=self.ground_weight,
        )

    @property
    def urban_district_set(self) -> FrozenSet[str]:
        return frozenset(self.urban_districts)


@dataclass(slots=True)
class SignalConfig:
    """Classification thresholds and aggregation behaviour."""

    positive_threshold: float = 0.6
    negative_threshold: float = 0.4
    granularity: str = "constituency"
    per_constituency_sentiment: bool = False

    def __post_init__(self) -> None:
        if self.granularity not in _GRANULARITIES:
            raise ValueError(f"granularity must be one of {_GRANULARITIES}, got {self.granularity!r}")


@dataclass(slots=True)
class StorageConfig:
    """Configuration for the record store database."""

    database_url: str = "sqlite:///election_fusion.db"
    echo_sql: bool = False


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(slots=True)
class AppConfig:
    """High level application configuration."""

    prediction: PredictionConfig
    signals: SignalConfig
    storage: StorageConfig
    logging: LoggingConfig


_SECTIONS: Dict[str, Type[Any]] = {
    "prediction": PredictionConfig,
    "signals": SignalConfig,
    "storage": StorageConfig,
    "logging": LoggingConfig,
}

_TRUE_VALUES = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"false", "0", "no", "n", "off"})

T = TypeVar("T")


def _read_config_file(path: Path) -> Dict[str, Dict[str, Any]]:
    """Return the section mappings stored in ``path``; empty when the file is absent."""

    if not path.exists():
        return {}
    with path.open("r", encoding="utf8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a JSON object")

    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        LOGGER.warning("Ignoring unknown configuration sections in %s: %s", path, ", ".join(unknown))

    sections: Dict[str, Dict[str, Any]] = {}
    for name in _SECTIONS:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"Section {name!r} in {path} must be a JSON object")
        sections[name] = section
    return sections


def _env_overrides(name: str, section: Type[Any]) -> Dict[str, str]:
    """Collect ``FUSION_<SECTION>_<FIELD>`` variables for the fields of ``section``."""

    prefix = f"{_ENV_PREFIX}{name.upper()}_"
    overrides: Dict[str, str] = {}
    for field in fields(section):
        value = os.environ.get(prefix + field.name.upper())
        if value is not None:
            overrides[field.name] = value
    return overrides


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
    raise ValueError(f"Cannot convert {value!r} to bool")


def _coerce_value(value: Any, annotation: Any) -> Any:
    """Convert a file or environment value to the field's annotated type.

    Tuples accept JSON arrays as well as comma separated strings, so list
    valued settings can be given through a single environment variable.
    """

    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        candidates = [arg for arg in get_args(annotation) if arg is not type(None)]  # noqa: E721
        errors = []
        for candidate in candidates:
            try:
                return _coerce_value(value, candidate)
            except (TypeError, ValueError) as exc:
                errors.append(str(exc))
        raise ValueError(f"Cannot convert {value!r} to {annotation}: {'; '.join(errors)}")

    target_type = origin or annotation
    if target_type in {Any, object}:
        return value
    if target_type is bool:
        return _to_bool(value)
    if isinstance(value, bool) and target_type in (int, float):
        raise ValueError(f"Refusing to read boolean {value!r} as a number")
    if target_type is int:
        return int(float(value)) if isinstance(value, str) else int(value)
    if target_type is float:
        return float(value)
    if target_type is str:
        return value if isinstance(value, str) else str(value)
    if target_type is tuple:
        if isinstance(value, str):
            value = [item.strip() for item in value.split(",") if item.strip()]
        if not isinstance(value, (list, tuple)):
            raise ValueError(f"Cannot convert {value!r} to a tuple")
        item_args = get_args(annotation)
        item_type = item_args[0] if item_args else Any
        return tuple(_coerce_value(item, item_type) for item in value)
    return value


def _build_section(cls: Type[T], data: Dict[str, Any]) -> T:
    """Instantiate section ``cls`` from ``data``; ``None`` values keep the default."""

    type_hints = get_type_hints(cls)
    known = {field.name for field in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        LOGGER.warning("Ignoring unknown %s settings: %s", cls.__name__, ", ".join(unknown))

    kwargs: Dict[str, Any] = {}
    for name in known & set(data):
        if data[name] is None:
            continue
        try:
            kwargs[name] = _coerce_value(data[name], type_hints[name])
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for {cls.__name__}.{name}: {data[name]!r}") from exc
    return cls(**kwargs)


def resolve_config_path(explicit_path: Optional[Path] = None) -> Path:
    """Return the file :func:`save_config` writes to.

    An explicit path wins. Otherwise the first existing default location is
    used, falling back to ``~/.config/election-fusion/config.json``.
    """

    if explicit_path:
        return explicit_path
    existing = (candidate for candidate in _DEFAULT_CONFIG_LOCATIONS if candidate.exists())
    return next(existing, _DEFAULT_CONFIG_LOCATIONS[-1])


def load_config(explicit_path: Optional[Path] = None) -> AppConfig:
    """Create the application configuration.

    Dataclass defaults are overlaid with the first non-empty configuration
    file and then with ``FUSION_SECTION_FIELD`` environment variables (e.g.
    ``FUSION_PREDICTION_TOTAL_SEATS``).
    """

    if explicit_path:
        file_data = _read_config_file(explicit_path)
    else:
        file_data = {}
        for candidate in _DEFAULT_CONFIG_LOCATIONS:
            file_data = _read_config_file(candidate)
            if any(file_data.values()):
                break

    sections: Dict[str, Any] = {}
    for name, section in _SECTIONS.items():
        data = dict(file_data.get(name, {}))
        data.update(_env_overrides(name, section))
        sections[name] = _build_section(section, data)
    return AppConfig(**sections)


def save_config(config: AppConfig, path: Optional[Path] = None) -> Path:
    """Persist ``config`` as JSON and return the target path."""

    target = resolve_config_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    data = {name: asdict(getattr(config, name)) for name in _SECTIONS}
    with target.open("w", encoding="utf8") as fh:
        json.dump(data, fh, ensure_ascii=False, indent=2, sort_keys=True)
        fh.write("\n")
    return target


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
