"""High level orchestration of one prediction run."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Literal, Mapping, Optional, Tuple, Union
import logging

from ..aggregation import AggregationResult, Granularity, SignalAggregator
from ..classification import TextClassifier, build_signal
from ..config import SignalConfig
from ..core.types import ConstituencyPrediction, FeedItem, PredictionStats, TextSignal
from ..database import Storage
from ..prediction import PredictionEngine, summarize
from ..records import ElectoralRecordStore
from ..registry import ConstituencyRegistry

LOGGER = logging.getLogger(__name__)

PipelineEventKind = Literal[
    "start",
    "classified",
    "aggregated",
    "predicted",
    "summarized",
    "stored",
    "finished",
    "error",
]


@dataclass(slots=True)
class PipelineEvent:
    """Progress notification emitted by :class:`PredictionPipeline`."""

    kind: PipelineEventKind
    message: str | None = None
    signal_count: int | None = None
    prediction_count: int | None = None
    run_id: int | None = None


ProgressCallback = Callable[[PipelineEvent], None]
FeedEntry = Union[FeedItem, Mapping[str, object]]


@dataclass(slots=True)
class PredictionRun:
    """Everything a single run produced."""

    signals: Tuple[TextSignal, ...]
    aggregation: AggregationResult
    predictions: Tuple[ConstituencyPrediction, ...]
    stats: PredictionStats
    news_sentiment_pct: float
    ground_report_pct: float
    run_id: int | None = None


class PredictionPipeline:
    """Classify a text feed, aggregate it and predict every constituency."""

    def __init__(
        self,
        store: ElectoralRecordStore,
        *,
        registry: Optional[ConstituencyRegistry] = None,
        engine: Optional[PredictionEngine] = None,
        classifier: Optional[TextClassifier] = None,
        signal_config: Optional[SignalConfig] = None,
        storage: Optional[Storage] = None,
    ) -> None:
        self._store = store
        self._registry = registry or store.registry()
        self._engine = engine or PredictionEngine()
        self._signal_config = signal_config or SignalConfig()
        self._classifier = classifier or TextClassifier(
            positive_threshold=self._signal_config.positive_threshold,
            negative_threshold=self._signal_config.negative_threshold,
        )
        self._storage = storage

    @property
    def registry(self) -> ConstituencyRegistry:
        return self._registry

    def classify(self, feed: Iterable[FeedEntry]) -> Tuple[TextSignal, ...]:
        return tuple(build_signal(item, self._registry, self._classifier) for item in feed)

    def aggregate(self, signals: Iterable[TextSignal]) -> AggregationResult:
        aggregator = SignalAggregator(
            self._registry, granularity=Granularity(self._signal_config.granularity)
        )
        return aggregator.aggregate(signals)

    def run(
        self,
        feed: Iterable[FeedEntry] = (),
        *,
        news_sentiment_pct: float = 50.0,
        ground_report_pct: float = 50.0,
        ground_reports: Optional[Mapping[str, float]] = None,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> PredictionRun:
        """Run classification, aggregation, prediction and persistence end-to-end."""

        self._notify(progress_callback, PipelineEvent(kind="start", message="Prediction run started"))
        try:
            signals = self.classify(feed)
            self._notify(
                progress_callback,
                PipelineEvent(
                    kind="classified",
                    message=f"Classified {len(signals)} signals",
                    signal_count=len(signals),
                ),
            )
            aggregation = self.aggregate(signals)
            self._notify(
                progress_callback,
                PipelineEvent(
                    kind="aggregated",
                    message=(
                        f"Aggregated signals for {len(aggregation.by_constituency)} constituencies, "
                        f"{aggregation.statewide.total} state-wide"
                    ),
                    signal_count=aggregation.total_signals,
                ),
            )

            signal_counts: Dict[str, int] = {
                cid: summary.total for cid, summary in aggregation.by_constituency.items()
            }
            news_by_constituency: Dict[str, float] = {}
            if self._signal_config.per_constituency_sentiment:
                tracked, opposing = self._engine.tracked_party, self._engine.opposing_party
                news_by_constituency = {
                    cid: summary.news_sentiment_percent(tracked, opposing)
                    for cid, summary in aggregation.by_constituency.items()
                    if summary.total
                }
            predictions = self._engine.predict_all(
                self._store.histories(),
                news_sentiment_pct,
                ground_report_pct,
                news_by_constituency=news_by_constituency,
                ground_reports=ground_reports,
                signal_counts=signal_counts,
            )
            self._notify(
                progress_callback,
                PipelineEvent(
                    kind="predicted",
                    message=f"Predicted {len(predictions)} constituencies",
                    prediction_count=len(predictions),
                ),
            )
            stats = summarize(predictions, self._engine.config)
            self._notify(
                progress_callback,
                PipelineEvent(
                    kind="summarized",
                    message=(
                        f"{stats.tracked_leading} tracked-leading, {stats.opposing_leading} "
                        f"opposing-leading, {stats.swing_seats} swing"
                    ),
                    prediction_count=stats.sample_size,
                ),
            )
            run_id = None
            if self._storage is not None:
                run_id = self._storage.save_run(
                    predictions,
                    stats,
                    news_sentiment_pct=news_sentiment_pct,
                    ground_report_pct=ground_report_pct,
                    signal_count=len(signals),
                )
                self._notify(
                    progress_callback,
                    PipelineEvent(kind="stored", message=f"Stored run {run_id}", run_id=run_id),
                )
        except Exception as exc:
            LOGGER.exception("Prediction pipeline failed: %s", exc)
            self._notify(progress_callback, PipelineEvent(kind="error", message=str(exc)))
            raise

        LOGGER.info(
            "Prediction run finished: %s signals, %s predictions", len(signals), len(predictions)
        )
        self._notify(
            progress_callback,
            PipelineEvent(
                kind="finished",
                message="Prediction run finished",
                signal_count=len(signals),
                prediction_count=len(predictions),
                run_id=run_id,
            ),
        )
        return PredictionRun(
            signals=signals,
            aggregation=aggregation,
            predictions=predictions,
            stats=stats,
            news_sentiment_pct=news_sentiment_pct,
            ground_report_pct=ground_report_pct,
            run_id=run_id,
        )

    @staticmethod
    def _notify(callback: Optional[ProgressCallback], event: PipelineEvent) -> None:
        if callback:
            callback(event)


__all__ = ["PipelineEvent", "PredictionPipeline", "PredictionRun", "ProgressCallback"]
