"""Persistence helpers built on SQLAlchemy."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, Sequence
import logging

from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..core.types import ConstituencyPrediction, ElectoralRecord, Epoch, PredictionStats, SeatRange
from .models import Base, ElectoralRecordModel, PredictionModel, PredictionRunModel

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RunOverview:
    """Lightweight representation of a persisted prediction run."""

    identifier: int
    created_at: datetime | None
    tracked_party: str
    opposing_party: str
    prediction_count: int
    tracked_leading: int
    opposing_leading: int
    swing_seats: int


@dataclass(slots=True)
class StoredRun:
    """A prediction run loaded back from the database."""

    identifier: int
    created_at: datetime | None
    news_sentiment_pct: float
    ground_report_pct: float
    signal_count: int
    stats: PredictionStats
    predictions: tuple[ConstituencyPrediction, ...]


def _stats_to_dict(stats: PredictionStats) -> Dict[str, Any]:
    return asdict(stats)


def _stats_from_dict(data: Dict[str, Any]) -> PredictionStats:
    payload = dict(data)
    payload["tracked_seats"] = SeatRange(**payload["tracked_seats"])
    payload["opposing_seats"] = SeatRange(**payload["opposing_seats"])
    return PredictionStats(**payload)


def _record_from_model(model: ElectoralRecordModel) -> ElectoralRecord:
    return ElectoralRecord(
        constituency_id=model.constituency_id,
        constituency_name=model.constituency_name,
        district=model.district,
        epoch=Epoch(model.epoch),
        party_share=dict(model.party_share),
        winner=model.winner,
        margin=model.margin,
        total_votes=model.total_votes,
        synthesized=model.synthesized,
    )


class Storage:
    """Wrapper around SQLAlchemy to store electoral records and prediction runs."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def upsert_records(self, records: Iterable[ElectoralRecord]) -> int:
        """Insert or update records keyed by constituency and epoch."""

        count = 0
        with self.session() as session:
            for record in records:
                stmt = select(ElectoralRecordModel).where(
                    ElectoralRecordModel.constituency_id == record.constituency_id,
                    ElectoralRecordModel.epoch == record.epoch.value,
                )
                model = session.scalars(stmt).first()
                if model is None:
                    model = ElectoralRecordModel(
                        constituency_id=record.constituency_id,
                        epoch=record.epoch.value,
                    )
                    session.add(model)
                model.constituency_name = record.constituency_name
                model.district = record.district
                model.party_share = dict(record.party_share)
                model.winner = record.winner
                model.margin = record.margin
                model.total_votes = record.total_votes
                model.synthesized = record.synthesized
                count += 1
            session.flush()
        LOGGER.debug("Stored %s electoral records", count)
        return count

    def count_records(self) -> int:
        with self.session() as session:
            return session.scalar(select(func.count(ElectoralRecordModel.id))) or 0

    def load_records(self) -> list[ElectoralRecord]:
        with self.session() as session:
            stmt = select(ElectoralRecordModel).order_by(
                ElectoralRecordModel.constituency_id, ElectoralRecordModel.epoch
            )
            return [_record_from_model(model) for model in session.scalars(stmt)]

    def save_run(
        self,
        predictions: Sequence[ConstituencyPrediction],
        stats: PredictionStats,
        *,
        news_sentiment_pct: float,
        ground_report_pct: float,
        signal_count: int = 0,
    ) -> int:
        """Persist a finished run and return its identifier."""

        if predictions:
            tracked_party, opposing_party = predictions[0].tracked_party, predictions[0].opposing_party
        else:
            tracked_party, opposing_party = "", ""
        with self.session() as session:
            run = PredictionRunModel(
                tracked_party=tracked_party,
                opposing_party=opposing_party,
                news_sentiment_pct=news_sentiment_pct,
                ground_report_pct=ground_report_pct,
                signal_count=signal_count,
                stats=_stats_to_dict(stats),
            )
            for prediction in predictions:
                run.predictions.append(
                    PredictionModel(
                        constituency_id=prediction.constituency_id,
                        tracked_probability=prediction.tracked_probability,
                        opposing_probability=prediction.opposing_probability,
                        margin=prediction.margin,
                        payload=prediction.to_dict(),
                    )
                )
            session.add(run)
            session.flush()
            LOGGER.info("Stored prediction run %s with %s predictions", run.id, len(predictions))
            return run.id

    def load_run(self, run_id: int) -> StoredRun:
        with self.session() as session:
            run = session.get(PredictionRunModel, run_id)
            if run is None:
                raise ValueError(f"Prediction run {run_id} not found")
            stmt = select(PredictionModel).where(PredictionModel.run_id == run_id).order_by(PredictionModel.id)
            predictions = tuple(
                ConstituencyPrediction.from_dict(model.payload) for model in session.scalars(stmt)
            )
            return StoredRun(
                identifier=run.id,
                created_at=run.created_at,
                news_sentiment_pct=run.news_sentiment_pct,
                ground_report_pct=run.ground_report_pct,
                signal_count=run.signal_count,
                stats=_stats_from_dict(run.stats),
                predictions=predictions,
            )

    def dispose(self) -> None:
        """Dispose the underlying SQLAlchemy engine."""

        self._engine.dispose()

    def list_runs(self, limit: int = 25) -> list[RunOverview]:
        """Return the most recent prediction runs, newest first."""

        with self.session() as session:
            counts = (
                select(
                    PredictionModel.run_id,
                    func.count(PredictionModel.id).label("prediction_count"),
                )
                .group_by(PredictionModel.run_id)
                .subquery()
            )
            stmt = (
                select(PredictionRunModel, counts.c.prediction_count)
                .outerjoin(counts, counts.c.run_id == PredictionRunModel.id)
                .order_by(
                    PredictionRunModel.created_at.desc().nullslast(),
                    PredictionRunModel.id.desc(),
                )
                .limit(limit)
            )
            overview = []
            for run, prediction_count in session.execute(stmt).all():
                stats = run.stats or {}
                overview.append(
                    RunOverview(
                        identifier=run.id,
                        created_at=run.created_at,
                        tracked_party=run.tracked_party,
                        opposing_party=run.opposing_party,
                        prediction_count=prediction_count or 0,
                        tracked_leading=stats.get("tracked_leading", 0),
                        opposing_leading=stats.get("opposing_leading", 0),
                        swing_seats=stats.get("swing_seats", 0),
                    )
                )
            return overview


def create_storage(database_url: str, *, echo: bool = False) -> Storage:
    engine = create_engine(database_url, echo=echo, future=True)
    storage = Storage(engine)
    storage.ensure_schema()
    return storage


__all__ = ["RunOverview", "Storage", "StoredRun", "create_storage"]
