"""SQLAlchemy models for electoral records and stored prediction runs."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative SQLAlchemy base class."""


class ElectoralRecordModel(Base):
    """Vote shares of one constituency in one election epoch."""

    __tablename__ = "electoral_records"
    __table_args__ = (UniqueConstraint("constituency_id", "epoch", name="uq_record_constituency_epoch"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    constituency_id: Mapped[str] = mapped_column(String(128), index=True)
    constituency_name: Mapped[str] = mapped_column(String(256))
    district: Mapped[str] = mapped_column(String(128), index=True)
    epoch: Mapped[str] = mapped_column(String(32))
    party_share: Mapped[Dict[str, float]] = mapped_column(JSON)
    winner: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    margin: Mapped[float] = mapped_column(Float, default=0.0)
    total_votes: Mapped[int] = mapped_column(Integer, default=0)
    synthesized: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


class PredictionRunModel(Base):
    """One execution of the prediction engine over the loaded constituencies."""

    __tablename__ = "prediction_runs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tracked_party: Mapped[str] = mapped_column(String(64))
    opposing_party: Mapped[str] = mapped_column(String(64))
    news_sentiment_pct: Mapped[float] = mapped_column(Float)
    ground_report_pct: Mapped[float] = mapped_column(Float)
    signal_count: Mapped[int] = mapped_column(Integer, default=0)
    stats: Mapped[Dict[str, Any]] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

    predictions: Mapped[List["PredictionModel"]] = relationship(
        back_populates="run", cascade="all, delete-orphan"
    )


class PredictionModel(Base):
    """Database representation of a single constituency prediction."""

    __tablename__ = "predictions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    run_id: Mapped[int] = mapped_column(Integer, ForeignKey("prediction_runs.id"), index=True)
    constituency_id: Mapped[str] = mapped_column(String(128), index=True)
    tracked_probability: Mapped[int] = mapped_column(Integer)
    opposing_probability: Mapped[int] = mapped_column(Integer)
    margin: Mapped[int] = mapped_column(Integer)
    payload: Mapped[Dict[str, Any]] = mapped_column(JSON)

    run: Mapped[PredictionRunModel] = relationship(back_populates="predictions")


__all__ = ["Base", "ElectoralRecordModel", "PredictionModel", "PredictionRunModel"]
