"""Persistent evaluation history backed by SQLAlchemy."""

from __future__ import annotations

import csv
from pathlib import Path

import pendulum
import structlog
from sqlalchemy import Integer, String, create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from .schemas import HistoryEntry

DEFAULT_DATABASE_URL = "sqlite:///smarthire_history.db"
CSV_HEADER = ("id", "filename", "score", "top_job", "created_at")


class Base(DeclarativeBase):
    pass


class ResumeHistoryRecord(Base):
    """One row per scored upload."""

    __tablename__ = "resume_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String(255))
    score: Mapped[int] = mapped_column(Integer)
    top_job: Mapped[str] = mapped_column(String(100))
    tier: Mapped[str | None] = mapped_column(String(16), nullable=True)
    target_role: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[str] = mapped_column(String(40), index=True)


class HistoryStore:
    """Append, list, clear and export evaluation history rows."""

    def __init__(self, database_url: str | None = None, *, engine: Engine | None = None) -> None:
        self._engine = engine or create_engine(database_url or DEFAULT_DATABASE_URL)
        Base.metadata.create_all(self._engine)
        self._sessions = sessionmaker(self._engine, expire_on_commit=False)
        self._logger = structlog.get_logger(__name__)

    @property
    def engine(self) -> Engine:
        return self._engine

    def add(
        self,
        *,
        filename: str,
        score: int,
        top_job: str,
        tier: str | None = None,
        target_role: str | None = None,
        created_at: str | None = None,
    ) -> HistoryEntry:
        record = ResumeHistoryRecord(
            filename=filename,
            score=score,
            top_job=top_job,
            tier=tier,
            target_role=target_role,
            created_at=created_at or pendulum.now("UTC").to_iso8601_string(),
        )
        with self._sessions() as session:
            session.add(record)
            session.commit()
            entry = HistoryEntry.model_validate(record)
        self._logger.debug("history.added", id=entry.id, filename=filename, score=score)
        return entry

    def list_entries(self, *, limit: int | None = None) -> list[HistoryEntry]:
        """Return entries newest first."""
        stmt = select(ResumeHistoryRecord).order_by(
            ResumeHistoryRecord.created_at.desc(),
            ResumeHistoryRecord.id.desc(),
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._sessions() as session:
            return [HistoryEntry.model_validate(row) for row in session.scalars(stmt)]

    def clear(self) -> int:
        """Delete every entry and return how many were removed."""
        with self._sessions() as session:
            result = session.execute(delete(ResumeHistoryRecord))
            session.commit()
        removed = result.rowcount or 0
        self._logger.info("history.cleared", removed=removed)
        return removed

    def export_csv(self, path: str | Path) -> int:
        """Write the history as CSV (newest first) and return the row count."""
        entries = self.list_entries()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(CSV_HEADER)
            for entry in entries:
                writer.writerow([entry.id, entry.filename, entry.score, entry.top_job, entry.created_at])
        self._logger.info("history.exported", path=str(path), rows=len(entries))
        return len(entries)

    def close(self) -> None:
        self._engine.dispose()


__all__ = ["CSV_HEADER", "DEFAULT_DATABASE_URL", "HistoryStore", "ResumeHistoryRecord"]
