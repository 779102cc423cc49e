"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBMatchResult(Base):
    __tablename__ = "match_results"
    id: Mapped[int] = mapped_column(primary_key=True)
    session_id: Mapped[UUID] = mapped_column(unique=True)
    area_id: Mapped[str] = mapped_column(index=True)
    difficulty: Mapped[str]
    # {display name: {"win": 0|1, "accuracy": float}}
    scores: Mapped[dict[str, dict[str, float]]] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
