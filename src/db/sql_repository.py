"""Implementation of (MatchHistory)Repository using SQLAlchemy"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from src.core.exceptions import RepositoryError
from src.core.models import MatchResult, PlayerScore
from src.db.schema import DBMatchResult

logger = logging.getLogger(__name__)


class SQLMatchHistoryRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy. Every call opens (and closes) its own session."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self.session_factory = session_factory

    def add_result(self, area_id: str, result: MatchResult) -> MatchResult:
        """Store the outcome of a finished match played in the given area."""
        with self.session_factory() as db:
            result_db = DBMatchResult(
                session_id=result.session_id,
                area_id=area_id,
                difficulty=result.difficulty,
                scores={
                    name: {"win": score.win, "accuracy": score.accuracy}
                    for name, score in result.scores.items()
                },
            )
            db.add(result_db)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise RepositoryError(
                    f"Result for session {result.session_id} already recorded."
                ) from e
            except SQLAlchemyError as e:
                db.rollback()
                raise RepositoryError(
                    f"Could not store result of session {result.session_id}: {e}"
                ) from e
            db.refresh(result_db)
            logger.debug(
                "Stored result of session %s for area %s", result.session_id, area_id
            )
            return self._to_model(result_db)

    def get_result(self, session_id: UUID) -> MatchResult | None:
        """Get a match result by session ID, if record exists."""
        with self.session_factory() as db:
            result_db = self._fetch_result(db, session_id)
            if result_db:
                return self._to_model(result_db)
            return None

    def list_results(self, area_id: str) -> list[MatchResult]:
        """All results recorded for an area, oldest first."""
        query = (
            select(DBMatchResult)
            .where(DBMatchResult.area_id == area_id)
            .order_by(DBMatchResult.id)
        )
        with self.session_factory() as db:
            return [self._to_model(result_db) for result_db in db.scalars(query)]

    def _fetch_result(self, db: Session, session_id: UUID) -> DBMatchResult | None:
        query = select(DBMatchResult).where(DBMatchResult.session_id == session_id)
        return db.scalar(query)

    def _to_model(self, result_db: DBMatchResult) -> MatchResult:
        """Convert SQLAlchemy model to data transfer model."""
        return MatchResult(
            session_id=result_db.session_id,
            difficulty=result_db.difficulty,
            scores={
                name: PlayerScore(win=int(score["win"]), accuracy=float(score["accuracy"]))
                for name, score in result_db.scores.items()
            },
        )
