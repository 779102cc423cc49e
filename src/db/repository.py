"""Protocol repository for finished matches (SQL Alchemy implementation in sql_repository.py)"""

from typing import Protocol
from uuid import UUID

from src.core.models import MatchResult


class MatchHistoryRepository(Protocol):
    """Persistence layer orchestration"""

    def add_result(self, area_id: str, result: MatchResult) -> MatchResult:
        """Store the outcome of a finished match played in the given area."""
        ...

    def get_result(self, session_id: UUID) -> MatchResult | None:
        """Get a match result by session ID, if record exists."""
        ...

    def list_results(self, area_id: str) -> list[MatchResult]:
        """All results recorded for an area, oldest first."""
        ...
