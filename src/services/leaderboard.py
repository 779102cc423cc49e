"""Aggregate an area's match history into leaderboard rows."""

from dataclasses import dataclass
from typing import Iterable, Optional

from src.api.models import LeaderboardRow
from src.core.models import MatchResult
from src.core.shared_types import Difficulty


@dataclass
class _PlayerStats:
    wins: int = 0
    losses: int = 0
    best_accuracy: float = 0.0


def build_leaderboard(
    results: Iterable[MatchResult],
    difficulty: Optional[Difficulty] = None,
    search: str = "",
) -> list[LeaderboardRow]:
    """
    One row per (player, difficulty): wins, losses and best accuracy (as a rounded percentage, never below 0).
    ----

    Optionally keep only one difficulty and/or players whose name contains `search` (case-insensitive).
    Most wins first; ties keep the order in which players first appeared in the history.
    """
    stats: dict[tuple[str, Difficulty], _PlayerStats] = {}
    for result in results:
        result_difficulty = Difficulty(result.difficulty)
        for player, score in result.scores.items():
            entry = stats.setdefault((player, result_difficulty), _PlayerStats())
            entry.wins += score.win
            entry.losses += 1 - score.win
            entry.best_accuracy = max(entry.best_accuracy, score.accuracy)

    rows = [
        LeaderboardRow(
            difficulty=row_difficulty,
            player=player,
            wins=entry.wins,
            losses=entry.losses,
            accuracy=round(entry.best_accuracy * 100),
        )
        for (player, row_difficulty), entry in stats.items()
        if (difficulty is None or row_difficulty == difficulty)
        and search.lower() in player.lower()
    ]
    rows.sort(key=lambda row: row.wins, reverse=True)
    return rows
