"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

# Type aliases to make the models easier to read
PlayerId = str
PlayerName = str
PixelPair = tuple[float, float]


@dataclass
class SessionModel:
    """Transport-safe representation of one drawing match, used between Service, API and Game layers."""

    session_id: UUID
    status: str
    difficulty: str
    round_budget: float
    last_timestamp: float
    player1_id: Optional[PlayerId] = None
    player2_id: Optional[PlayerId] = None
    shape_title: Optional[str] = None
    reference_pixels: Optional[list[PixelPair]] = None
    player1_pixels: Optional[list[PixelPair]] = None
    player2_pixels: Optional[list[PixelPair]] = None
    player1_accuracy: Optional[float] = None
    player2_accuracy: Optional[float] = None
    winner_id: Optional[PlayerId] = None


@dataclass(frozen=True)
class PlayerScore:
    win: int
    accuracy: float


@dataclass
class MatchResult:
    """One finished match as it appears in an area's history."""

    session_id: UUID
    difficulty: str
    scores: dict[PlayerName, PlayerScore] = field(default_factory=dict)


@dataclass(frozen=True)
class Participant:
    """An occupant of the area, as known to the town's player registry."""

    id: PlayerId
    display_name: PlayerName
