"""Commands and Response models"""

import math
from typing import Annotated, Any, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field, TypeAdapter, ValidationError, field_validator

from src.core.exceptions import InvalidCommandError, InvalidRequestError
from src.core.shared_types import Difficulty, PlayerSlot, SessionStatus, ShapeTitle

PlayerName = str


# --- COMMAND MODELS ---
class PixelModel(BaseModel):
    x: float
    y: float

    @field_validator(*["x", "y"])
    @classmethod
    def validate_coordinate(cls, value: float) -> float:
        if not math.isfinite(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a pixel coordinate."
            )
        return value


class MoveModel(BaseModel):
    player_slot: PlayerSlot
    pixels: list[PixelModel]


class JoinSessionCommand(BaseModel):
    type: Literal["JoinSession"] = "JoinSession"


class SetDifficultyCommand(BaseModel):
    type: Literal["SetDifficulty"] = "SetDifficulty"
    session_id: UUID
    difficulty: Difficulty


class StartSessionCommand(BaseModel):
    type: Literal["StartSession"] = "StartSession"
    session_id: UUID


class SubmitPixelsCommand(BaseModel):
    type: Literal["SubmitPixels"] = "SubmitPixels"
    session_id: UUID
    move: MoveModel


class LeaveSessionCommand(BaseModel):
    type: Literal["LeaveSession"] = "LeaveSession"
    session_id: UUID


SessionCommand = Annotated[
    Union[
        JoinSessionCommand,
        SetDifficultyCommand,
        StartSessionCommand,
        SubmitPixelsCommand,
        LeaveSessionCommand,
    ],
    Field(discriminator="type"),
]

COMMAND_TYPES = (
    "JoinSession",
    "SetDifficulty",
    "StartSession",
    "SubmitPixels",
    "LeaveSession",
)

_COMMAND_ADAPTER: TypeAdapter[SessionCommand] = TypeAdapter(SessionCommand)


def parse_command(payload: Any) -> SessionCommand:
    """Turn a raw message coming off the wire into one of the command models."""
    if not isinstance(payload, dict) or payload.get("type") not in COMMAND_TYPES:
        kind = payload.get("type") if isinstance(payload, dict) else type(payload).__name__
        raise InvalidCommandError(f"Unknown command: {kind!r}")
    try:
        return _COMMAND_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise InvalidRequestError(
            f"Malformed {payload['type']} command: {e.error_count()} error(s)"
        ) from e


# --- RESPONSE MODELS ---
class JoinSessionResponse(BaseModel):
    session_id: UUID


class ShapeResponse(BaseModel):
    title: ShapeTitle
    difficulty: Difficulty
    pixels: list[PixelModel]


class SessionResponse(BaseModel):
    session_id: UUID
    status: SessionStatus
    difficulty: Difficulty
    round_budget: float
    player1_id: Optional[str]
    player2_id: Optional[str]
    reference_shape: Optional[ShapeResponse]
    player1_shape: Optional[ShapeResponse]
    player2_shape: Optional[ShapeResponse]
    player1_accuracy: Optional[float]
    player2_accuracy: Optional[float]
    winner_id: Optional[str]


class PlayerScoreResponse(BaseModel):
    win: int
    accuracy: float


class MatchResultResponse(BaseModel):
    session_id: UUID
    difficulty: Difficulty
    scores: dict[PlayerName, PlayerScoreResponse]


class AreaSnapshot(BaseModel):
    """Everything observers of an area get to see after each change."""

    area_id: str
    session: Optional[SessionResponse]
    history: list[MatchResultResponse]


class LeaderboardRow(BaseModel):
    difficulty: Difficulty
    player: PlayerName
    wins: int
    losses: int
    accuracy: int
