from uuid import UUID, uuid4

import pytest

from src.api.models import (
    JoinSessionCommand,
    LeaveSessionCommand,
    MoveModel,
    PixelModel,
    SetDifficultyCommand,
    StartSessionCommand,
    SubmitPixelsCommand,
    parse_command,
)
from src.core.exceptions import InvalidCommandError, InvalidRequestError
from src.core.shared_types import Difficulty, PlayerSlot


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - PixelModel --
def test_valid_pixel() -> None:
    pixel = PixelModel(x=3, y=-1.5)
    assert (pixel.x, pixel.y) == (3.0, -1.5)


@pytest.mark.parametrize("coordinate", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_pixel(coordinate: float) -> None:
    """Coordinates must be actual numbers to be compared against the reference."""
    with pytest.raises(InvalidRequestError):
        _ = PixelModel(x=coordinate, y=0)


def test_move_with_unknown_slot() -> None:
    with pytest.raises(ValueError):
        _ = MoveModel(player_slot=3, pixels=[])


# -- Parsing - commands off the wire --
def test_parse_join() -> None:
    assert isinstance(parse_command({"type": "JoinSession"}), JoinSessionCommand)


def test_parse_commands_with_session(mock_id: UUID) -> None:
    start = parse_command({"type": "StartSession", "session_id": str(mock_id)})
    leave = parse_command({"type": "LeaveSession", "session_id": str(mock_id)})
    difficulty = parse_command(
        {"type": "SetDifficulty", "session_id": str(mock_id), "difficulty": "Medium"}
    )

    assert start == StartSessionCommand(session_id=mock_id)
    assert leave == LeaveSessionCommand(session_id=mock_id)
    assert isinstance(difficulty, SetDifficultyCommand)
    assert difficulty.difficulty == Difficulty.MEDIUM


def test_parse_submit_pixels(mock_id: UUID) -> None:
    command = parse_command(
        {
            "type": "SubmitPixels",
            "session_id": str(mock_id),
            "move": {"player_slot": 2, "pixels": [{"x": 1, "y": 2}, {"x": 3, "y": 4}]},
        }
    )
    assert isinstance(command, SubmitPixelsCommand)
    assert command.move.player_slot == PlayerSlot.TWO
    assert command.move.pixels == [PixelModel(x=1, y=2), PixelModel(x=3, y=4)]


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "Resign"},
        {"session_id": "missing type"},
        {},
        "JoinSession",
        None,
        ["JoinSession"],
    ],
)
def test_parse_unknown_command(payload: object) -> None:
    with pytest.raises(InvalidCommandError):
        _ = parse_command(payload)


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "StartSession"},  # no session id
        {"type": "LeaveSession", "session_id": "not-a-uuid"},
        {"type": "SetDifficulty", "session_id": str(uuid4()), "difficulty": "Impossible"},
        {
            "type": "SubmitPixels",
            "session_id": str(uuid4()),
            "move": {"player_slot": 1, "pixels": [{"x": "left", "y": 0}]},
        },
    ],
)
def test_parse_malformed_command(payload: dict) -> None:
    with pytest.raises(InvalidRequestError):
        _ = parse_command(payload)
