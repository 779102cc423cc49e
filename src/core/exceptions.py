"""
Custom exceptions.

Every error raised by the domain and service layers derives from GameError, so callers (transport layer, tests)
can catch a single type. The `kind` attribute is the stable code sent back to the client that issued the command.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    PLAYER_ALREADY_IN_SESSION = "PLAYER_ALREADY_IN_SESSION"
    PLAYER_NOT_IN_SESSION = "PLAYER_NOT_IN_SESSION"
    SHAPE_NOT_CONFIGURED = "SHAPE_NOT_CONFIGURED"
    GAME_NOT_IN_PROGRESS = "GAME_NOT_IN_PROGRESS"
    GAME_ID_MISMATCH = "GAME_ID_MISMATCH"
    INVALID_COMMAND = "INVALID_COMMAND"
    GAME_FULL = "GAME_FULL"
    INVALID_SESSION_STATE = "INVALID_SESSION_STATE"
    SHAPE_MISMATCH = "SHAPE_MISMATCH"
    SHAPE_ASSET = "SHAPE_ASSET"
    INVALID_REQUEST = "INVALID_REQUEST"
    REPOSITORY = "REPOSITORY"


class GameError(Exception):
    """Top-level exception for anything that went wrong while handling a game command."""

    kind: ErrorKind = ErrorKind.INVALID_REQUEST

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind.value)


# --- Session membership ---
class PlayerAlreadyInSessionError(GameError):
    kind = ErrorKind.PLAYER_ALREADY_IN_SESSION


class PlayerNotInSessionError(GameError):
    kind = ErrorKind.PLAYER_NOT_IN_SESSION


class GameFullError(GameError):
    kind = ErrorKind.GAME_FULL


# --- Session lifecycle ---
class GameNotInProgressError(GameError):
    kind = ErrorKind.GAME_NOT_IN_PROGRESS


class GameIdMismatchError(GameError):
    kind = ErrorKind.GAME_ID_MISMATCH


class InvalidSessionStateError(GameError):
    """Command is known, but not allowed in the session's current status."""

    kind = ErrorKind.INVALID_SESSION_STATE


# --- Shapes ---
class ShapeNotConfiguredError(GameError):
    kind = ErrorKind.SHAPE_NOT_CONFIGURED


class ShapeMismatchError(GameError):
    """Comparing two shapes that do not share title and difficulty."""

    kind = ErrorKind.SHAPE_MISMATCH


class ShapeAssetError(GameError):
    kind = ErrorKind.SHAPE_ASSET


# --- Boundary ---
class InvalidCommandError(GameError):
    kind = ErrorKind.INVALID_COMMAND


class InvalidRequestError(GameError):
    kind = ErrorKind.INVALID_REQUEST


class RepositoryError(GameError):
    kind = ErrorKind.REPOSITORY
