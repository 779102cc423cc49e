"""
Type definitions used across layers
"""

from enum import IntEnum, StrEnum


class SessionStatus(StrEnum):
    WAITING_TO_START = "WAITING_TO_START"
    IN_PROGRESS = "IN_PROGRESS"
    GAME_STARTED = "GAME_STARTED"
    OVER = "OVER"


class Difficulty(StrEnum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class ShapeTitle(StrEnum):
    CIRCLE = "Circle"
    SQUARE = "Square"
    STAR = "Star"
    UMBRELLA = "Umbrella"
    HOUSE = "House"
    CHRISTMAS_TREE = "Christmas Tree"
    HELICOPTER = "Helicopter"
    CAR = "Car"
    HUSKY = "Husky"


class PlayerSlot(IntEnum):
    """Which side of the match a submitted drawing belongs to."""

    ONE = 1
    TWO = 2


DEFAULT_DIFFICULTY = Difficulty.EASY
