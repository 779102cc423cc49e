"""Test doubles shared by several test modules."""

from typing import Sequence

from src.core.shared_types import ShapeTitle
from src.shapes.shape import Pixel

CIRCLE_PIXELS = [Pixel(0, 0), Pixel(1, 1), Pixel(2, 2)]


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def first_title(titles: Sequence[ShapeTitle]) -> ShapeTitle:
    """Deterministic stand-in for random.choice"""
    return titles[0]
