"""
A drawn (or reference) figure, and how two of them are compared.

(placed in its own module as the catalog, the library and the session all need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from src.core.exceptions import ShapeMismatchError
from src.core.models import PixelPair
from src.core.shared_types import Difficulty, ShapeTitle


@dataclass(frozen=True)
class Pixel:
    x: float
    y: float

    @classmethod
    def from_pair(cls, pair: PixelPair) -> Pixel:
        return cls(pair[0], pair[1])

    def to_pair(self) -> PixelPair:
        return (self.x, self.y)


@dataclass
class Shape:
    title: ShapeTitle
    difficulty: Difficulty
    pixels: list[Pixel] = field(default_factory=list)

    def add_pixels(self, new_pixels: Iterable[Pixel]) -> None:
        """
        Replace the drawing with `new_pixels`.

        Clients resend everything drawn so far on every submission, so this is a snapshot and never an append.
        """
        self.pixels = list(new_pixels)

    def accuracy(self, submitted: Shape) -> float:
        """
        Score `submitted` against this (reference) shape.
        ----

        Every submitted pixel that also appears in this shape counts as a match, every other one as a miss:
        (matches - misses) / number of pixels in this shape

        NOTE the result is not clamped. Scribbling outside the figure can push it below zero.
        """
        if self.title != submitted.title or self.difficulty != submitted.difficulty:
            raise ShapeMismatchError(
                f"Cannot compare a {submitted.difficulty} {submitted.title!s} with a {self.difficulty} {self.title!s}."
            )

        if not self.pixels:
            return 0.0

        reference = set(self.pixels)
        matches = sum(1 for pixel in submitted.pixels if pixel in reference)
        misses = len(submitted.pixels) - matches
        return (matches - misses) / len(self.pixels)

    def pixel_pairs(self) -> list[PixelPair]:
        return [pixel.to_pair() for pixel in self.pixels]
