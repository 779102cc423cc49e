"""Unit tests for src/shapes/shape.py"""

import pytest

from src.core.exceptions import GameError, ShapeMismatchError
from src.core.shared_types import Difficulty, ShapeTitle
from src.shapes.shape import Pixel, Shape

SQUARE_PIXELS = [
    Pixel(3, 3),
    Pixel(3, 4),
    Pixel(3, 5),
    Pixel(4, 4),
    Pixel(5, 5),
    Pixel(9, 10),
    Pixel(3, 1),
]


@pytest.fixture
def square() -> Shape:
    return Shape(ShapeTitle.SQUARE, Difficulty.EASY, list(SQUARE_PIXELS))


# -- ADD PIXELS --
def test_add_single_pixel_replaces_drawing(square: Shape) -> None:
    """A submission is a snapshot of everything drawn so far: earlier pixels are dropped."""
    assert len(square.pixels) == 7
    square.add_pixels([Pixel(3, 9)])
    assert square.pixels == [Pixel(3, 9)]


def test_add_multiple_pixels_keeps_order(square: Shape) -> None:
    square.add_pixels([Pixel(3, 9), Pixel(3, 10)])
    assert square.pixels == [Pixel(3, 9), Pixel(3, 10)]


def test_add_pixels_copies_input(square: Shape) -> None:
    """Mutating the submitted list afterwards must not change the drawing."""
    submitted = [Pixel(1, 1)]
    square.add_pixels(submitted)
    submitted.append(Pixel(2, 2))
    assert square.pixels == [Pixel(1, 1)]


# -- ACCURACY --
@pytest.mark.parametrize(
    "other",
    [
        Shape(ShapeTitle.UMBRELLA, Difficulty.EASY, list(SQUARE_PIXELS)),
        Shape(ShapeTitle.SQUARE, Difficulty.HARD, list(SQUARE_PIXELS)),
    ],
)
def test_accuracy_of_different_shapes_raises(square: Shape, other: Shape) -> None:
    """Comparing a square with an umbrella (or with a square of another difficulty) is a usage error."""
    with pytest.raises(ShapeMismatchError):
        _ = square.accuracy(other)
    with pytest.raises(GameError):
        _ = other.accuracy(square)


def test_accuracy_identical_shapes(square: Shape) -> None:
    assert square.accuracy(square) == 1


def test_accuracy_identical_with_duplicates() -> None:
    """Every submitted pixel matches itself, duplicates included."""
    shape = Shape(ShapeTitle.STAR, Difficulty.EASY, [Pixel(1, 1), Pixel(1, 1)])
    assert shape.accuracy(shape) == 1


def test_accuracy_without_similarities_is_negative(square: Shape) -> None:
    other = Shape(
        ShapeTitle.SQUARE, Difficulty.EASY, [Pixel(0, 0), Pixel(0, 1), Pixel(0, 2)]
    )
    assert square.accuracy(other) == pytest.approx(-3 / 7)


def test_accuracy_with_some_similarities(square: Shape) -> None:
    other = Shape(
        ShapeTitle.SQUARE,
        Difficulty.EASY,
        [
            Pixel(0, 0),
            Pixel(0, 1),
            Pixel(3, 3),
            Pixel(3, 4),
            Pixel(3, 5),
        ],
    )
    assert square.accuracy(other) == pytest.approx((3 - 2) / 7)


def test_accuracy_empty_submission(square: Shape) -> None:
    assert square.accuracy(Shape(ShapeTitle.SQUARE, Difficulty.EASY)) == 0


def test_accuracy_empty_reference() -> None:
    reference = Shape(ShapeTitle.CAR, Difficulty.HARD)
    drawing = Shape(ShapeTitle.CAR, Difficulty.HARD, [Pixel(1, 2)])
    assert reference.accuracy(drawing) == 0.0


def test_accuracy_is_not_clamped(square: Shape) -> None:
    """Way more misses than reference pixels: far below -1."""
    scribble = Shape(
        ShapeTitle.SQUARE, Difficulty.EASY, [Pixel(100, i) for i in range(21)]
    )
    assert square.accuracy(scribble) == pytest.approx(-3.0)


def test_accuracy_is_order_independent(square: Shape) -> None:
    drawing = Shape(ShapeTitle.SQUARE, Difficulty.EASY, [Pixel(3, 3), Pixel(0, 0)])
    reversed_drawing = Shape(
        ShapeTitle.SQUARE, Difficulty.EASY, list(reversed(drawing.pixels))
    )
    assert square.accuracy(drawing) == square.accuracy(reversed_drawing)


# -- PIXEL --
def test_pixel_pair_roundtrip() -> None:
    assert Pixel.from_pair((2, 5)).to_pair() == (2, 5)
    assert Pixel(2, 5) == Pixel(2.0, 5.0)
