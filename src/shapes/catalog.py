"""
Difficulty tiers: which figures can be drawn at which difficulty, and how long a round lasts.
"""

import random
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Self, Sequence

from src.core.config import Settings
from src.core.shared_types import Difficulty, ShapeTitle
from src.shapes.library import ShapeLibrary
from src.shapes.shape import Shape

# Picks one title out of the candidates. Injected, so tests can be deterministic.
Chooser = Callable[[Sequence[ShapeTitle]], ShapeTitle]


@dataclass(frozen=True)
class DifficultyTier:
    titles: tuple[ShapeTitle, ...]
    round_budget: float


@dataclass(frozen=True)
class RoundConfiguration:
    reference_shape: Shape
    round_budget: float


TIER_TITLES: dict[Difficulty, tuple[ShapeTitle, ...]] = {
    Difficulty.EASY: (ShapeTitle.CIRCLE, ShapeTitle.SQUARE, ShapeTitle.STAR),
    Difficulty.MEDIUM: (
        ShapeTitle.UMBRELLA,
        ShapeTitle.HOUSE,
        ShapeTitle.CHRISTMAS_TREE,
    ),
    Difficulty.HARD: (ShapeTitle.HELICOPTER, ShapeTitle.CAR, ShapeTitle.HUSKY),
}

DEFAULT_TIERS: dict[Difficulty, DifficultyTier] = {
    Difficulty.EASY: DifficultyTier(TIER_TITLES[Difficulty.EASY], 10.0),
    Difficulty.MEDIUM: DifficultyTier(TIER_TITLES[Difficulty.MEDIUM], 15.0),
    Difficulty.HARD: DifficultyTier(TIER_TITLES[Difficulty.HARD], 20.0),
}


class DifficultyCatalog:
    def __init__(
        self,
        library: ShapeLibrary,
        tiers: Optional[Mapping[Difficulty, DifficultyTier]] = None,
        chooser: Chooser = random.choice,
    ) -> None:
        self.library = library
        self.tiers: dict[Difficulty, DifficultyTier] = dict(tiers or DEFAULT_TIERS)
        self.chooser = chooser

    @classmethod
    def from_settings(
        cls, settings: Settings, library: ShapeLibrary, chooser: Chooser = random.choice
    ) -> Self:
        """Same titles as the defaults, round budgets taken from configuration."""
        budgets = {
            Difficulty.EASY: settings.easy_round_seconds,
            Difficulty.MEDIUM: settings.medium_round_seconds,
            Difficulty.HARD: settings.hard_round_seconds,
        }
        tiers = {
            difficulty: DifficultyTier(TIER_TITLES[difficulty], budget)
            for difficulty, budget in budgets.items()
        }
        return cls(library, tiers, chooser)

    def round_budget(self, difficulty: Difficulty) -> float:
        return self.tiers[difficulty].round_budget

    def configure(self, difficulty: Difficulty) -> RoundConfiguration:
        """Roll a reference shape for `difficulty` and look up its canonical pixels."""
        tier = self.tiers[difficulty]
        title = self.chooser(tier.titles)
        reference = Shape(title, difficulty, self.library.pixels_for(title))
        return RoundConfiguration(reference_shape=reference, round_budget=tier.round_budget)
