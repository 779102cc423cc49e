"""Runtime settings, read from the environment (and a local .env file if present)."""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Final, Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL: Final = "sqlite:///./draw_the_perfect_shape.db"
LOG_LEVELS: Final = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    easy_round_seconds: float = 10.0
    medium_round_seconds: float = 15.0
    hard_round_seconds: float = 20.0
    shape_assets_dir: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"LOG_LEVEL is invalid: {log_level!r}. Pick one from {','.join(LOG_LEVELS)}"
            )

        assets_dir = os.getenv("SHAPE_ASSETS_DIR")
        return cls(
            database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
            log_level=log_level,
            easy_round_seconds=_seconds("EASY_ROUND_SECONDS", 10.0),
            medium_round_seconds=_seconds("MEDIUM_ROUND_SECONDS", 15.0),
            hard_round_seconds=_seconds("HARD_ROUND_SECONDS", 20.0),
            shape_assets_dir=Path(assets_dir) if assets_dir else None,
        )


def _seconds(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{name} is not a number: {raw}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive: {raw}")
    return value


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
