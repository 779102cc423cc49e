"""
Where the canonical reference drawings come from.

The pixel sets themselves are precomputed assets, produced outside of this service.
"""

import json
import logging
from pathlib import Path
from typing import Mapping, Protocol

from pydantic import BaseModel, TypeAdapter, ValidationError

from src.core.exceptions import ShapeAssetError
from src.core.shared_types import ShapeTitle
from src.shapes.shape import Pixel

logger = logging.getLogger(__name__)


class ShapeLibrary(Protocol):
    """Lookup of the reference pixel set per shape title"""

    def pixels_for(self, title: ShapeTitle) -> list[Pixel]:
        """Canonical pixels of the reference drawing for `title`."""
        ...


class InMemoryShapeLibrary:
    """Pixel sets kept in a dictionary. Titles without an entry have an empty drawing."""

    def __init__(self, shapes: Mapping[ShapeTitle, list[Pixel]] | None = None) -> None:
        self._shapes: dict[ShapeTitle, list[Pixel]] = dict(shapes or {})

    def pixels_for(self, title: ShapeTitle) -> list[Pixel]:
        return list(self._shapes.get(title, []))


class _PixelEntry(BaseModel):
    x: float
    y: float


# Asset files may hold either [[x, y], ...] or [{"x": .., "y": ..}, ...]
_ASSET_ADAPTER = TypeAdapter(list[tuple[float, float] | _PixelEntry])


def asset_filename(title: ShapeTitle) -> str:
    """'Christmas Tree' -> 'christmas_tree.json'"""
    return f"{title.value.lower().replace(' ', '_')}.json"


class JsonShapeLibrary:
    """Reads one JSON file per shape title from a directory. Files are parsed once and cached."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self._cache: dict[ShapeTitle, list[Pixel]] = {}

    def pixels_for(self, title: ShapeTitle) -> list[Pixel]:
        if title not in self._cache:
            self._cache[title] = self._load(title)
        return list(self._cache[title])

    def _load(self, title: ShapeTitle) -> list[Pixel]:
        path = self.directory / asset_filename(title)
        try:
            raw = json.loads(path.read_text())
            entries = _ASSET_ADAPTER.validate_python(raw)
        except FileNotFoundError as e:
            raise ShapeAssetError(f"No pixel data for {title!s} at {path}") from e
        except (json.JSONDecodeError, ValidationError) as e:
            raise ShapeAssetError(f"Invalid pixel data for {title!s} in {path}: {e}") from e

        pixels = [
            Pixel(entry.x, entry.y) if isinstance(entry, _PixelEntry) else Pixel(*entry)
            for entry in entries
        ]
        logger.debug("Loaded %d pixels for %s from %s", len(pixels), title, path)
        return pixels
