"""Wire settings, logging, shape assets and persistence into a ready-to-use dispatcher for one area."""

import logging
import random
import time
from typing import Optional

from src.core.config import Settings, get_settings
from src.core.logging_conf import init_logging
from src.db.database import init_db, make_engine
from src.db.sql_repository import SQLMatchHistoryRepository
from src.services.session_dispatcher import SessionDispatcher
from src.shapes.catalog import Chooser, DifficultyCatalog
from src.shapes.library import InMemoryShapeLibrary, JsonShapeLibrary, ShapeLibrary
from src.shapes.session import Clock

logger = logging.getLogger(__name__)


def build_shape_library(settings: Settings) -> ShapeLibrary:
    if settings.shape_assets_dir is None:
        logger.warning("SHAPE_ASSETS_DIR not set, reference shapes will be empty")
        return InMemoryShapeLibrary()
    return JsonShapeLibrary(settings.shape_assets_dir)


def build_dispatcher(
    area_id: str,
    settings: Optional[Settings] = None,
    clock: Clock = time.time,
    chooser: Chooser = random.choice,
) -> SessionDispatcher:
    settings = settings or get_settings()
    init_logging(settings.log_level)

    catalog = DifficultyCatalog.from_settings(
        settings, build_shape_library(settings), chooser
    )
    session_factory = init_db(make_engine(settings.database_url))
    repository = SQLMatchHistoryRepository(session_factory)

    logger.info("Dispatcher ready for area %s", area_id)
    return SessionDispatcher(area_id, catalog, clock=clock, repository=repository)
